from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from amt.errors import ManifestMissing
from amt.utils.config import RetryConfig

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], None]
ExistsFn = Callable[[str], bool]


@dataclass
class RetryState:
    max_attempts: int
    delay_seconds: float
    attempts: int = 0

    @property
    def exhausted(self) -> bool:
        return self.attempts >= self.max_attempts


class ManifestWaiter:
    """Block until a manifest file exists, polling with a fixed delay.

    The bundler may still be writing the manifest when the build step starts.
    Up to ``max_attempts`` retries are made after the first check, so a path
    that never appears is checked ``max_attempts + 1`` times before
    ``ManifestMissing`` is raised.
    """

    def __init__(
        self,
        retry: Optional[RetryConfig] = None,
        sleep: SleepFn = time.sleep,
        exists: ExistsFn = os.path.exists,
    ) -> None:
        self.retry = retry or RetryConfig()
        self._sleep = sleep
        self._exists = exists

    def wait(self, path: str | Path) -> None:
        path = str(path)
        state = RetryState(max_attempts=self.retry.max_attempts, delay_seconds=self.retry.delay_seconds)
        while not self._exists(path):
            if state.exhausted:
                logger.warning("Manifest %s still missing after %d retries", path, state.attempts)
                raise ManifestMissing(path)
            self._sleep(state.delay_seconds)
            state.attempts += 1
            logger.debug("Manifest %s not found, retry %d/%d", path, state.attempts, state.max_attempts)


def wait_for_manifest(
    path: str | Path,
    max_attempts: int,
    delay_seconds: float,
    sleep: SleepFn = time.sleep,
    exists: ExistsFn = os.path.exists,
) -> None:
    waiter = ManifestWaiter(RetryConfig(max_attempts, delay_seconds), sleep=sleep, exists=exists)
    waiter.wait(path)
