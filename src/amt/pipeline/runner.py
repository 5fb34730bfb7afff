from __future__ import annotations

import logging
import os
import time
from typing import List, Optional

from amt.ingest.manifest_loader import ManifestDescriptor, load_manifest
from amt.ingest.waiter import ExistsFn, ManifestWaiter, SleepFn
from amt.normalize.normalizer import AssetEntry, normalize
from amt.utils.config import RetryConfig

logger = logging.getLogger(__name__)


def translate(
    descriptor: ManifestDescriptor,
    retry: Optional[RetryConfig] = None,
    sleep: SleepFn = time.sleep,
    exists: ExistsFn = os.path.exists,
) -> List[AssetEntry]:
    """Wait for the manifest, read it once and normalize it."""
    ManifestWaiter(retry, sleep=sleep, exists=exists).wait(descriptor.path)

    raw = load_manifest(descriptor.path)
    entries = normalize(raw, descriptor.build_system)
    logger.info(
        "Translated %s (%s) into %d asset entries",
        descriptor.path,
        descriptor.build_system.value,
        len(entries),
    )
    return entries
