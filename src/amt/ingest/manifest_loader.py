from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from amt.errors import MalformedManifest
from amt.utils.config import DEFAULT_MANIFEST_PATH

logger = logging.getLogger(__name__)


class BuildSystem(str, Enum):
    MIX = "mix"
    VITE = "vite"
    BUN = "bun"

    @classmethod
    def parse(cls, value: Optional[str]) -> "BuildSystem":
        """Map a selector string to a build system; unknown values mean MIX."""
        if isinstance(value, BuildSystem):
            return value
        if value is None:
            return cls.MIX
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.MIX


@dataclass(frozen=True)
class ManifestDescriptor:
    path: str
    build_system: BuildSystem

    @classmethod
    def create(cls, path: Optional[str | Path] = None, build_system: Optional[str] = None) -> "ManifestDescriptor":
        resolved = os.path.abspath(os.path.expanduser(str(path or DEFAULT_MANIFEST_PATH)))
        return cls(path=resolved, build_system=BuildSystem.parse(build_system))


def load_manifest(path: str | Path) -> Any:
    """Read and parse a manifest file.

    Unreadable files, invalid UTF-8 and invalid JSON all raise MalformedManifest.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as exc:
        raise MalformedManifest(f"cannot read manifest: {exc.strerror or exc}", path=path) from exc
    try:
        raw = json.loads(data.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise MalformedManifest(f"invalid UTF-8: {exc}", path=path) from exc
    except json.JSONDecodeError as exc:
        raise MalformedManifest(f"invalid JSON: {exc}", path=path) from exc
    logger.debug("Loaded manifest %s (%d bytes)", path, len(data))
    return raw
