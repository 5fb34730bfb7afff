from __future__ import annotations

from pathlib import Path
from typing import Optional


class AssetManifestError(RuntimeError):
    """Base class for every failure raised while translating a manifest."""


class ManifestMissing(AssetManifestError):
    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        super().__init__(f"Manifest at {self.path} does not exist")


class MalformedManifest(AssetManifestError, ValueError):
    def __init__(self, reason: str, path: Optional[str | Path] = None) -> None:
        self.reason = reason
        self.path = None if path is None else str(path)
        message = reason if self.path is None else f"{self.path}: {reason}"
        super().__init__(message)


class ConfigError(AssetManifestError, ValueError):
    pass
