from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from amt.errors import MalformedManifest
from amt.ingest.manifest_loader import BuildSystem


class ManifestShape(str, Enum):
    MIX_FLAT = "mix_flat"
    VITE_DEV = "vite_dev"
    VITE_PROD = "vite_prod"
    BUN_INPUTS = "bun_inputs"
    BUN_OUTPUTS = "bun_outputs"
    FALLBACK = "fallback"


def require_object(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise MalformedManifest(f"expected object at {where}, got {type(value).__name__}")
    return value


def require_string(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise MalformedManifest(f"expected string at {where}, got {type(value).__name__}")
    return value


def classify(raw: Any, build_system: BuildSystem | str) -> ManifestShape:
    """Pick the manifest variant from the build system and the root keys."""
    root = require_object(raw, "manifest root")
    build_system = BuildSystem.parse(build_system)

    if build_system is BuildSystem.VITE:
        # vite-plugin-dev-manifest writes {"url": ..., "inputs": {...}}
        if "url" in root and "inputs" in root:
            return ManifestShape.VITE_DEV
        return ManifestShape.VITE_PROD
    if build_system is BuildSystem.BUN:
        if "inputs" in root:
            return ManifestShape.BUN_INPUTS
        if "outputs" in root:
            return ManifestShape.BUN_OUTPUTS
        return ManifestShape.FALLBACK
    return ManifestShape.MIX_FLAT
