from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from amt.ingest.manifest_loader import BuildSystem
from amt.normalize.shapes import ManifestShape, classify, require_object, require_string

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetEntry:
    logical_key: str
    resolved_url: str

    def as_tuple(self) -> tuple[str, str]:
        return self.logical_key, self.resolved_url


def strip_src(path: str) -> str:
    return path[4:] if path.startswith("src/") else path


def strip_flat_key(key: str) -> str:
    # "/assets/js/app.js" => "js/app.js"
    if key.startswith("/"):
        key = key[1:]
    if key.startswith("assets/"):
        key = key[len("assets/"):]
    return key


def normalize_flat(root: Dict[str, Any]) -> List[AssetEntry]:
    return [
        AssetEntry(strip_flat_key(key), require_string(value, f"[{key!r}]"))
        for key, value in root.items()
    ]


def normalize_vite_dev(root: Dict[str, Any]) -> List[AssetEntry]:
    base_url = require_string(root["url"], "url")
    inputs = require_object(root["inputs"], "inputs")
    entries: List[AssetEntry] = []
    for name, value in inputs.items():
        path = require_string(value, f"inputs[{name!r}]")
        # The dev server serves the unstripped path, only the key loses src/.
        entries.append(AssetEntry(strip_src(path), base_url + path))
    return entries


def normalize_vite_prod(root: Dict[str, Any]) -> List[AssetEntry]:
    entries: List[AssetEntry] = []
    for key, value in root.items():
        # shared chunks
        if key.startswith("_"):
            continue
        chunk = require_object(value, f"[{key!r}]")
        if "src" not in chunk:
            continue
        output = require_string(chunk.get("file"), f"[{key!r}].file")
        entries.append(AssetEntry(strip_src(key), "/" + output))
    return entries


def normalize_bun_inputs(root: Dict[str, Any]) -> List[AssetEntry]:
    inputs = require_object(root["inputs"], "inputs")
    entries: List[AssetEntry] = []
    for key, value in inputs.items():
        descriptor = require_object(value, f"inputs[{key!r}]")
        if "output" not in descriptor:
            continue
        output = require_string(descriptor["output"], f"inputs[{key!r}].output")
        entries.append(AssetEntry(strip_src(key), "/" + output))
    return entries


def normalize_bun_outputs(root: Dict[str, Any]) -> List[AssetEntry]:
    outputs = require_object(root["outputs"], "outputs")
    entries: List[AssetEntry] = []
    for output_file, value in outputs.items():
        descriptor = require_object(value, f"outputs[{output_file!r}]")
        if "input" not in descriptor:
            continue
        source = require_string(descriptor["input"], f"outputs[{output_file!r}].input")
        entries.append(AssetEntry(strip_src(source), "/" + output_file))
    return entries


TRANSFORMS: Dict[ManifestShape, Callable[[Dict[str, Any]], List[AssetEntry]]] = {
    ManifestShape.MIX_FLAT: normalize_flat,
    ManifestShape.VITE_DEV: normalize_vite_dev,
    ManifestShape.VITE_PROD: normalize_vite_prod,
    ManifestShape.BUN_INPUTS: normalize_bun_inputs,
    ManifestShape.BUN_OUTPUTS: normalize_bun_outputs,
    ManifestShape.FALLBACK: normalize_flat,
}


def normalize(raw: Any, build_system: BuildSystem | str) -> List[AssetEntry]:
    """Translate a parsed manifest into ordered (logical key, URL) entries.

    Raises MalformedManifest if any part of the tree has the wrong type; no
    partial result is returned in that case.
    """
    shape = classify(raw, build_system)
    entries = TRANSFORMS[shape](raw)
    logger.debug("Normalized %s manifest into %d entries", shape.value, len(entries))
    return entries
