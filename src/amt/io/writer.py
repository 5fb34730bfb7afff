from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterable, List, TextIO, Union

from amt.errors import ConfigError
from amt.normalize.normalizer import AssetEntry

MACRO_TEMPLATE = '{{% ::Lucky::AssetHelpers::ASSET_MANIFEST["{key}"] = "{url}" %}}'
OUTPUT_FORMATS = ("macro", "json", "lines")


def format_macro_line(entry: AssetEntry) -> str:
    return MACRO_TEMPLATE.format(key=entry.logical_key, url=entry.resolved_url)


def to_mapping(entries: Iterable[AssetEntry]) -> Dict[str, str]:
    """Collapse entries into a dict. A repeated key keeps its last URL."""
    mapping: Dict[str, str] = {}
    for entry in entries:
        mapping[entry.logical_key] = entry.resolved_url
    return mapping


class AssetWriter:
    def __init__(self, output_format: str = "macro") -> None:
        if output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"Unknown output format {output_format!r}, expected one of {', '.join(OUTPUT_FORMATS)}"
            )
        self.output_format = output_format

    def render(self, entries: List[AssetEntry]) -> str:
        if self.output_format == "json":
            return json.dumps(to_mapping(entries), ensure_ascii=False, indent=2) + "\n"
        if self.output_format == "lines":
            lines = [f"{e.logical_key}\t{e.resolved_url}" for e in entries]
        else:
            lines = [format_macro_line(e) for e in entries]
        return "".join(line + "\n" for line in lines)

    def write(self, entries: List[AssetEntry], target: Union[str, Path, TextIO]) -> None:
        text = self.render(entries)
        if isinstance(target, (str, Path)):
            path = Path(target)
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(text)
        else:
            target.write(text)
