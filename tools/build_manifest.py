from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from amt.errors import ConfigError, MalformedManifest, ManifestMissing
from amt.ingest.manifest_loader import ManifestDescriptor
from amt.io.writer import OUTPUT_FORMATS, AssetWriter
from amt.pipeline.runner import translate
from amt.utils.config import AppConfig


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Translate a bundler manifest into asset helper entries")
    parser.add_argument("manifest_path", nargs="?", help="Manifest file (default ./public/mix-manifest.json)")
    parser.add_argument("build_system", nargs="?", help="mix, vite or bun; anything else is treated as mix")
    parser.add_argument("--config", action="append", default=[], help="YAML config file, may be repeated")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, required=False)
    parser.add_argument("--output", required=False, help="Write to this file instead of stdout")
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        cfg = AppConfig.load(*args.config)
        descriptor = ManifestDescriptor.create(
            args.manifest_path or cfg.manifest_path,
            args.build_system or cfg.build_system,
        )
        writer = AssetWriter(args.format or cfg.output_format)
        entries = translate(descriptor, cfg.retry_config())
    except ManifestMissing as exc:
        print(str(exc), file=sys.stderr)
        print("Make sure you have compiled your assets", file=sys.stderr)
        raise SystemExit(1)
    except (MalformedManifest, ConfigError) as exc:
        print(str(exc), file=sys.stderr)
        raise SystemExit(1)

    writer.write(entries, args.output or sys.stdout)
    if args.output:
        print(f"Wrote {len(entries)} asset entries to {args.output}", file=sys.stderr)


if __name__ == "__main__":
    main()
