import json

import pytest

from amt.errors import MalformedManifest, ManifestMissing
from amt.ingest.manifest_loader import ManifestDescriptor
from amt.pipeline.runner import translate
from amt.utils.config import RetryConfig


def test_translate_vite_manifest(tmp_path):
    manifest = tmp_path / "manifest.json"
    manifest.write_text(
        json.dumps({"src/app.ts": {"src": "app.ts", "file": "assets/app-abc123.js"}}), encoding="utf-8"
    )
    entries = translate(ManifestDescriptor.create(manifest, "vite"), RetryConfig(0, 0.0))
    assert [e.as_tuple() for e in entries] == [("app.ts", "/assets/app-abc123.js")]


def test_translate_never_reads_missing_manifest(tmp_path, monkeypatch):
    def _fail(_path):
        raise AssertionError("manifest must not be loaded")

    monkeypatch.setattr("amt.pipeline.runner.load_manifest", _fail)
    sleeps = []
    with pytest.raises(ManifestMissing):
        translate(
            ManifestDescriptor.create(tmp_path / "missing.json", "mix"),
            RetryConfig(2, 0.25),
            sleep=sleeps.append,
        )
    assert sleeps == [0.25, 0.25]


def test_translate_array_manifest_is_malformed(tmp_path):
    manifest = tmp_path / "manifest.json"
    manifest.write_text('["app.js"]', encoding="utf-8")
    with pytest.raises(MalformedManifest):
        translate(ManifestDescriptor.create(manifest, "bun"), RetryConfig(0, 0.0))
