import pytest

from amt.errors import MalformedManifest
from amt.ingest.manifest_loader import BuildSystem
from amt.normalize.shapes import ManifestShape, classify


def test_classify_each_shape():
    assert classify({}, BuildSystem.MIX) is ManifestShape.MIX_FLAT
    assert classify({"url": "u", "inputs": {}}, BuildSystem.VITE) is ManifestShape.VITE_DEV
    assert classify({"inputs": {}}, BuildSystem.VITE) is ManifestShape.VITE_PROD
    assert classify({"inputs": {}, "outputs": {}}, BuildSystem.BUN) is ManifestShape.BUN_INPUTS
    assert classify({"outputs": {}}, BuildSystem.BUN) is ManifestShape.BUN_OUTPUTS
    assert classify({"/a.js": "/a.js"}, BuildSystem.BUN) is ManifestShape.FALLBACK


def test_mix_ignores_vite_and_bun_keys():
    assert classify({"url": "u", "inputs": {}}, "mix") is ManifestShape.MIX_FLAT


def test_classify_rejects_non_object_root():
    with pytest.raises(MalformedManifest):
        classify([], BuildSystem.BUN)


def test_build_system_parse():
    assert BuildSystem.parse("vite") is BuildSystem.VITE
    assert BuildSystem.parse(" BUN ") is BuildSystem.BUN
    assert BuildSystem.parse("webpack") is BuildSystem.MIX
    assert BuildSystem.parse(None) is BuildSystem.MIX
    assert BuildSystem.parse(BuildSystem.VITE) is BuildSystem.VITE
