"""
Tests for model path resolution and GGUF discovery.
"""

from pathlib import Path

from local_llama_bridge.utils.model_discovery import discover_model_paths
from local_llama_bridge.utils.model_resolver import resolve_model_path


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"GGUF")
    return path


def test_absolute_path_returned_as_is(tmp_path):
    target = tmp_path / "missing.gguf"
    assert resolve_model_path(target, models_dir=tmp_path / "models") == target


def test_relative_path_found_in_cwd(tmp_path, monkeypatch):
    _touch(tmp_path / "local.gguf")
    monkeypatch.chdir(tmp_path)
    assert resolve_model_path("local.gguf", models_dir=tmp_path / "models") == (tmp_path / "local.gguf").resolve()


def test_relative_path_found_in_models_dir(tmp_path, monkeypatch):
    models = tmp_path / "models"
    _touch(models / "sub" / "tiny.gguf")
    monkeypatch.chdir(tmp_path)
    assert resolve_model_path("sub/tiny.gguf", models_dir=models) == (models / "sub" / "tiny.gguf").resolve()


def test_unresolved_relative_path_passed_through(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert resolve_model_path("nope.gguf", models_dir=tmp_path / "models") == Path("nope.gguf")


def test_discovery_lists_gguf_sorted_and_skips_caches(tmp_path):
    _touch(tmp_path / "b.gguf")
    _touch(tmp_path / "a" / "z.GGUF")
    _touch(tmp_path / "hf_cache" / "cached.gguf")
    _touch(tmp_path / "x.locks" / "locked.gguf")
    (tmp_path / "notes.txt").write_text("not a model", encoding="utf-8")

    found = discover_model_paths(tmp_path)
    assert found == [tmp_path / "a" / "z.GGUF", tmp_path / "b.gguf"]


def test_discovery_missing_directory(tmp_path):
    assert discover_model_paths(tmp_path / "absent") == []
