"""
Tests for the deterministic stub runtime.
"""

import pytest

from local_llama_bridge.model.base import (
    REASON_INVALID_FORMAT,
    REASON_TOKENIZE,
    REASON_UNKNOWN,
    ModelRuntimeError,
    check_gguf_file,
)
from local_llama_bridge.model.stub_runtime import StubModelRuntime


def test_greedy_is_deterministic_across_runtimes(gguf_file):
    a, b = StubModelRuntime(), StubModelRuntime()
    text_a = a.generate(a.load(gguf_file), "Hello", 5, 0.0)
    text_b = b.generate(b.load(gguf_file), "Hello", 5, 0.0)
    assert text_a == text_b
    assert len(text_a.split()) == 5


def test_sampled_output_is_bounded(gguf_file):
    runtime = StubModelRuntime(seed=1)
    handle = runtime.load(gguf_file)
    for n in (1, 3, 8):
        assert len(runtime.generate(handle, "Hello", n, 1.2).split()) == n


def test_eos_after_limits_output(gguf_file):
    runtime = StubModelRuntime(eos_after=0)
    assert runtime.generate(runtime.load(gguf_file), "Hello", 4, 0.0) == ""


def test_rejects_non_gguf(tmp_path):
    path = tmp_path / "x.gguf"
    path.write_bytes(b"nope")
    with pytest.raises(ModelRuntimeError) as excinfo:
        StubModelRuntime().load(path)
    assert excinfo.value.reason == REASON_INVALID_FORMAT


def test_nul_prompt_fails_tokenization(gguf_file):
    runtime = StubModelRuntime()
    with pytest.raises(ModelRuntimeError) as excinfo:
        runtime.generate(runtime.load(gguf_file), "a\x00b", 2, 0.0)
    assert excinfo.value.reason == REASON_TOKENIZE


def test_released_handle_cannot_generate(gguf_file):
    runtime = StubModelRuntime()
    handle = runtime.load(gguf_file)
    runtime.unload(handle)
    with pytest.raises(ModelRuntimeError) as excinfo:
        runtime.generate(handle, "Hello", 2, 0.0)
    assert excinfo.value.reason == REASON_UNKNOWN
    assert runtime.unloaded == [handle]


def test_size_floor_is_configurable(tmp_path):
    path = tmp_path / "tiny.gguf"
    path.write_bytes(b"GGUF" + b"\x00" * 12)
    with pytest.raises(ModelRuntimeError) as excinfo:
        check_gguf_file(path)
    assert excinfo.value.reason == REASON_INVALID_FORMAT
    check_gguf_file(path, min_bytes=16)
