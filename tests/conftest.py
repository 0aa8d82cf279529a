"""
Pytest config: local src/ imports without installation, log output into a temp dir,
and shared fixtures for model files and fake runtimes.
"""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest


def _add_src_to_path() -> None:
    src = Path(__file__).resolve().parent.parent / "src"
    src_str = str(src)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_add_src_to_path()
os.environ.setdefault("LOG_FILE_PATH", tempfile.mkdtemp(prefix="llama-bridge-logs-") + os.sep)

from local_llama_bridge.model.base import BaseModelRuntime  # noqa: E402
from local_llama_bridge.model.stub_runtime import StubModelRuntime  # noqa: E402


class SpyRuntime(BaseModelRuntime):
    """
    Test-only runtime that delegates to the stub and records every call.
    load_error / generate_errors / describe_error inject failures.
    """

    name = "spy"

    def __init__(self, *, load_error=None, generate_errors=None, describe_error=None, output=None, eos_after=None):
        self.inner = StubModelRuntime(eos_after=eos_after)
        self.load_error = load_error
        self.generate_errors = list(generate_errors or [])
        self.describe_error = describe_error
        self.output = output
        self.load_calls: list[Path] = []
        self.generate_calls: list[dict] = []
        self.unloaded: list[object] = []

    def load(self, path):
        self.load_calls.append(path)
        if self.load_error is not None:
            raise self.load_error
        return self.inner.load(path)

    def generate(self, handle, prompt, max_tokens, temperature, **sampling):
        self.generate_calls.append(
            {"prompt": prompt, "max_tokens": max_tokens, "temperature": temperature, **sampling}
        )
        if self.generate_errors:
            raise self.generate_errors.pop(0)
        if self.output is not None:
            return self.output
        return self.inner.generate(handle, prompt, max_tokens, temperature, **sampling)

    def unload(self, handle):
        self.unloaded.append(handle)
        self.inner.unload(handle)

    def describe(self, handle):
        if self.describe_error is not None:
            raise self.describe_error
        return self.inner.describe(handle)


@pytest.fixture
def gguf_file(tmp_path: Path) -> Path:
    path = tmp_path / "model.gguf"
    path.write_bytes(b"GGUF" + b"\x03\x00\x00\x00" + b"\x00" * 56)
    return path


@pytest.fixture
def spy_runtime() -> SpyRuntime:
    return SpyRuntime()
