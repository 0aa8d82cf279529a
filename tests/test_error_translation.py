"""
Tests for mapping runtime failures onto FailureKind.
"""

import pytest

from local_llama_bridge.bridge.errors import (
    BridgeError,
    FailureKind,
    translate_generate_error,
    translate_load_error,
)
from local_llama_bridge.model.base import (
    REASON_CONTEXT_OVERFLOW,
    REASON_DECODE,
    REASON_INVALID_FORMAT,
    REASON_NOT_FOUND,
    REASON_OUT_OF_MEMORY,
    REASON_TOKENIZE,
    REASON_UNKNOWN,
    ModelRuntimeError,
)


@pytest.mark.parametrize(
    "exc, kind",
    [
        (FileNotFoundError("x"), FailureKind.INVALID_PATH),
        (IsADirectoryError("x"), FailureKind.INVALID_PATH),
        (PermissionError("x"), FailureKind.INVALID_PATH),
        (MemoryError("x"), FailureKind.RESOURCE_EXHAUSTED),
        (ModelRuntimeError(REASON_NOT_FOUND, "x"), FailureKind.INVALID_PATH),
        (ModelRuntimeError(REASON_INVALID_FORMAT, "x"), FailureKind.UNSUPPORTED_MODEL),
        (ModelRuntimeError(REASON_OUT_OF_MEMORY, "x"), FailureKind.RESOURCE_EXHAUSTED),
        (ModelRuntimeError(REASON_UNKNOWN, "x"), FailureKind.UNKNOWN),
        (ModelRuntimeError(REASON_TOKENIZE, "x"), FailureKind.UNKNOWN),
        (ImportError("llama_cpp"), FailureKind.UNKNOWN),
    ],
)
def test_load_translation(exc, kind):
    assert translate_load_error(exc).kind is kind


@pytest.mark.parametrize(
    "exc, kind",
    [
        (MemoryError("x"), FailureKind.RESOURCE_EXHAUSTED),
        (ModelRuntimeError(REASON_OUT_OF_MEMORY, "x"), FailureKind.RESOURCE_EXHAUSTED),
        (ModelRuntimeError(REASON_CONTEXT_OVERFLOW, "x"), FailureKind.RESOURCE_EXHAUSTED),
        (ModelRuntimeError(REASON_TOKENIZE, "x"), FailureKind.TOKENIZATION_FAILURE),
        (ModelRuntimeError(REASON_DECODE, "x"), FailureKind.INFERENCE_FAILURE),
        (ModelRuntimeError(REASON_UNKNOWN, "x"), FailureKind.UNKNOWN),
        (RuntimeError("x"), FailureKind.UNKNOWN),
    ],
)
def test_generate_translation(exc, kind):
    assert translate_generate_error(exc).kind is kind


def test_message_preserved_or_class_name_used():
    assert translate_generate_error(RuntimeError("gpu fell over")).message == "gpu fell over"
    assert translate_generate_error(RuntimeError()).message == "RuntimeError"


def test_bridge_error_passes_through():
    err = BridgeError(FailureKind.INVALID_PARAMETER, "bad")
    assert translate_load_error(err) is err
    assert translate_generate_error(err) is err


def test_failure_kind_values_are_stable():
    assert {k.value for k in FailureKind} == {
        "InvalidPath",
        "UnsupportedModel",
        "ResourceExhausted",
        "InvalidParameter",
        "InferenceFailure",
        "TokenizationFailure",
        "BridgeClosed",
        "Unknown",
    }
