# -*- coding: utf-8 -*-
"""
失敗の分類と変換。

- FailureKind   : 呼び出し側に見せる安定した失敗種別
- FailureReport : 種別 + 人間向けメッセージ
- BridgeError   : FailureReport を運ぶ例外（raise ... from 元例外 で送出）
- translate_load_error / translate_generate_error:
    ランタイムの失敗（ModelRuntimeError の reason、OSError、MemoryError、その他）を
    FailureKind へ写像する唯一の場所
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from local_llama_bridge.model.base import (
    REASON_CONTEXT_OVERFLOW,
    REASON_DECODE,
    REASON_INVALID_FORMAT,
    REASON_NOT_FOUND,
    REASON_OUT_OF_MEMORY,
    REASON_TOKENIZE,
    ModelRuntimeError,
)


class FailureKind(str, Enum):
    INVALID_PATH = "InvalidPath"
    UNSUPPORTED_MODEL = "UnsupportedModel"
    RESOURCE_EXHAUSTED = "ResourceExhausted"
    INVALID_PARAMETER = "InvalidParameter"
    INFERENCE_FAILURE = "InferenceFailure"
    TOKENIZATION_FAILURE = "TokenizationFailure"
    BRIDGE_CLOSED = "BridgeClosed"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FailureReport:
    kind: FailureKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class BridgeError(Exception):
    """ブリッジ操作の失敗。report に種別とメッセージを持つ。"""

    def __init__(self, kind: FailureKind, message: str):
        super().__init__(message)
        self.report = FailureReport(kind=kind, message=message)

    @property
    def kind(self) -> FailureKind:
        return self.report.kind

    @property
    def message(self) -> str:
        return self.report.message

    def __str__(self) -> str:
        return str(self.report)


_LOAD_REASONS: dict[str, FailureKind] = {
    REASON_NOT_FOUND: FailureKind.INVALID_PATH,
    REASON_INVALID_FORMAT: FailureKind.UNSUPPORTED_MODEL,
    REASON_OUT_OF_MEMORY: FailureKind.RESOURCE_EXHAUSTED,
}

_GENERATE_REASONS: dict[str, FailureKind] = {
    REASON_OUT_OF_MEMORY: FailureKind.RESOURCE_EXHAUSTED,
    REASON_CONTEXT_OVERFLOW: FailureKind.RESOURCE_EXHAUSTED,
    REASON_TOKENIZE: FailureKind.TOKENIZATION_FAILURE,
    REASON_DECODE: FailureKind.INFERENCE_FAILURE,
}


def _message_of(exc: BaseException) -> str:
    if isinstance(exc, ModelRuntimeError):
        return exc.message or exc.reason
    return str(exc) or type(exc).__name__


def translate_load_error(exc: BaseException) -> BridgeError:
    """ロード時の例外を BridgeError に変換する。"""
    if isinstance(exc, BridgeError):
        return exc
    message = _message_of(exc)
    if isinstance(exc, (FileNotFoundError, IsADirectoryError, PermissionError, NotADirectoryError)):
        return BridgeError(FailureKind.INVALID_PATH, message)
    if isinstance(exc, MemoryError):
        return BridgeError(FailureKind.RESOURCE_EXHAUSTED, message)
    if isinstance(exc, ModelRuntimeError):
        return BridgeError(_LOAD_REASONS.get(exc.reason, FailureKind.UNKNOWN), message)
    return BridgeError(FailureKind.UNKNOWN, message)


def translate_generate_error(exc: BaseException) -> BridgeError:
    """生成時の例外を BridgeError に変換する。"""
    if isinstance(exc, BridgeError):
        return exc
    message = _message_of(exc)
    if isinstance(exc, MemoryError):
        return BridgeError(FailureKind.RESOURCE_EXHAUSTED, message)
    if isinstance(exc, ModelRuntimeError):
        return BridgeError(_GENERATE_REASONS.get(exc.reason, FailureKind.UNKNOWN), message)
    return BridgeError(FailureKind.UNKNOWN, message)
