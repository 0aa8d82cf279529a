# -*- coding: utf-8 -*-
"""
エラー出力型の戻り値（成功値 or FailureReport のどちらか一方だけを持つ）。
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from .errors import BridgeError, FailureReport

T = TypeVar("T")


@dataclass(frozen=True)
class BridgeResult(Generic[T]):
    value: T | None = None
    failure: FailureReport | None = None

    def __post_init__(self) -> None:
        if (self.failure is None) == (self.value is None):
            raise ValueError("BridgeResult は value と failure のどちらか一方だけを持ちます")

    @classmethod
    def success(cls, value: T) -> BridgeResult[T]:
        return cls(value=value)

    @classmethod
    def fail(cls, error: BridgeError) -> BridgeResult[T]:
        return cls(failure=error.report)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> T:
        """成功値を返す。失敗なら BridgeError を送出する。"""
        if self.failure is not None:
            raise BridgeError(self.failure.kind, self.failure.message)
        return self.value  # type: ignore[return-value]
