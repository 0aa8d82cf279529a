# -*- coding: utf-8 -*-
"""
ブリッジパッケージ

- LlamaBridge: モデルの所有と上限付き生成
- GenerationRequest / SamplingOptions: 入力検証
- FailureKind / FailureReport / BridgeError: 失敗の分類
- BridgeResult: 例外を使わないエラー出力型
"""
from __future__ import annotations

from .errors import BridgeError, FailureKind, FailureReport
from .llama_bridge import LlamaBridge
from .request import GenerationRequest, SamplingOptions
from .result import BridgeResult

__all__ = [
    "BridgeError",
    "BridgeResult",
    "FailureKind",
    "FailureReport",
    "GenerationRequest",
    "LlamaBridge",
    "SamplingOptions",
]
