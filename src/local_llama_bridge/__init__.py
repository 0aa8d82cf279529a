# -*- coding: utf-8 -*-
"""
local_llama_bridge

ローカルに置いた GGUF モデルを 1 度だけロードし、上限付き・非ストリーミングの
テキスト生成を提供する薄いブリッジ。

    from local_llama_bridge import LlamaBridge

    with LlamaBridge("model.gguf") as bridge:
        text = bridge.generate("Hello", max_tokens=5, temperature=0.0)
"""
from __future__ import annotations

from .bridge import (
    BridgeError,
    BridgeResult,
    FailureKind,
    FailureReport,
    GenerationRequest,
    LlamaBridge,
    SamplingOptions,
)
from .utils.model_discovery import discover_model_paths

__version__ = "0.1.0"

__all__ = [
    "BridgeError",
    "BridgeResult",
    "FailureKind",
    "FailureReport",
    "GenerationRequest",
    "LlamaBridge",
    "SamplingOptions",
    "discover_model_paths",
]
