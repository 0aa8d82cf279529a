# -*- coding: utf-8 -*-
"""
Base model runtime (抽象基底クラス)。

全てのモデルランタイムは以下のインターフェースを満たします:
- load(path) -> handle               : モデルをメモリへ展開
- generate(handle, prompt, ...) -> str : 上限付き・非ストリーミング生成
- unload(handle)                     : ハンドルが保持するメモリを解放
- describe(handle) -> dict           : モデルのメタ情報

注意:
- 依存を薄く保つため、このモジュールは外部フレームワークに依存しません。
- ランタイムは失敗を ModelRuntimeError(reason, message) で報告します。
  OSError / MemoryError はそのまま送出して構いません（ブリッジ側で分類）。
"""

from __future__ import annotations
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from local_llama_bridge.constants.settings import GGUF_MAGIC, GGUF_MIN_BYTES

# ランタイムが使う失敗理由コード
REASON_NOT_FOUND = "not_found"
REASON_INVALID_FORMAT = "invalid_format"
REASON_OUT_OF_MEMORY = "out_of_memory"
REASON_CONTEXT_OVERFLOW = "context_overflow"
REASON_TOKENIZE = "tokenize"
REASON_DECODE = "decode"
REASON_UNKNOWN = "unknown"


class ModelRuntimeError(Exception):
    """ランタイム内部の失敗。reason は上記コードのいずれか。"""

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message

    def __repr__(self) -> str:
        return f"ModelRuntimeError(reason={self.reason!r}, message={self.message!r})"


def check_gguf_file(path: Path, *, min_bytes: int = GGUF_MIN_BYTES) -> None:
    """
    ランタイムに渡す前の最低限の検査（中身の解析はしない）。

    Raises:
        FileNotFoundError: ファイルが存在しない場合。
        IsADirectoryError: ディレクトリが指定された場合。
        PermissionError: 読み取り権限が無い場合。
        ModelRuntimeError: 先頭が GGUF マジックでない、または min_bytes 未満の場合（invalid_format）。
    """
    if not path.exists():
        raise FileNotFoundError(f"モデルファイルが存在しません: {path}")
    if path.is_dir():
        raise IsADirectoryError(f"モデルパスがディレクトリです: {path}")
    if not os.access(path, os.R_OK):
        raise PermissionError(f"モデルファイルを読み取れません: {path}")
    with path.open("rb") as fh:
        head = fh.read(len(GGUF_MAGIC))
    if head != GGUF_MAGIC:
        raise ModelRuntimeError(REASON_INVALID_FORMAT, f"GGUF 形式ではありません: {path}")
    size = path.stat().st_size
    if size < min_bytes:
        raise ModelRuntimeError(
            REASON_INVALID_FORMAT, f"GGUF ファイルが小さすぎます（{size} バイト < {min_bytes}）: {path}"
        )


class BaseModelRuntime(ABC):
    """ローカル LLM ランタイムへの統一インターフェース。"""

    name: str = "base"

    @abstractmethod
    def load(self, path: Path) -> Any:
        """モデルをロードし、不透明なハンドルを返します。"""
        raise NotImplementedError

    @abstractmethod
    def generate(
        self,
        handle: Any,
        prompt: str,
        max_tokens: int,
        temperature: float,
        **sampling: object,
    ) -> str:
        """max_tokens を上限に同期生成し、デコード済みテキストを返します。"""
        raise NotImplementedError

    @abstractmethod
    def unload(self, handle: Any) -> None:
        """ハンドルが保持する資源を解放します。"""
        raise NotImplementedError

    def describe(self, handle: Any) -> dict[str, object]:
        return {"runtime": self.name}
