# -*- coding: utf-8 -*-
"""
LlamaCpp モデルランタイム

- 役割:
    * GGUF モデルのロード（langchain_community.llms.LlamaCpp 経由で llama-cpp-python を駆動）
    * パス検証と GGUF マジックの事前確認
    * llama.cpp のエラーメッセージを失敗理由コードへ分類
    * リクエスト毎に KV キャッシュをリセットし、生成を独立させる
- 根拠:
    * コンテキスト長・バッチ・スレッド数は LlamaCppConfig に集約し、環境変数で上書き可能にする。
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path

from langchain_community.llms import LlamaCpp

from local_llama_bridge.constants.settings import (
    LLAMA_N_BATCH,
    LLAMA_N_CTX,
    LLAMA_N_THREADS,
    LLAMA_SEED,
    LLAMA_VERBOSE,
)
from local_llama_bridge.utils.logger_utils import with_logger
from .base import (
    REASON_CONTEXT_OVERFLOW,
    REASON_DECODE,
    REASON_INVALID_FORMAT,
    REASON_OUT_OF_MEMORY,
    REASON_TOKENIZE,
    REASON_UNKNOWN,
    BaseModelRuntime,
    ModelRuntimeError,
    check_gguf_file,
)

_OOM_MARKERS = ("out of memory", "failed to allocate", "cannot allocate", "insufficient memory", "bad_alloc")
_FORMAT_MARKERS = ("failed to load model", "invalid magic", "unknown model architecture", "not a gguf", "unsupported model")


@dataclass
class LlamaCppConfig:
    """LlamaCpp モデル初期化設定"""
    n_ctx: int = LLAMA_N_CTX
    n_batch: int = LLAMA_N_BATCH
    n_threads: int = LLAMA_N_THREADS
    seed: int = LLAMA_SEED
    verbose: bool = LLAMA_VERBOSE


def _message_of(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


def _classify_load_error(exc: BaseException) -> str:
    msg = _message_of(exc).lower()
    if any(m in msg for m in _OOM_MARKERS):
        return REASON_OUT_OF_MEMORY
    if any(m in msg for m in _FORMAT_MARKERS):
        return REASON_INVALID_FORMAT
    return REASON_UNKNOWN


def _classify_generate_error(exc: BaseException) -> str:
    msg = _message_of(exc).lower()
    if "failed to tokenize" in msg:
        return REASON_TOKENIZE
    if "exceed context window" in msg:
        return REASON_CONTEXT_OVERFLOW
    if any(m in msg for m in _OOM_MARKERS):
        return REASON_OUT_OF_MEMORY
    if "llama_decode" in msg or "decode failed" in msg:
        return REASON_DECODE
    return REASON_UNKNOWN


class LlamaCppRuntime(BaseModelRuntime):
    """GGUF を llama.cpp で実行するランタイム。"""

    name = "llamacpp"

    def __init__(self, config: LlamaCppConfig | None = None):
        self.config = config or LlamaCppConfig()

    @with_logger("LOCAL-LLAMA-BRIDGE", env_log_path="LOG_FILE_PATH", env_log_level="LOG_LEVEL")
    def load(self, path: Path, *, logger=None) -> LlamaCpp:
        """
        LlamaCpp モデルをロードする。

        Raises:
            OSError: パスが存在しない/読めない場合。
            ModelRuntimeError: 形式不正・メモリ不足・その他の初期化エラー。
        """
        check_gguf_file(path)

        cfg = self.config
        logger.debug("LlamaCppRuntime.load: %s 設定=%s", path, cfg)
        t0 = time.time()
        try:
            llm = LlamaCpp(
                model_path=str(path),
                n_ctx=cfg.n_ctx,
                n_batch=cfg.n_batch,
                n_threads=cfg.n_threads,
                seed=cfg.seed,
                verbose=cfg.verbose,
            )
        except MemoryError:
            raise
        except Exception as e:
            raise ModelRuntimeError(_classify_load_error(e), f"LlamaCpp モデル初期化に失敗しました: {_message_of(e)}") from e

        logger.debug("LlamaCppRuntime.load: 完了 (処理時間 %.3f 秒)", time.time() - t0)
        return llm

    @with_logger("LOCAL-LLAMA-BRIDGE", env_log_path="LOG_FILE_PATH", env_log_level="LOG_LEVEL")
    def generate(
        self,
        handle: LlamaCpp,
        prompt: str,
        max_tokens: int,
        temperature: float,
        *,
        logger=None,
        **sampling: object,
    ) -> str:
        """llama.cpp による上限付き生成。sampling: top_k, top_p, repeat_penalty（None は既定値）"""
        params: dict[str, object] = {"max_tokens": max_tokens, "temperature": temperature}
        params.update({k: v for k, v in sampling.items() if v is not None})

        # 前回リクエストの KV キャッシュを持ち越さない
        client = getattr(handle, "client", None)
        if client is not None and hasattr(client, "reset"):
            client.reset()

        logger.debug("LlamaCppRuntime.generate: プロンプト長=%d パラメータ=%s", len(prompt), params)
        try:
            return handle.invoke(prompt, **params)
        except MemoryError:
            raise
        except Exception as e:
            raise ModelRuntimeError(_classify_generate_error(e), _message_of(e)) from e

    @with_logger("LOCAL-LLAMA-BRIDGE", env_log_path="LOG_FILE_PATH", env_log_level="LOG_LEVEL")
    def unload(self, handle: LlamaCpp, *, logger=None) -> None:
        """llama_cpp.Llama を閉じてモデル/コンテキストのメモリを解放する。"""
        client = getattr(handle, "client", None)
        close = getattr(client, "close", None)
        if callable(close):
            close()
        logger.debug("LlamaCppRuntime.unload: モデルを解放しました。")

    def describe(self, handle: LlamaCpp) -> dict[str, object]:
        info: dict[str, object] = {"runtime": self.name, "n_ctx": self.config.n_ctx}
        client = getattr(handle, "client", None)
        if client is None:
            return info
        if callable(getattr(client, "n_ctx", None)):
            info["n_ctx"] = client.n_ctx()
        if callable(getattr(client, "n_vocab", None)):
            info["n_vocab"] = client.n_vocab()
        metadata = getattr(client, "metadata", None)
        if isinstance(metadata, dict):
            info["metadata"] = dict(metadata)
        return info
