# -*- coding: utf-8 -*-
"""
ランタイムファクトリー。

設定辞書からランタイム種別を判定し、対応する ModelRuntime を返します。
- "llamacpp" : llama.cpp（GGUF）
- "stub"     : 決定的なスタブ（CI / テスト）
- "auto"     : llama-cpp-python が import できれば llamacpp、なければ stub

ログ出力（DEBUG）:
- 受け取った設定内容
- 選択したランタイム
- 自動選択時のフォールバック状況
"""
from __future__ import annotations
import importlib.util

from local_llama_bridge.constants.settings import MODEL_RUNTIME
from local_llama_bridge.utils.logger_utils import with_logger
from .base import BaseModelRuntime
from .llama_runtime import LlamaCppConfig, LlamaCppRuntime
from .stub_runtime import StubModelRuntime


def _llama_cpp_available() -> bool:
    return importlib.util.find_spec("llama_cpp") is not None


def _llama_config(config: dict[str, object]) -> LlamaCppConfig:
    base = LlamaCppConfig()
    return LlamaCppConfig(
        n_ctx=int(config.get("n_ctx", base.n_ctx)),
        n_batch=int(config.get("n_batch", base.n_batch)),
        n_threads=int(config.get("n_threads", base.n_threads)),
        seed=int(config.get("seed", base.seed)),
        verbose=bool(config.get("verbose", base.verbose)),
    )


@with_logger("LOCAL-LLAMA-BRIDGE", env_log_path="LOG_FILE_PATH", env_log_level="LOG_LEVEL")
def get_model_runtime(config: dict[str, object] | None = None, *, logger=None) -> BaseModelRuntime:
    """設定内容に応じて適切な ModelRuntime を返す。"""
    config = config or {}
    rtype = str(config.get("type") or MODEL_RUNTIME).lower()
    logger.debug("ランタイムファクトリー: type=%s 設定=%s", rtype, config)

    if rtype == "llamacpp":
        logger.debug("ランタイムファクトリー: llama.cpp を選択しました。")
        return LlamaCppRuntime(_llama_config(config))
    if rtype == "stub":
        logger.debug("ランタイムファクトリー: スタブを選択しました。")
        return StubModelRuntime(seed=int(config.get("seed", 0)))
    if rtype != "auto":
        raise ValueError(f"未対応のランタイム種別: {rtype}")

    # 自動選択モード
    if _llama_cpp_available():
        logger.debug("ランタイムファクトリー: 自動選択 → llama-cpp-python を検出しました。")
        return LlamaCppRuntime(_llama_config(config))
    logger.debug("ランタイムファクトリー: llama-cpp-python が見つからない → スタブにフォールバックします。")
    return StubModelRuntime(seed=int(config.get("seed", 0)))
