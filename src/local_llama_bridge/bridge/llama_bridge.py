# -*- coding: utf-8 -*-
"""
ローカル LLM ブリッジ本体。

責務:
- 構築時にモデルを 1 度だけロードし、ハンドルを寿命の間だけ単独所有する
- 生成リクエストを検証し、ランタイムへ上限付きで転送する
- ランタイムの失敗を FailureKind へ変換して呼び出し側へ返す

状態:
    Uninitialized → (ロード成功) → Ready → (close / GC) → Terminated
    Uninitialized → (ロード失敗) → 例外（インスタンスは得られない）
    Ready で generate は成功・失敗どちらでも Ready のまま

並行性:
- 1 インスタンスにつき同時に 1 つの generate のみを想定する。
  複数スレッドから使う場合は呼び出し側で直列化すること。
"""
from __future__ import annotations

import time
import weakref
from pathlib import Path
from typing import Any

from local_llama_bridge.model import BaseModelRuntime, get_model_runtime
from local_llama_bridge.utils.logger_utils import with_logger
from local_llama_bridge.utils.model_resolver import resolve_model_path
from .errors import BridgeError, FailureKind, translate_generate_error, translate_load_error
from .request import GenerationRequest, SamplingOptions
from .result import BridgeResult


class LlamaBridge:
    """1 つのモデルを保持し、上限付きの同期生成を提供するブリッジ。"""

    @with_logger("LOCAL-LLAMA-BRIDGE", env_log_path="LOG_FILE_PATH", env_log_level="LOG_LEVEL")
    def __init__(
        self,
        model_path: str | Path,
        *,
        runtime: BaseModelRuntime | None = None,
        models_dir: Path | None = None,
        logger=None,
    ):
        """
        モデルをロードして Ready 状態のブリッジを作る。

        Raises:
            BridgeError: InvalidPath / UnsupportedModel / ResourceExhausted / Unknown
        """
        self._runtime = runtime if runtime is not None else get_model_runtime()
        self._handle: Any = None
        self._finalizer: weakref.finalize | None = None

        if model_path is None or not str(model_path).strip():
            logger.warning("LlamaBridge: モデルパスが空です。")
            raise BridgeError(FailureKind.INVALID_PATH, "モデルパスが指定されていません")

        path = resolve_model_path(model_path, models_dir=models_dir)
        logger.debug("LlamaBridge: ロード開始 path=%s runtime=%s", path, self._runtime.name)
        t0 = time.time()

        try:
            handle = self._runtime.load(path)
        except Exception as exc:
            err = translate_load_error(exc)
            logger.warning("LlamaBridge: ロード失敗 [%s] %s", err.kind, err.message)
            raise err from exc

        # ロード後の手順が失敗した場合も確保済みのメモリは必ず返す
        try:
            info = dict(self._runtime.describe(handle))
        except Exception as exc:
            err = translate_load_error(exc)
            try:
                self._runtime.unload(handle)
            except Exception as unload_exc:
                logger.warning("LlamaBridge: メタ情報取得失敗後のモデル解放にも失敗しました: %s", unload_exc)
            logger.warning("LlamaBridge: メタ情報の取得に失敗したためモデルを解放しました [%s] %s", err.kind, err.message)
            raise err from exc

        info.setdefault("path", str(path))
        self.model_path = path
        self.model_info: dict[str, object] = info
        self._handle = handle
        self._finalizer = weakref.finalize(self, self._runtime.unload, handle)
        logger.info("LlamaBridge: モデルをロードしました (%.3f 秒) %s", time.time() - t0, path)

    @classmethod
    def try_open(cls, model_path: str | Path, **kwargs: Any) -> BridgeResult[LlamaBridge]:
        """例外を送出せず、ブリッジまたは FailureReport を返す。"""
        try:
            return BridgeResult.success(cls(model_path, **kwargs))
        except BridgeError as err:
            return BridgeResult.fail(err)

    @property
    def closed(self) -> bool:
        return self._handle is None

    @with_logger("LOCAL-LLAMA-BRIDGE", env_log_path="LOG_FILE_PATH", env_log_level="LOG_LEVEL")
    def generate(
        self,
        prompt: str,
        max_tokens: int,
        temperature: float,
        *,
        sampling: SamplingOptions | None = None,
        logger=None,
    ) -> str:
        """
        プロンプトの続きを最大 max_tokens トークンまで生成し、前後の空白を除いた全文を返す。

        Raises:
            BridgeError: InvalidParameter / TokenizationFailure / ResourceExhausted /
                         InferenceFailure / BridgeClosed / Unknown
        """
        if self.closed:
            raise BridgeError(FailureKind.BRIDGE_CLOSED, "ブリッジは既に閉じられています")

        try:
            request = GenerationRequest.create(prompt, max_tokens, temperature, sampling)
        except BridgeError as err:
            logger.warning("LlamaBridge.generate: 入力不正 [%s] %s", err.kind, err.message)
            raise

        logger.debug(
            "LlamaBridge.generate: プロンプト長=%d 生成長=%d 温度=%.2f サンプリング=%s",
            len(request.prompt), request.max_tokens, request.temperature, request.sampling.as_kwargs(),
        )
        t0 = time.time()
        try:
            text = self._runtime.generate(
                self._handle,
                request.prompt,
                request.max_tokens,
                request.temperature,
                **request.sampling.as_kwargs(),
            )
        except Exception as exc:
            err = translate_generate_error(exc)
            logger.warning("LlamaBridge.generate: 生成失敗 [%s] %s", err.kind, err.message)
            raise err from exc

        output = (text or "").strip()
        logger.debug("LlamaBridge.generate: 完了 (処理時間 %.3f 秒, 出力長=%d)", time.time() - t0, len(output))
        return output

    def try_generate(
        self,
        prompt: str,
        max_tokens: int,
        temperature: float,
        *,
        sampling: SamplingOptions | None = None,
    ) -> BridgeResult[str]:
        """例外を送出せず、生成テキストまたは FailureReport を返す。"""
        try:
            return BridgeResult.success(self.generate(prompt, max_tokens, temperature, sampling=sampling))
        except BridgeError as err:
            return BridgeResult.fail(err)

    @with_logger("LOCAL-LLAMA-BRIDGE", env_log_path="LOG_FILE_PATH", env_log_level="LOG_LEVEL")
    def close(self, *, logger=None) -> None:
        """モデルを解放する。2 回目以降は何もしない。"""
        if self._finalizer is not None and self._finalizer.alive:
            self._finalizer()
            logger.info("LlamaBridge: モデルを解放しました %s", self.model_path)
        self._handle = None

    def __enter__(self) -> LlamaBridge:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "ready"
        return f"LlamaBridge(path={str(getattr(self, 'model_path', ''))!r}, runtime={self._runtime.name!r}, state={state})"
