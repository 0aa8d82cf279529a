# -*- coding: utf-8 -*-
"""
生成リクエストの値オブジェクトと検証。

検証はランタイム呼び出しの前に行い、範囲外の値は丸めずに InvalidParameter で拒否する。
"""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field

from local_llama_bridge.constants.settings import GREEDY_TEMPERATURE_THRESHOLD, MAX_TEMPERATURE
from .errors import BridgeError, FailureKind


def _invalid(message: str) -> BridgeError:
    return BridgeError(FailureKind.INVALID_PARAMETER, message)


def _is_real(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _finite_float(value: object) -> float | None:
    """有限の実数なら float にして返し、それ以外（float に収まらない巨大整数を含む）は None。"""
    if not _is_real(value):
        return None
    try:
        number = float(value)
    except (OverflowError, TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class SamplingOptions:
    """任意のサンプリング設定。None はランタイム既定値を使う。"""
    top_k: int | None = None
    top_p: float | None = None
    repeat_penalty: float | None = None

    def validate(self) -> None:
        if self.top_k is not None:
            if not isinstance(self.top_k, int) or isinstance(self.top_k, bool) or self.top_k < 0:
                raise _invalid(f"top_k は 0 以上の整数で指定してください: {self.top_k!r}")
        if self.top_p is not None:
            top_p = _finite_float(self.top_p)
            if top_p is None or not (0.0 < top_p <= 1.0):
                raise _invalid(f"top_p は (0, 1] の範囲で指定してください: {self.top_p!r}")
        if self.repeat_penalty is not None:
            penalty = _finite_float(self.repeat_penalty)
            if penalty is None or penalty <= 0:
                raise _invalid(f"repeat_penalty は正の数で指定してください: {self.repeat_penalty!r}")

    def as_kwargs(self) -> dict[str, object]:
        return {k: v for k, v in (
            ("top_k", self.top_k),
            ("top_p", self.top_p),
            ("repeat_penalty", self.repeat_penalty),
        ) if v is not None}


@dataclass(frozen=True)
class GenerationRequest:
    prompt: str
    max_tokens: int
    temperature: float
    sampling: SamplingOptions = field(default_factory=SamplingOptions)

    @classmethod
    def create(
        cls,
        prompt: str,
        max_tokens: int,
        temperature: float,
        sampling: SamplingOptions | None = None,
        *,
        max_temperature: float = MAX_TEMPERATURE,
    ) -> GenerationRequest:
        """
        検証済みのリクエストを作る。

        - prompt は文字列であれば空でもよい
        - max_tokens は正の整数（bool は不可）
        - temperature は [0, max_temperature] の有限実数
        - GREEDY_TEMPERATURE_THRESHOLD 以下の temperature は 0.0 に正規化する

        Raises:
            BridgeError: kind=InvalidParameter
        """
        if not isinstance(prompt, str):
            raise _invalid(f"prompt は文字列で指定してください: {type(prompt).__name__}")
        if not isinstance(max_tokens, int) or isinstance(max_tokens, bool):
            raise _invalid(f"max_tokens は整数で指定してください: {max_tokens!r}")
        if max_tokens <= 0:
            raise _invalid(f"max_tokens は 1 以上で指定してください: {max_tokens}")
        temp = _finite_float(temperature)
        if temp is None:
            raise _invalid(f"temperature は有限の実数で指定してください: {temperature!r}")
        if not (0.0 <= temp <= max_temperature):
            raise _invalid(f"temperature は 0〜{max_temperature} の範囲で指定してください: {temperature}")

        sampling = sampling or SamplingOptions()
        sampling.validate()

        if temp <= GREEDY_TEMPERATURE_THRESHOLD:
            temp = 0.0
        return cls(prompt=prompt, max_tokens=max_tokens, temperature=temp, sampling=sampling)

    @property
    def is_greedy(self) -> bool:
        return self.temperature == 0.0
