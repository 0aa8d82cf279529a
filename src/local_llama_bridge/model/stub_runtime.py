# -*- coding: utf-8 -*-
"""
決定的なスタブランタイム（CI / テスト用）。

- GGUF マジックで始まる読み取り可能なファイルならロード成功とみなす
- 空白区切りでトークン化し、語彙から最大 max_tokens 語を生成する
- temperature == 0 ではプロンプトのハッシュから語を選ぶため完全に決定的
- temperature > 0 では seed と呼び出し回数から乱数を作る（プロセス内で再現可能）
- eos_after を指定するとその語数で終端トークンを出したものとして停止する
- NUL 文字を含むプロンプトはトークン化失敗として報告する
"""
from __future__ import annotations

import hashlib
import random
from dataclasses import dataclass, field
from pathlib import Path

from .base import REASON_TOKENIZE, REASON_UNKNOWN, BaseModelRuntime, ModelRuntimeError, check_gguf_file

DEFAULT_VOCABULARY: tuple[str, ...] = (
    "the", "model", "answers", "quietly", "with", "a", "short", "line",
    "of", "text", "and", "then", "stops", "here", "again", "today",
)


@dataclass
class StubHandle:
    path: Path
    vocabulary: tuple[str, ...] = DEFAULT_VOCABULARY
    released: bool = False
    calls: list[tuple[str, int, float]] = field(default_factory=list)


class StubModelRuntime(BaseModelRuntime):
    """ネットワークもモデルファイルの中身も使わないランタイム。"""

    name = "stub"

    def __init__(self, *, seed: int = 0, eos_after: int | None = None):
        self.seed = seed
        self.eos_after = eos_after
        self.loaded: list[StubHandle] = []
        self.unloaded: list[StubHandle] = []

    def load(self, path: Path) -> StubHandle:
        check_gguf_file(path)
        handle = StubHandle(path=path)
        self.loaded.append(handle)
        return handle

    def generate(
        self,
        handle: StubHandle,
        prompt: str,
        max_tokens: int,
        temperature: float,
        **sampling: object,
    ) -> str:
        if handle.released:
            raise ModelRuntimeError(REASON_UNKNOWN, "解放済みのハンドルです")
        if "\x00" in prompt:
            raise ModelRuntimeError(REASON_TOKENIZE, "Failed to tokenize: NUL を含むプロンプト")

        handle.calls.append((prompt, max_tokens, temperature))
        limit = max_tokens if self.eos_after is None else min(max_tokens, self.eos_after)
        vocab = handle.vocabulary

        if temperature == 0.0:
            digest = hashlib.sha256(" ".join(prompt.split()).encode("utf-8")).digest()
            words = [vocab[digest[i % len(digest)] % len(vocab)] for i in range(limit)]
        else:
            rng = random.Random(f"{self.seed}:{len(handle.calls)}:{prompt}")
            words = [rng.choice(vocab) for _ in range(limit)]
        return " ".join(words)

    def unload(self, handle: StubHandle) -> None:
        handle.released = True
        self.unloaded.append(handle)

    def describe(self, handle: StubHandle) -> dict[str, object]:
        return {"runtime": self.name, "n_vocab": len(handle.vocabulary), "path": str(handle.path)}
