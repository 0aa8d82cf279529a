# -*- coding: utf-8 -*-
"""
ブリッジ全体で使うパスや推論パラメータの定数定義（.env で上書き可）
"""
from __future__ import annotations
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ルート推定（このファイルから3階層上 = src/ の親をルートとみなす）
ROOT = Path(__file__).resolve().parents[3]


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# GGUF を置くディレクトリ（相対パス指定時の探索先）
MODELS_DIR = Path(os.getenv("MODELS_DIR", ROOT / "models")).resolve()

# 推論ランタイムの種別: "llamacpp" / "stub" / "auto"
MODEL_RUNTIME = os.getenv("MODEL_RUNTIME", "llamacpp")

# llama.cpp コンテキスト設定
LLAMA_N_CTX     = int(os.getenv("LLAMA_N_CTX", "2048"))
LLAMA_N_BATCH   = int(os.getenv("LLAMA_N_BATCH", "512"))
LLAMA_N_THREADS = int(os.getenv("LLAMA_N_THREADS", "4"))
LLAMA_SEED      = int(os.getenv("LLAMA_SEED", "0"))
LLAMA_VERBOSE   = _env_bool("LLAMA_VERBOSE", False)

# サンプリング範囲
MAX_TEMPERATURE: float = float(os.getenv("MAX_TEMPERATURE", "2.0"))
GREEDY_TEMPERATURE_THRESHOLD: float = 0.01   # これ以下は 0.0（貪欲法）として渡す

# GGUF ファイル先頭のマジックバイト
GGUF_MAGIC = b"GGUF"

# GGUF ヘッダ（マジック + バージョン + テンソル数 + メタデータ数）の最小バイト数。
# これ未満のファイルは途中で切れたダウンロード等として拒否する
GGUF_MIN_BYTES: int = int(os.getenv("GGUF_MIN_BYTES", "24"))
