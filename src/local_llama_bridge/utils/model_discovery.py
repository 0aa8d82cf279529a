# -*- coding: utf-8 -*-
"""
models/ 配下の GGUF モデルを探索するユーティリティ。
- cache/.locks 等は探索しない
- 結果はパス順にソートして返す
"""
from __future__ import annotations
from pathlib import Path

from local_llama_bridge.constants.settings import MODELS_DIR
from local_llama_bridge.utils.logger_utils import with_logger

_EXCLUDE_PARTS = {"hf_cache", ".cache", ".locks"}

def _looks_excluded(path: Path, base: Path) -> bool:
    """キャッシュ/ロック系のパスを除外判定"""
    for part in path.relative_to(base).parts:
        if part in _EXCLUDE_PARTS or part.endswith(".locks"):
            return True
    return False

@with_logger("LOCAL-LLAMA-BRIDGE", env_log_path="LOG_FILE_PATH", env_log_level="LOG_LEVEL")
def discover_model_paths(models_dir: Path | None = None, *, logger=None) -> list[Path]:
    """
    models_dir（既定 MODELS_DIR）配下の *.gguf を再帰的に探索して返す。
    ディレクトリが無ければ空リスト。
    """
    base = models_dir if models_dir is not None else MODELS_DIR
    if not base.exists():
        logger.info("モデル探索: モデルディレクトリが存在しません: %s", base)
        return []

    found = [
        p for p in base.glob("**/*")
        if p.is_file() and p.suffix.lower() == ".gguf" and not _looks_excluded(p, base)
    ]
    out = sorted(found)
    logger.debug("モデル探索: %d 件検出 -> %s", len(out), [str(p) for p in out])
    return out
