# -*- coding: utf-8 -*-
"""
モデル参照（絶対パス / 相対パス / models/ 配下のファイル名）→ ローカルパスへの解決ユーティリティ

方針:
- 絶対パスはそのまま返す（存在チェックはランタイム側の責務）
- 相対パスがカレントから見えればそれを使う
- 見えなければ MODELS_DIR/<相対パス> を試す
- どれにも当たらなければ入力をそのまま返し、ロード時に InvalidPath として報告させる
"""
from __future__ import annotations
from pathlib import Path

from local_llama_bridge.utils.logger_utils import with_logger
from local_llama_bridge.constants.settings import MODELS_DIR


@with_logger("LOCAL-LLAMA-BRIDGE", env_log_path="LOG_FILE_PATH", env_log_level="LOG_LEVEL")
def resolve_model_path(model_path: str | Path, *, models_dir: Path | None = None, logger=None) -> Path:
    """
    モデル参照をローカルの Path に解決する。解決できない場合も例外は投げない。
    例:
      - "/opt/models/a.gguf"  -> /opt/models/a.gguf
      - "a.gguf"（MODELS_DIR/a.gguf が存在） -> MODELS_DIR/a.gguf
    """
    raw = Path(str(model_path)).expanduser()

    if raw.is_absolute():
        logger.debug("ModelResolver: 絶対パス指定 -> %s", raw)
        return raw

    if raw.exists():
        resolved = raw.resolve()
        logger.debug("ModelResolver: カレントから検出 -> %s", resolved)
        return resolved

    base = models_dir if models_dir is not None else MODELS_DIR
    candidate = base / raw
    if candidate.exists():
        resolved = candidate.resolve()
        logger.info("ModelResolver: models ディレクトリから検出 -> %s", resolved)
        return resolved

    logger.debug("ModelResolver: 解決できませんでした（そのまま渡します）: %s", raw)
    return raw
