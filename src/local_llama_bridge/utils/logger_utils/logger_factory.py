# -*- coding: utf-8 -*-
"""
Logger の生成を担うファクトリ。

- ファイル出力（UTF-8）と標準エラー出力の 2 ハンドラを持つ Logger を返す。
- 同名ロガーへの二重登録を避けるため、生成は logger_injector 側で 1 回だけ行われる想定。
"""
from __future__ import annotations
import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class LoggerFactoryImpl:
    """ファイル + stderr ハンドラ付きの Logger を組み立てる。"""

    @staticmethod
    def create(name: str, *, log_file: Path | None = None, level: int | str = logging.INFO) -> logging.Logger:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        formatter = logging.Formatter(LOG_FORMAT)

        if log_file is not None:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

        # ルートロガーへ伝播させると二重出力になるため止める
        logger.propagate = False
        return logger
