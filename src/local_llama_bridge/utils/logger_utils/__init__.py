# -*- coding: utf-8 -*-
"""
ロギングユーティリティ。

- with_logger: logger 引数を持つ関数へロガーを注入するデコレーター
- map_level: "DEBUG" などの文字列を logging レベルへ変換
"""
from __future__ import annotations

from .level_mapper import map_level
from .logger_injector import with_logger

__all__ = ["map_level", "with_logger"]
