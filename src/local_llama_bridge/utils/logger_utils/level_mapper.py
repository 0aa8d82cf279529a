# -*- coding: utf-8 -*-
"""環境変数由来のログレベル表記を logging の数値レベルへ変換する。"""
from __future__ import annotations
import logging

_LEVELS: dict[str, int] = {
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


def map_level(value: str | int | None) -> int:
    """"debug" / "INFO" / "10" / 20 などを受け付け、不明な値は INFO にする。"""
    if isinstance(value, int):
        return value
    if value is None:
        return logging.INFO
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    return _LEVELS.get(text.upper(), logging.INFO)
