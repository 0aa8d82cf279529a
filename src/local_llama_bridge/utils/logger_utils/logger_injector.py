# local_llama_bridge/utils/logger_utils/logger_injector.py
from __future__ import annotations
import os, logging, functools, inspect
from pathlib import Path
from typing import Callable

from .logger_factory import LoggerFactoryImpl
from .level_mapper import map_level  # "INFO"→logging.INFO など

DEFAULT_LOG_FILE = Path("logs/local_llama_bridge.log")


def _resolve_logger(name: str, log_file: Path | None, level: int | str) -> logging.Logger:
    """既存ロガー優先で Logger を解決し、なければファクトリで生成して返す。"""
    existing = logging.getLogger(name)
    if existing.handlers:   # 既にどこかでハンドラ設定済み＝“既存のロガー”
        return existing
    return LoggerFactoryImpl.create(name, log_file=log_file, level=level)


def _resolve_log_path_from_env(env_log_path: str | None = "LOG_FILE_PATH") -> Path:
    """環境変数 env_log_path を優先してログファイルの Path を返す。未設定なら logs/local_llama_bridge.log。
    - 親ディレクトリは `parents=True, exist_ok=True` で必ず作成。
    - 値がディレクトリ（既存）または区切りで終わる場合は 'local_llama_bridge.log' を付与。
    """
    env = os.getenv(env_log_path) if env_log_path else None
    if env and env.strip():
        path = Path(env).expanduser()
        if (path.exists() and path.is_dir()) or str(env).endswith(("/", "\\")):
            path = path / DEFAULT_LOG_FILE.name
    else:
        path = DEFAULT_LOG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def with_logger(
    name: str,
    env_log_path: str | None = "LOG_FILE_PATH",
    env_log_level: str = "LOG_LEVEL",
) -> Callable:
    """ロガー依存を「見せずに」注入するデコレーター。

    - ログファイルの場所は env_log_path で指定した環境変数を参照。
      未設定なら Path("logs/local_llama_bridge.log")。
    - ログレベルは env_log_level で指定した環境変数（既定 LOG_LEVEL）。
    - 呼び出し側が logger を明示的に渡した場合はそれを優先する。
    """
    def deco(func: Callable):
        params = inspect.signature(func).parameters

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            # 1) 関数が logger 引数を受け取れる場合は kwargs で注入
            if "logger" in params:
                if kwargs.get("logger") is None:
                    level = map_level(os.getenv(env_log_level, "INFO"))
                    kwargs["logger"] = _resolve_logger(name, _resolve_log_path_from_env(env_log_path), level)
                return func(*args, **kwargs)

            # 2) 受け取らない関数なら、関数が参照するモジュールグローバルに挿す
            global_scope = func.__globals__
            if global_scope.get("logger", None) is None:
                level = map_level(os.getenv(env_log_level, "INFO"))
                global_scope["logger"] = _resolve_logger(name, _resolve_log_path_from_env(env_log_path), level)

            return func(*args, **kwargs)
        return wrapper
    return deco
