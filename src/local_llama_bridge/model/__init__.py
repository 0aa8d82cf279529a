# -*- coding: utf-8 -*-
"""
Model runtime package.

本パッケージは、ブリッジが呼び出す「モデル実行系」を抽象化します。
- BaseModelRuntime: load / generate / unload のインターフェース規定
- LlamaCppRuntime: llama.cpp（GGUF）での実装
- StubModelRuntime: 決定的なスタブ実装（CI / テスト用）
- factory.get_model_runtime(): 設定に応じたランタイムを生成

logger_utils により、各クラスは DEBUG ログを出力します。
"""

from .base import BaseModelRuntime, ModelRuntimeError  # noqa: F401
from .factory import get_model_runtime  # noqa: F401
