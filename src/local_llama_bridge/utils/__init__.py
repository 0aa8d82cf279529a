# -*- coding: utf-8 -*-
"""
ユーティリティパッケージ

- logger_utils: ロガー注入
- model_resolver: モデル参照 → ローカルパス解決
- model_discovery: models/ 配下の GGUF 探索
"""
from __future__ import annotations
