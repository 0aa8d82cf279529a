# -*- coding: utf-8 -*-
"""定数パッケージ（環境変数で上書き可能な既定値）"""
from __future__ import annotations
