#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/panbridge/engine/__init__.py
"""Markdown conversion engines."""

from panbridge.engine.base import PandocEngine
from panbridge.engine.process import PandocProcessEngine

__all__ = ["PandocEngine", "PandocProcessEngine"]
