"""Command line interface for :mod:`slimpdf`."""

from __future__ import annotations

from .main import main

__all__ = ["main"]
