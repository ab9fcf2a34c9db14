"""Tafl rule engine package."""

from . import core
from .config import GameConfig
from .game import TaflGame

__all__ = [
    "core",
    "GameConfig",
    "TaflGame",
]
