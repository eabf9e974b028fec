"""Configuration management for Vocab Drill."""

from .config import VocabDrillConfig
from .defaults import create_default_config

__all__ = ["VocabDrillConfig", "create_default_config"]
