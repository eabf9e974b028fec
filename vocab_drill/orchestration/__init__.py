"""Orchestration layer for coordinating drill sessions."""

from .drill_engine import DrillEngine, EngineContext
from .session_lifecycle import SessionLifecycle, next_daily_streak

__all__ = ["DrillEngine", "EngineContext", "SessionLifecycle", "next_daily_streak"]
