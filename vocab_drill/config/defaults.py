"""Default configuration values for Vocab Drill."""

from .config import VocabDrillConfig


def create_default_config(**overrides) -> VocabDrillConfig:
    """Create a default configuration with optional overrides.

    Args:
        **overrides: Keyword arguments to override default values

    Returns:
        VocabDrillConfig with defaults and overrides applied

    Example:
        config = create_default_config(
            session_goal=20,
            random_seed=42
        )
    """
    return VocabDrillConfig(**overrides)
