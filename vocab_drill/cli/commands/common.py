"""Helpers shared by CLI commands."""

import random

from vocab_drill.config import VocabDrillConfig, create_default_config
from vocab_drill.interfaces import PresenterProtocol
from vocab_drill.models import VocabularyItem
from vocab_drill.orchestration import DrillEngine, EngineContext
from vocab_drill.services import VocabularyStore
from vocab_drill.utils.text_utils import fold_answer


def config_from_args(args) -> VocabDrillConfig:
    """Build configuration from global CLI options."""
    overrides = {}
    if getattr(args, "db", None):
        overrides["db_path"] = args.db
    if getattr(args, "seed", None) is not None:
        overrides["random_seed"] = args.seed
    return create_default_config(**overrides)


def open_store(config: VocabDrillConfig) -> VocabularyStore:
    """Open (and create if needed) the configured database."""
    store = VocabularyStore(config.db_path)
    store.initialize()
    return store


def load_engine(
    config: VocabDrillConfig,
    store: VocabularyStore,
    presenter: PresenterProtocol,
) -> DrillEngine:
    """Load stored data into a drill engine that writes back to ``store``."""
    context = EngineContext.from_items(
        store.load_items(),
        groups=store.load_groups(),
        progress=store.load_progress(default_goal=config.session_goal),
        rng=random.Random(config.random_seed),
    )
    return DrillEngine(config, context, presenter=presenter, persistence=store)


def find_item_by_term(engine: DrillEngine, term: str) -> VocabularyItem | None:
    """Find an item whose term matches ``term`` ignoring case."""
    wanted = fold_answer(term)
    for item in engine.context.items.values():
        if fold_answer(item.term) == wanted:
            return item
    return None
