"""CLI command for showing learning progress."""

from vocab_drill.exceptions import VocabDrillException
from vocab_drill.presenters import ConsolePresenter

from .common import config_from_args, load_engine, open_store


def progress_command(args) -> int:
    """Execute the progress subcommand.

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    config = config_from_args(args)
    presenter = ConsolePresenter()

    try:
        engine = load_engine(config, open_store(config), presenter)
    except VocabDrillException as e:
        presenter.show_error(f"Error: {e}")
        return 1

    progress = engine.context.progress
    presenter.show_stats(engine.overall_stats(), engine.all_group_stats())
    presenter.show_info(f"\nDaily streak: {progress.daily_streak} day(s)")
    if progress.last_session_date:
        presenter.show_info(f"Last session: {progress.last_session_date.isoformat()}")
    return 0
