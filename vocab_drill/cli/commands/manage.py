"""CLI commands for muting items, unlocking groups and resetting data."""

from vocab_drill.exceptions import VocabDrillException
from vocab_drill.presenters import ConsolePresenter

from .common import config_from_args, find_item_by_term, load_engine, open_store


def mute_command(args) -> int:
    """Execute the mute/unmute subcommands.

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    config = config_from_args(args)
    presenter = ConsolePresenter()
    muting = args.command == "mute"

    try:
        engine = load_engine(config, open_store(config), presenter)
        item = find_item_by_term(engine, args.term)
        if item is None:
            presenter.show_error(f"No item with term '{args.term}'")
            return 1
        if muting:
            engine.mute_item(item.id)
            presenter.show_success(f"Muted {item}")
        else:
            engine.unmute_item(item.id)
            presenter.show_success(f"Unmuted {item}")
        return 0
    except VocabDrillException as e:
        presenter.show_error(f"Error: {e}")
        return 1


def unlock_command(args) -> int:
    """Execute the unlock subcommand (manual override of unlock rules).

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    config = config_from_args(args)
    presenter = ConsolePresenter()

    try:
        engine = load_engine(config, open_store(config), presenter)
        groups = engine.context.groups
        if not 1 <= args.group <= len(groups):
            presenter.show_error(f"Group number must be between 1 and {len(groups)}")
            return 1
        unlocked = engine.unlock_next_group(groups[args.group - 1].id)
        if unlocked is None:
            presenter.show_warning("Nothing to unlock")
            return 1
        presenter.show_success(f"Unlocked {unlocked.name}")
        return 0
    except VocabDrillException as e:
        presenter.show_error(f"Error: {e}")
        return 1


def reset_command(args) -> int:
    """Execute the reset subcommand.

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    config = config_from_args(args)
    presenter = ConsolePresenter()

    if not args.yes:
        presenter.show_error("This deletes all vocabulary and progress. Re-run with --yes.")
        return 1

    try:
        open_store(config).clear_all()
    except VocabDrillException as e:
        presenter.show_error(f"Error: {e}")
        return 1
    presenter.show_success("All data cleared")
    return 0
