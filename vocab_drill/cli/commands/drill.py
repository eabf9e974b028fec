"""CLI command for running an interactive drill session."""

from collections.abc import Callable

from vocab_drill.exceptions import InvalidInputError, VocabDrillException
from vocab_drill.orchestration import DrillEngine
from vocab_drill.presenters import ConsolePresenter

from .common import config_from_args, load_engine, open_store

QUIT_COMMAND = ":q"
MUTE_COMMAND = ":m"


def pick_group_id(engine: DrillEngine, number: int | None) -> str | None:
    """Choose the group to drill.

    Args:
        engine: Loaded engine
        number: 1-based group number from the command line, if given

    Returns:
        Group id, or None when there are no groups

    Raises:
        VocabDrillException: If ``number`` is out of range
    """
    groups = engine.context.groups
    if not groups:
        return None
    if number is not None:
        if not 1 <= number <= len(groups):
            raise VocabDrillException(f"Group number must be between 1 and {len(groups)}")
        return groups[number - 1].id

    unlocked = [g for g in groups if g.unlocked]
    for group in unlocked:
        if engine.due_items_for_group(group.id):
            return group.id
    return unlocked[-1].id if unlocked else groups[0].id


def drill_command(args, input_func: Callable[[str], str] = input) -> int:
    """Execute the drill subcommand.

    Type the term for each prompt. ``:m`` mutes the current word and
    moves on. ``:q`` finishes the session early and grades what was
    answered; Ctrl-C or end of input abandons it without grading.

    Args:
        args: Parsed command-line arguments
        input_func: Source of learner input

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    config = config_from_args(args)
    presenter = ConsolePresenter()

    try:
        store = open_store(config)
        engine = load_engine(config, store, presenter)
        if not engine.context.items:
            presenter.show_error("No vocabulary yet. Run 'vocab-drill import <file>' first.")
            return 1

        group_id = pick_group_id(engine, args.group)
        session = engine.start_session(session_goal=args.goal, group_id=group_id)
        if group_id is not None:
            presenter.show_info(f"Drilling {engine.context.get_group(group_id).name}")
        presenter.show_info(
            f"Type the word for each prompt "
            f"({QUIT_COMMAND} to finish early, {MUTE_COMMAND} to mute the word)"
        )

        while (item := engine.current_item(session)) is not None:
            presenter.show_prompt(item, session.remaining)
            try:
                answer = input_func("> ")
            except (EOFError, KeyboardInterrupt):
                presenter.show_warning("Session abandoned; nothing was graded")
                return 1

            if answer.strip() == QUIT_COMMAND:
                break
            if answer.strip() == MUTE_COMMAND:
                engine.mute_item(item.id, session)
                presenter.show_info(f"Muted {item}")
                continue
            try:
                outcome = engine.submit_answer(session, item.id, answer)
            except InvalidInputError:
                presenter.show_warning("Please type an answer")
                continue
            presenter.show_answer_feedback(outcome)

        result = engine.complete_session(session)
        presenter.show_completion(result)
        return 0

    except VocabDrillException as e:
        presenter.show_error(f"Error: {e}")
        return 1
