"""CLI command for importing a vocabulary file."""

from dataclasses import replace
from datetime import datetime
from pathlib import Path

from vocab_drill.exceptions import VocabDrillException
from vocab_drill.presenters import ConsolePresenter, ConsoleProgressCallback
from vocab_drill.services import ImportService, SentenceService

from .common import config_from_args, open_store


def import_command(args) -> int:
    """Execute the import subcommand.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    config = config_from_args(args)
    if args.sentences_url:
        config = replace(config, sentence_api_url=args.sentences_url)

    presenter = ConsolePresenter()
    progress = ConsoleProgressCallback()

    try:
        store = open_store(config)
        if store.item_count() > 0 and not args.replace:
            presenter.show_error("Vocabulary already imported. Use --replace to start over.")
            return 1

        importer = ImportService(config)
        table = importer.parse_file(Path(args.file))
        presenter.show_success(f"Found {len(table.pairs)} word pairs")

        sentences = SentenceService(config).generate_batch(table.pairs, progress)
        items, groups = importer.build_items(table.pairs, datetime.now(), sentences)

        if args.replace:
            store.clear_all()
        store.save_items(items)
        store.save_groups(groups)

        presenter.show_success(f"Imported {len(items)} items into {len(groups)} groups")
        return 0

    except VocabDrillException as e:
        presenter.show_error(f"Error: {e}")
        return 1
