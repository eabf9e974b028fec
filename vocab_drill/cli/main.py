"""Main CLI entry point for vocab_drill."""

import argparse
import logging
import sys

from vocab_drill import __version__
from vocab_drill.cli.commands import drill, import_words, manage, progress


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="vocab-drill",
        description="Spaced-repetition vocabulary drills for Portuguese",
        epilog="Use 'vocab-drill <command> --help' for command-specific help",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--db", help="Path to the vocabulary database")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible sessions")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # vocab-drill import <file>
    import_parser = subparsers.add_parser(
        "import",
        help="Import a vocabulary file",
        description="Import word pairs from a CSV/TSV file and split them into groups",
    )
    import_parser.add_argument("file", help="Path to the vocabulary file")
    import_parser.add_argument(
        "--replace",
        action="store_true",
        help="Delete existing vocabulary and progress before importing",
    )
    import_parser.add_argument(
        "--sentences-url",
        help="Sentence-generation endpoint (templates are used when omitted)",
    )

    # vocab-drill drill
    drill_parser = subparsers.add_parser(
        "drill",
        help="Run a drill session",
        description="Drill due items of a group until the session queue is empty",
    )
    drill_parser.add_argument("--group", type=int, help="Group number to drill (1-based)")
    drill_parser.add_argument("--goal", type=int, help="Maximum items in this session")

    # vocab-drill progress
    subparsers.add_parser(
        "progress",
        help="Show learning progress",
        description="Show item counts, accuracy and per-group statistics",
    )

    # vocab-drill mute/unmute <term>
    for name, text in (("mute", "Exclude an item from sessions"), ("unmute", "Include a muted item again")):
        mute_parser = subparsers.add_parser(name, help=text, description=text)
        mute_parser.add_argument("term", help="Term of the item")

    # vocab-drill unlock <group>
    unlock_parser = subparsers.add_parser(
        "unlock",
        help="Unlock the group after the given one",
        description="Unlock the next group without meeting the accuracy requirement",
    )
    unlock_parser.add_argument("group", type=int, help="Group number (1-based)")

    # vocab-drill reset
    reset_parser = subparsers.add_parser(
        "reset",
        help="Delete all vocabulary and progress",
        description="Delete all vocabulary, groups, sessions and progress",
    )
    reset_parser.add_argument("--yes", action="store_true", help="Confirm deletion")

    return parser


def main(argv=None):
    """Main CLI entry point with subcommands."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    # Dispatch to appropriate command
    if args.command == "import":
        return import_words.import_command(args)
    elif args.command == "drill":
        return drill.drill_command(args)
    elif args.command == "progress":
        return progress.progress_command(args)
    elif args.command in ("mute", "unmute"):
        return manage.mute_command(args)
    elif args.command == "unlock":
        return manage.unlock_command(args)
    elif args.command == "reset":
        return manage.reset_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
