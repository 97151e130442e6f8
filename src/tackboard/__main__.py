"""CLI entry point for tackboard."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="tackboard",
        description="Kanban board editor: lists of cards, reordered by drag and drop",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding boards (default: .tackboard/)",
    )
    parser.add_argument(
        "--user",
        default=None,
        help="User id owning the board (default: login name)",
    )
    parser.add_argument(
        "--backend",
        choices=["filesystem", "http"],
        default=None,
        help="Storage backend (default: filesystem)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    commands = parser.add_subparsers(dest="command")

    commands.add_parser("show", help="Print the board")

    add_list = commands.add_parser("add-list", help="Append a new list")
    add_list.add_argument("title")

    rename_list = commands.add_parser("rename-list", help="Rename a list")
    rename_list.add_argument("list_id")
    rename_list.add_argument("title")

    delete_list = commands.add_parser("delete-list", help="Delete a list and its cards")
    delete_list.add_argument("list_id")

    add_card = commands.add_parser("add-card", help="Append a card to a list")
    add_card.add_argument("list_id")
    add_card.add_argument("title")
    add_card.add_argument("--content", default="", help="Card description")

    edit_card = commands.add_parser("edit-card", help="Change a card's title and content")
    edit_card.add_argument("list_id")
    edit_card.add_argument("card_id")
    edit_card.add_argument("title")
    edit_card.add_argument("--content", default="", help="Card description")

    delete_card = commands.add_parser("delete-card", help="Delete a card")
    delete_card.add_argument("list_id")
    delete_card.add_argument("card_id")

    move_card = commands.add_parser(
        "move-card", help="Drop a card onto another card or onto a list"
    )
    move_card.add_argument("card_id")
    move_card.add_argument("over_id", help="Card id to drop onto, or list id to append to")
    move_card.add_argument(
        "--from",
        dest="source_list_id",
        default=None,
        help="List the card is dragged from (default: the list holding it)",
    )

    move_list = commands.add_parser("move-list", help="Drop a list onto another list")
    move_list.add_argument("list_id")
    move_list.add_argument("over_id", help="List id (or a card id in that list)")

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "show"
    return args


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    # Build settings from CLI args
    settings_kwargs: dict = {}
    if args.data_dir:
        settings_kwargs["data_dir"] = args.data_dir
    if args.user:
        settings_kwargs["user"] = args.user
    if args.backend:
        settings_kwargs["backend"] = args.backend
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file

    settings = Settings(**settings_kwargs)

    setup_logging(settings.verbose, settings.log_file, settings)

    # Import here to keep --help fast
    from .cli.commands import run_command

    raise SystemExit(run_command(settings, args))


if __name__ == "__main__":
    main()
