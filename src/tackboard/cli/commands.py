"""Board commands run from the command line."""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Awaitable, Callable

from ..config import Settings
from ..models import MutationOutcome, MutationResult
from ..repositories import FilesystemStorage, HttpStorage, StaticIdentity, StorageProtocol
from ..services import BoardStore
from .output import error, info, render_board, success

logger = logging.getLogger(__name__)

Action = Callable[[BoardStore], Awaitable[MutationResult]]


def build_storage(settings: Settings) -> StorageProtocol:
    """Create the storage backend selected in settings."""
    if settings.backend == "http":
        return HttpStorage(settings.api_url, settings.api_token, settings.request_timeout)
    return FilesystemStorage(settings.data_dir)


def build_store(settings: Settings) -> BoardStore:
    """Wire storage and identity into a board store."""
    return BoardStore(
        build_storage(settings),
        StaticIdentity.from_environment(settings.user),
        policy=settings.mutation_policy,
    )


def _action_for(args: argparse.Namespace) -> Action | None:
    """Map a parsed command onto a store mutation. None means show only."""
    command = args.command
    if command == "add-list":
        return lambda store: store.add_list(args.title)
    if command == "rename-list":
        return lambda store: store.edit_list(args.list_id, args.title)
    if command == "delete-list":
        return lambda store: store.delete_list(args.list_id)
    if command == "add-card":
        return lambda store: store.add_card(args.list_id, args.title, args.content)
    if command == "edit-card":
        return lambda store: store.edit_card(args.list_id, args.card_id, args.title, args.content)
    if command == "delete-card":
        return lambda store: store.delete_card(args.list_id, args.card_id)
    if command == "move-card":
        return lambda store: store.move_card(args.card_id, args.over_id, args.source_list_id)
    if command == "move-list":
        return lambda store: store.move_list(args.list_id, args.over_id)
    return None


async def _run(store: BoardStore, action: Action | None) -> int:
    try:
        board = await store.bootstrap()
        if board is None:
            error(store.error.message if store.error else "Failed to load board")
            return 1

        if action is None:
            render_board(board)
            return 0

        result = await action(store)
    finally:
        aclose = getattr(store.storage, "aclose", None)
        if aclose is not None:
            await aclose()

    if result.outcome == MutationOutcome.COMMITTED:
        success("Saved")
    elif result.outcome == MutationOutcome.NOOP:
        info("Nothing changed")
    else:
        error(result.error.message if result.error else f"Change {result.outcome.value}")
        return 1

    if store.board is not None:
        render_board(store.board)
    return 0


def run_command(settings: Settings, args: argparse.Namespace) -> int:
    """Run one command against the configured board.

    Returns:
        Exit code (0 for success or no-op, 1 for errors)
    """
    logger.debug("Running command: %s", args.command)
    store = build_store(settings)
    return asyncio.run(_run(store, _action_for(args)))
