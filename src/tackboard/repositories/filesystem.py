"""Filesystem-based board storage."""

from __future__ import annotations

import asyncio
import logging
import os
import re
from pathlib import Path

import frontmatter
import pydantic
import yaml
from pydantic import BaseModel, Field

from ..errors import NotFoundError, StorageError
from ..models import DEFAULT_BOARD_TITLE, Board, BoardList, BoardOrdering, Card
from ..utils import new_board_id
from .ordering import apply_ordering

logger = logging.getLogger(__name__)

_SAFE_NAME = re.compile(r"^[A-Za-z0-9_\-][A-Za-z0-9_.\-]*$")

# Suffix for files written before being moved into place
_TMP_SUFFIX = ".tmp"


class ListEntry(BaseModel):
    """A list as stored in board.yaml: title plus ordered card ids."""

    id: str
    title: str
    tasks: list[str] = Field(default_factory=list)


class BoardFile(BaseModel):
    """Contents of board.yaml."""

    version: int = 1
    id: str
    title: str
    lists: list[ListEntry] = Field(default_factory=list)


class FilesystemStorage:
    """
    Board storage on the local filesystem.

    Each user gets a directory under root holding:
    - board.yaml: board id and title, lists in order with ordered card ids
    - cards/<card id>.md: one markdown file per card, title in front matter,
      content as the body

    Reorders only rewrite board.yaml. Every file is written to a temporary
    name and moved into place, and a failed save removes the card files it
    created, so a rolled-back change leaves nothing behind on disk.

    File access is blocking; the async methods run it in a worker thread.
    """

    BOARD_YAML = "board.yaml"
    CARDS_DIR = "cards"

    def __init__(self, root: Path) -> None:
        """
        Initialize storage.

        Args:
            root: Directory holding one subdirectory per user
        """
        self.root = root

    def user_dir(self, user_id: str) -> Path:
        """Directory holding a user's board."""
        return self.root / _safe_name(user_id, "user id")

    def ensure_directory(self, user_id: str) -> None:
        """Create the user's directories if they don't exist."""
        try:
            (self.user_dir(user_id) / self.CARDS_DIR).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create board directory: {e}") from e

    # --- StorageProtocol ---

    async def load_board(self, user_id: str) -> Board:
        """Load the user's board, creating the default board on first access."""
        return await asyncio.to_thread(self._load_board, user_id)

    async def save_board(self, user_id: str, board: Board) -> None:
        """Write every card file and board.yaml, removing cards no longer on the board."""
        await asyncio.to_thread(self._write_board, user_id, board)
        logger.debug("Board saved for %s: %d lists", user_id, len(board.lists))

    async def save_ordering(self, user_id: str, ordering: BoardOrdering) -> None:
        """Rewrite board.yaml with a new order after checking every id."""
        await asyncio.to_thread(self._save_ordering, user_id, ordering)
        logger.debug("Ordering saved for %s", user_id)

    # --- Private Methods ---

    def _load_board(self, user_id: str) -> Board:
        yaml_path = self.user_dir(user_id) / self.BOARD_YAML
        if not yaml_path.exists():
            board = Board(id=new_board_id(), title=DEFAULT_BOARD_TITLE, lists=[])
            self._write_board(user_id, board)
            logger.info("Created default board for %s at %s", user_id, yaml_path)
            return board
        return self._read_board(user_id)

    def _save_ordering(self, user_id: str, ordering: BoardOrdering) -> None:
        yaml_path = self.user_dir(user_id) / self.BOARD_YAML
        if not yaml_path.exists():
            raise NotFoundError(f"No board stored for {user_id}")

        stored = self._read_board(user_id)
        reordered = apply_ordering(stored, ordering)
        self._write_board_yaml(user_id, reordered)

    def _card_path(self, user_id: str, card_id: str) -> Path:
        return self.user_dir(user_id) / self.CARDS_DIR / f"{_safe_name(card_id, 'task id')}.md"

    def _read_board_file(self, user_id: str) -> BoardFile:
        yaml_path = self.user_dir(user_id) / self.BOARD_YAML
        try:
            with yaml_path.open() as f:
                data = yaml.safe_load(f) or {}
            return BoardFile(**data)
        except (OSError, yaml.YAMLError, pydantic.ValidationError, TypeError) as e:
            raise StorageError(f"Cannot read {yaml_path}: {e}") from e

    def _read_card(self, path: Path) -> Card:
        try:
            post = frontmatter.load(path)
            # Bodies come back stripped; an exact copy is kept in front matter when needed
            content = post.metadata.get("content", post.content)
            return Card(
                id=path.stem,
                title=str(post.metadata.get("title") or path.stem),
                content=str(content),
            )
        except (OSError, UnicodeDecodeError, yaml.YAMLError, pydantic.ValidationError) as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

    def _read_board(self, user_id: str) -> Board:
        """
        Build the board from board.yaml and the card files.

        - board.yaml provides list order and card order
        - Ids listed in board.yaml without a card file are dropped
        - Card files not listed anywhere are appended to the first list
        """
        board_file = self._read_board_file(user_id)
        cards_dir = self.user_dir(user_id) / self.CARDS_DIR

        cards: dict[str, Card] = {}
        if cards_dir.exists():
            for path in sorted(cards_dir.glob("*.md")):
                card = self._read_card(path)
                cards[card.id] = card

        modified = False
        placed: set[str] = set()
        lists: list[BoardList] = []
        try:
            for entry in board_file.lists:
                tasks = []
                for card_id in entry.tasks:
                    card = cards.get(card_id)
                    if card is None or card_id in placed:
                        logger.warning(
                            "Dropping missing or duplicate task %s from %s", card_id, entry.id
                        )
                        modified = True
                        continue
                    placed.add(card_id)
                    tasks.append(card)
                lists.append(BoardList(id=entry.id, title=entry.title, tasks=tasks))

            orphans = [card for card_id, card in cards.items() if card_id not in placed]
            if orphans and lists:
                logger.warning("Adding %d unlisted task files to %s", len(orphans), lists[0].id)
                first = lists[0]
                lists[0] = first.model_copy(update={"tasks": [*first.tasks, *orphans]})
                modified = True

            board = Board(id=board_file.id, title=board_file.title, lists=lists)
        except pydantic.ValidationError as e:
            raise StorageError(f"Invalid board in {cards_dir.parent}: {e}") from e

        if modified:
            self._write_board_yaml(user_id, board)
        return board

    def _write_board(self, user_id: str, board: Board) -> None:
        self.ensure_directory(user_id)
        cards_dir = self.user_dir(user_id) / self.CARDS_DIR

        # Resolve every path first so a bad id fails before anything is written
        targets = [
            (card, self._card_path(user_id, card.id))
            for board_list in board.lists
            for card in board_list.tasks
        ]

        staged: list[Path] = []
        created: list[Path] = []
        try:
            for card, path in targets:
                tmp_path = _tmp_path(path)
                staged.append(tmp_path)
                with tmp_path.open("w") as f:
                    f.write(_dump_card(card))
            for card, path in targets:
                if not path.exists():
                    created.append(path)
                os.replace(_tmp_path(path), path)
            self._write_board_yaml(user_id, board)
        except StorageError:
            _discard([*staged, *created])
            raise
        except OSError as e:
            _discard([*staged, *created])
            raise StorageError(f"Cannot write task file: {e}") from e

        keep = {path for _, path in targets}
        for path in cards_dir.glob("*.md"):
            if path not in keep:
                try:
                    path.unlink()
                except OSError as e:
                    raise StorageError(f"Cannot remove {path}: {e}") from e

    def _write_board_yaml(self, user_id: str, board: Board) -> None:
        """Write board.yaml to disk."""
        self.ensure_directory(user_id)
        yaml_path = self.user_dir(user_id) / self.BOARD_YAML
        tmp_path = _tmp_path(yaml_path)
        board_file = BoardFile(
            id=board.id,
            title=board.title,
            lists=[
                ListEntry(id=bl.id, title=bl.title, tasks=bl.card_ids()) for bl in board.lists
            ],
        )
        try:
            with tmp_path.open("w") as f:
                f.write("# Auto-generated - do not edit manually\n")
                yaml.safe_dump(
                    board_file.model_dump(), f, default_flow_style=False, sort_keys=False
                )
            os.replace(tmp_path, yaml_path)
        except OSError as e:
            _discard([tmp_path])
            raise StorageError(f"Cannot write {yaml_path}: {e}") from e


def _dump_card(card: Card) -> str:
    post = frontmatter.Post(card.content)
    post.metadata = {"title": card.title}
    if card.content != card.content.strip():
        post.metadata["content"] = card.content
    # sort_keys=False preserves original key order
    return frontmatter.dumps(post, sort_keys=False) + "\n"


def _tmp_path(path: Path) -> Path:
    return path.with_name(path.name + _TMP_SUFFIX)


def _discard(paths: list[Path]) -> None:
    """Remove files left by a failed save."""
    for path in paths:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove %s after failed save: %s", path, e)


def _safe_name(value: str, what: str) -> str:
    """Reject ids that cannot be used as a single path component."""
    if not value or not _SAFE_NAME.match(value):
        raise StorageError(f"Invalid {what} for filesystem storage: {value!r}")
    return value
