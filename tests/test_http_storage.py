"""Tests for HttpStorage."""

import json

import httpx
import pytest

from tackboard.errors import (
    AuthError,
    ConflictError,
    InvalidIdError,
    NotFoundError,
    StorageError,
)
from tackboard.repositories import HttpStorage

from .conftest import make_board

USER = "user-1"


def _storage(handler) -> HttpStorage:
    return HttpStorage(
        "http://board.test/",
        token="secret",
        transport=httpx.MockTransport(handler),
    )


class TestRequests:
    """Requests sent for each storage operation."""

    @pytest.mark.asyncio
    async def test_load_board(self):
        """GET /api/board returns the parsed board."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=make_board().model_dump())

        async with _storage(handler) as storage:
            board = await storage.load_board(USER)

        assert board == make_board()
        assert seen[0].method == "GET"
        assert seen[0].url.path == "/api/board"
        assert seen[0].headers["Authorization"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_load_ignores_extra_fields(self):
        """Server-side fields such as _id and userId are ignored."""
        payload = make_board().model_dump()
        payload.update({"_id": "abc", "userId": "u"})

        async with _storage(lambda r: httpx.Response(200, json=payload)) as storage:
            assert await storage.load_board(USER) == make_board()

    @pytest.mark.asyncio
    async def test_load_board_keyed_by_underscore_id(self):
        """A freshly created server board carries only _id."""
        payload = {"_id": "665f", "userId": "u1", "title": "My First Board", "lists": []}

        async with _storage(lambda r: httpx.Response(200, json=payload)) as storage:
            board = await storage.load_board(USER)

        assert board.id == "665f"
        assert board.title == "My First Board"
        assert board.lists == []

    @pytest.mark.asyncio
    async def test_save_board_posts_full_board(self):
        """POST /api/board carries the whole board."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"message": "saved"})

        async with _storage(handler) as storage:
            await storage.save_board(USER, make_board())

        assert seen[0].method == "POST"
        assert json.loads(seen[0].content) == make_board().model_dump()

    @pytest.mark.asyncio
    async def test_save_ordering_puts_ids_only(self):
        """PUT /api/board/reorder carries list ids and card ids only."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"message": "reordered"})

        async with _storage(handler) as storage:
            await storage.save_ordering(USER, make_board().ordering())

        body = json.loads(seen[0].content)
        assert seen[0].method == "PUT"
        assert seen[0].url.path == "/api/board/reorder"
        assert body["lists"][1] == {"id": "list-2", "cardIds": ["task-3"]}
        assert "Details" not in seen[0].content.decode()

    @pytest.mark.asyncio
    async def test_empty_response_body(self):
        """A 204 with no body is a success."""
        async with _storage(lambda r: httpx.Response(204)) as storage:
            await storage.save_board(USER, make_board())


class TestErrors:
    """Status codes map onto storage errors."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status,body,error",
        [
            (401, {"message": "not signed in"}, AuthError),
            (404, {"message": "board not found"}, NotFoundError),
            (409, {}, ConflictError),
            (400, {"code": "invalid_id", "message": "unknown task"}, InvalidIdError),
            (400, {"message": "bad data"}, StorageError),
            (500, {"message": "oops"}, StorageError),
        ],
    )
    async def test_status_mapping(self, status, body, error):
        """Each failing status raises its error type."""
        async with _storage(lambda r: httpx.Response(status, json=body)) as storage:
            with pytest.raises(error):
                await storage.save_ordering(USER, make_board().ordering())

    @pytest.mark.asyncio
    async def test_server_message_is_used(self):
        """The server's message ends up in the exception."""
        response = httpx.Response(404, json={"message": "board not found"})
        async with _storage(lambda r: response) as storage:
            with pytest.raises(NotFoundError) as exc_info:
                await storage.save_board(USER, make_board())
        assert "board not found" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_transport_error(self):
        """Connection failures raise StorageError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _storage(handler) as storage:
            with pytest.raises(StorageError):
                await storage.load_board(USER)

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        """A non-JSON success body raises StorageError."""
        async with _storage(lambda r: httpx.Response(200, text="<html>")) as storage:
            with pytest.raises(StorageError):
                await storage.load_board(USER)

    @pytest.mark.asyncio
    async def test_invalid_board_payload(self):
        """A JSON body that is not a board raises StorageError."""
        async with _storage(lambda r: httpx.Response(200, json={"lists": "nope"})) as storage:
            with pytest.raises(StorageError):
                await storage.load_board(USER)
