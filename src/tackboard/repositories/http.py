"""Board storage backed by the board HTTP API."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx
import pydantic

from ..errors import (
    AuthError,
    ConflictError,
    InvalidIdError,
    NotFoundError,
    StorageError,
)
from ..models import Board, BoardOrdering

logger = logging.getLogger(__name__)


class HttpStorage:
    """Async client for the board API.

    Endpoints:
    - GET  /api/board          load (the server creates a default board)
    - POST /api/board          full board replace
    - PUT  /api/board/reorder  ordering delta

    The session is carried by a bearer token, so user_id is only used for
    logging; the server scopes every request to the token's owner.
    """

    BOARD_PATH = "/api/board"
    REORDER_PATH = "/api/board/reorder"

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Server root, e.g. "http://localhost:3000"
            token: Session token sent as a bearer token
            timeout: Request timeout in seconds
            transport: Optional transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> HttpStorage:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    # --- StorageProtocol ---

    async def load_board(self, user_id: str) -> Board:
        data = await self._request("GET", self.BOARD_PATH, user_id)
        try:
            return Board.model_validate(data)
        except pydantic.ValidationError as e:
            logger.error("Board payload for %s failed validation: %s", user_id, e)
            raise StorageError(f"Invalid board payload: {e}") from e

    async def save_board(self, user_id: str, board: Board) -> None:
        await self._request("POST", self.BOARD_PATH, user_id, json=board.model_dump())

    async def save_ordering(self, user_id: str, ordering: BoardOrdering) -> None:
        await self._request("PUT", self.REORDER_PATH, user_id, json=ordering.to_payload())

    # --- Private Methods ---

    async def _request(
        self,
        method: str,
        path: str,
        user_id: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and map failures onto the storage error types.

        Raises:
            AuthError: 401
            NotFoundError: 404
            ConflictError: 409
            InvalidIdError: 400 with code "invalid_id"
            StorageError: transport errors, other 4xx/5xx, bad JSON
        """
        op_name = f"{method} {path}"
        logger.debug("%s for %s", op_name, user_id)

        start_time = time.monotonic()
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.error("%s failed after %.0fms: %s", op_name, elapsed_ms, e)
            raise StorageError(f"Request failed: {e}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000
        status = response.status_code

        if status == 401:
            logger.error("%s: 401 Unauthorized (%.0fms)", op_name, elapsed_ms)
            raise AuthError(_message(response, "Not signed in"))
        if status == 404:
            logger.error("%s: 404 Not Found (%.0fms)", op_name, elapsed_ms)
            raise NotFoundError(_message(response, "Board not found"))
        if status == 409:
            logger.error("%s: 409 Conflict (%.0fms)", op_name, elapsed_ms)
            raise ConflictError(_message(response, "Board changed on the server"))
        if status == 400 and _error_code(response) == "invalid_id":
            logger.error("%s: 400 invalid id (%.0fms)", op_name, elapsed_ms)
            raise InvalidIdError(_message(response, "Unknown id in ordering"))
        if status >= 400:
            logger.error("%s: HTTP %d (%.0fms)", op_name, status, elapsed_ms)
            raise StorageError(f"HTTP {status}: {_message(response, response.text)}")

        logger.info("%s: %d OK (%.0fms)", op_name, status, elapsed_ms)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error("%s: Invalid JSON response (%.0fms)", op_name, elapsed_ms)
            raise StorageError(f"Invalid JSON response: {e}") from e


def _json_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _message(response: httpx.Response, default: str) -> str:
    """Server-provided {"message": ...} if present."""
    return str(_json_body(response).get("message") or default)


def _error_code(response: httpx.Response) -> str | None:
    code = _json_body(response).get("code")
    return str(code) if code is not None else None
