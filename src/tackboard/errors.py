"""Error taxonomy for board mutations and storage."""


class BoardError(Exception):
    """Base exception for tackboard errors."""

    kind = "error"


class ValidationError(BoardError):
    """A mutation was rejected before touching any state (e.g. blank title)."""

    kind = "validation"


class AuthError(BoardError):
    """No authenticated user is available."""

    kind = "auth"


class PersistenceError(BoardError):
    """Base exception for storage failures. Always triggers a rollback."""

    kind = "persistence"


class StorageError(PersistenceError):
    """Transport, IO or unexpected backend failure."""

    pass


class NotFoundError(PersistenceError):
    """The backend could not find the board or an entity on it."""

    kind = "not_found"


class ConflictError(PersistenceError):
    """The backend refused the write because of a conflicting state."""

    kind = "conflict"


class InvalidIdError(PersistenceError):
    """An ordering delta referenced an id unknown to the backend."""

    kind = "invalid_id"
