"""Identity providers."""

import getpass
import logging

logger = logging.getLogger(__name__)


class StaticIdentity:
    """Identity with a fixed user id. None means signed out."""

    def __init__(self, user_id: str | None) -> None:
        self.user_id = user_id

    def current_user_id(self) -> str | None:
        return self.user_id or None

    @classmethod
    def from_environment(cls, user_id: str | None = None) -> "StaticIdentity":
        """Use the given id, falling back to the login name of this process."""
        if user_id:
            return cls(user_id)
        try:
            login = getpass.getuser()
        except (OSError, KeyError):
            logger.debug("No login name available, running unauthenticated")
            return cls(None)
        logger.debug("Using login name as user id: %s", login)
        return cls(login)
