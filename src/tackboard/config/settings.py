"""Application settings."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    data_dir: Path = Field(
        default=Path(".tackboard"),
        description="Directory holding boards for the filesystem backend",
    )

    user: str | None = Field(
        default=None,
        description="User id owning the board (default: login name)",
    )

    backend: Literal["filesystem", "http"] = Field(
        default="filesystem",
        description="Where boards are stored",
    )

    api_url: str = Field(
        default="http://localhost:3000",
        description="Board API root for the http backend",
    )

    api_token: str | None = Field(
        default=None,
        description="Session token for the http backend",
    )

    request_timeout: float = Field(
        default=30.0,
        description="HTTP request timeout in seconds",
    )

    mutation_policy: Literal["ignore", "queue"] = Field(
        default="ignore",
        description="Handling of a change requested while another is saving",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "TACKBOARD_",
    }
