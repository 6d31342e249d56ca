"""
Configuration for pod_spelling.

Settings are read from environment variables prefixed with POD_SPELLING_ and
from a .env file in the working directory. The command line also loads the
nearest .env file into the environment before reading them. List-valued
settings take JSON, e.g.
POD_SPELLING_CANDIDATE_COMMANDS='["aspell list -l en", "hunspell -l"]'.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# spell comes first for backwards compatibility
DEFAULT_CANDIDATE_COMMANDS: tuple[str, ...] = (
    "spell",
    "aspell list -l en",
    "ispell -l",
    "hunspell -l",
)

DEFAULT_STARTING_POINTS: tuple[str, ...] = ("blib", "lib")

DEFAULT_VCS_DIRS: tuple[str, ...] = ("CVS", ".svn", ".git", ".hg")


class Settings(BaseSettings):
    """Runtime settings for the spelling checker."""

    SPELL_CMD: str | None = Field(
        default=None,
        description="Spellchecker command to use instead of trying the candidate list",
    )
    CANDIDATE_COMMANDS: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CANDIDATE_COMMANDS),
        description="Spellchecker commands tried in order until one can be started",
    )
    STARTING_POINTS: list[str] = Field(
        default_factory=lambda: list(DEFAULT_STARTING_POINTS),
        description="Directories searched when no paths are given; first existing one wins",
    )
    VCS_DIRS: list[str] = Field(
        default_factory=lambda: list(DEFAULT_VCS_DIRS),
        description="Directory names never descended into during discovery",
    )
    STOPWORDS_FILE: str | None = Field(
        default=None,
        description="File whose lines are fed to add_stopwords on startup",
    )

    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = Field(default="console", description="'console' or 'json'")

    @field_validator("SPELL_CMD", "STOPWORDS_FILE")
    @classmethod
    def _blank_is_unset(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @field_validator("LOG_FORMAT")
    @classmethod
    def _known_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("console", "json"):
            raise ValueError(f"LOG_FORMAT must be 'console' or 'json', got {value!r}")
        return value

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="POD_SPELLING_",
    )


# Module-level instance used by the default context
settings = Settings()
