"""Pydantic models shared across the library."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    """Structured description of a failure, carried by PodSpellingError."""

    model_config = ConfigDict(frozen=True)

    error_code: str
    message: str
    operation: str
    details: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class SpellingResult(BaseModel):
    """Outcome of spellchecking the POD in one file."""

    path: str
    name: str
    passed: bool
    words: list[str] = Field(default_factory=list)
    unreadable: bool = False

    @property
    def diagnostic(self) -> str | None:
        """Message reported alongside a failing result, or None when the file passed."""
        if self.passed:
            return None
        if self.unreadable:
            return f"{self.path} does not exist or is unreadable"
        return "Errors:\n" + "".join(f"    {word}\n" for word in self.words)


class ReportedTest(BaseModel):
    """A single ok/not ok line as seen by a reporter."""

    number: int
    name: str
    passed: bool
    diagnostics: list[str] = Field(default_factory=list)
