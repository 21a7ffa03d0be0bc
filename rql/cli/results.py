from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CLIModel(BaseModel):
    """Base for JSON envelopes: camelCase aliases, snake_case attributes."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class ErrorInfo(CLIModel):
    type: str
    message: str
    hint: str | None = None
    details: dict[str, Any] | None = None


class CommandMeta(CLIModel):
    duration_ms: int = Field(..., alias="durationMs")
    input_length: int | None = Field(None, alias="inputLength")


class CommandResult(CLIModel):
    ok: bool
    command: str
    data: Any | None = None
    warnings: list[str] = Field(default_factory=list)
    meta: CommandMeta
    error: ErrorInfo | None = None
