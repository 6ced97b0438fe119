"""
Action and Receipt models — the probing contract.

An Action is one external command the resolver wants to run.
A Receipt is what came back. Adapters turn Actions into Receipts
and never raise: a missing binary, a non-zero exit or an I/O error
all end up as a failed Receipt.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class Action(BaseModel):
    """A single read-only command to run against the host."""

    id: str                         # unique within one probe batch
    command: str                    # shell command line
    adapter: str = "shell"          # which adapter handles this


class Receipt(BaseModel):
    """Result of running an Action.

    ``output`` holds stdout (stripped) on success. On failure,
    ``error`` carries stderr or a description of what went wrong.
    """

    adapter: str
    action_id: str
    status: Literal["ok", "failed"] = "ok"

    duration_ms: int = 0
    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the command succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the command failed."""
        return self.status == "failed"

    @classmethod
    def success(
        cls,
        adapter: str,
        action_id: str,
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(
            adapter=adapter,
            action_id=action_id,
            status="ok",
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        adapter: str,
        action_id: str,
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(
            adapter=adapter,
            action_id=action_id,
            status="failed",
            error=error,
            **kwargs,
        )
