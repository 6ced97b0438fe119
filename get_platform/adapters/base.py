"""
Adapter base — the contract between the resolver and the host.

Resolution services never spawn processes themselves. They hand an
Action to an adapter and read the Receipt it returns, which keeps
every probe swappable for a scripted double in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel

from get_platform.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """Everything an adapter needs to run one probe."""

    action: Action
    cwd: str | None = None

    @property
    def command(self) -> str:
        return self.action.command


class Adapter(ABC):
    """Abstract base class for command adapters.

    Adapters perform read-only host queries and return receipts.
    They NEVER raise exceptions; failures are captured in the Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shell', 'mock')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this adapter's underlying tool is available.

        Should be fast and never raise.
        """

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Validate that the action can be executed.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Run the action and return a receipt.

        MUST never raise exceptions. All failures are captured
        in the Receipt with status='failed'.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
