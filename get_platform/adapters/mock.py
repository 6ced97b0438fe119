"""
Mock adapter — scripted stand-in for the shell.

Responses are keyed by the exact command string. Unknown commands
fail the way a missing binary would, so a mock with no script
behaves like a bare host where every probe comes back empty.
"""

from __future__ import annotations

import threading
import time

from get_platform.adapters.base import Adapter, ExecutionContext
from get_platform.core.models.action import Receipt


class MockCommandAdapter(Adapter):
    """Command adapter that returns scripted output.

    Example::

        mock = MockCommandAdapter({"uname -m": "x86_64"})
        mock.set_failure("openssl version -v")
        mock.set_delay("ldconfig -p | ...", 0.2)
    """

    def __init__(
        self,
        outputs: dict[str, str] | None = None,
        adapter_name: str = "mock",
        available: bool = True,
    ):
        self._name = adapter_name
        self._available = available
        self._responses: dict[str, Receipt] = {}
        self._delays: dict[str, float] = {}
        self._call_log: list[ExecutionContext] = []
        self._lock = threading.Lock()
        for command, output in (outputs or {}).items():
            self.set_output(command, output)

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    @property
    def commands(self) -> list[str]:
        """Commands received, in call order."""
        return [ctx.command for ctx in self._call_log]

    def is_available(self) -> bool:
        return self._available

    def set_output(self, command: str, output: str) -> None:
        """Make ``command`` succeed with ``output``."""
        self._responses[command] = Receipt.success(
            adapter=self._name,
            action_id="",
            output=output.strip(),
            metadata={"command": command, "return_code": 0},
        )

    def set_failure(self, command: str, error: str = "Mock failure", code: int = 1) -> None:
        """Make ``command`` fail with a non-zero exit."""
        self._responses[command] = Receipt.failure(
            adapter=self._name,
            action_id="",
            error=error,
            metadata={"command": command, "return_code": code},
        )

    def set_delay(self, command: str, seconds: float) -> None:
        """Hold ``command`` for ``seconds`` before answering."""
        self._delays[command] = seconds

    def reset(self) -> None:
        self._responses.clear()
        self._delays.clear()
        self._call_log.clear()

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        with self._lock:
            self._call_log.append(context)

        command = context.command
        delay = self._delays.get(command)
        if delay:
            time.sleep(delay)

        scripted = self._responses.get(command)
        if scripted is None:
            return Receipt.failure(
                adapter=self._name,
                action_id=context.action.id,
                error=f"sh: 1: {command.split()[0] if command.split() else command}: not found",
                metadata={"command": command, "return_code": 127},
            )

        return scripted.model_copy(update={"action_id": context.action.id})
