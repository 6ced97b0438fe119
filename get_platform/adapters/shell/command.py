"""
Shell command adapter — run a probe command and capture its output.

Probe commands are pipelines (``ls /lib64 | grep libssl``), so they
always go through ``sh``. The exit status of the pipeline decides
success: a ``grep`` that matches nothing fails the probe.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from pathlib import Path

from get_platform.adapters.base import Adapter, ExecutionContext
from get_platform.core.models.action import Receipt

logger = logging.getLogger(__name__)


class ShellCommandAdapter(Adapter):
    """Execute shell commands and capture output.

    No timeout is applied: probes are short read-only queries and a
    hung command is left to the surrounding installer to deal with.
    """

    @property
    def name(self) -> str:
        return "shell"

    def is_available(self) -> bool:
        return shutil.which("sh") is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        if not context.command.strip():
            return False, "Missing required field: 'command'"

        if context.cwd and not Path(context.cwd).is_dir():
            return False, f"Working directory does not exist: {context.cwd}"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        command = context.command
        action_id = context.action.id

        valid, message = self.validate(context)
        if not valid:
            return Receipt.failure(
                adapter=self.name,
                action_id=action_id,
                error=message,
                metadata={"command": command},
            )

        logger.debug("Executing: %s", command)
        start = time.monotonic()

        try:
            result = subprocess.run(
                command,
                shell=True,
                cwd=context.cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except Exception as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=action_id,
                error=f"Command execution error: {e}",
                metadata={"command": command},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        output = result.stdout.strip()
        stderr = result.stderr.strip()

        if result.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                action_id=action_id,
                output=output,
                duration_ms=elapsed_ms,
                metadata={
                    "command": command,
                    "return_code": result.returncode,
                    "stderr": stderr,
                },
            )

        return Receipt.failure(
            adapter=self.name,
            action_id=action_id,
            error=stderr or f"Command exited with code {result.returncode}",
            duration_ms=elapsed_ms,
            metadata={
                "command": command,
                "return_code": result.returncode,
                "stdout": output,
            },
        )
