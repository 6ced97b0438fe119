"""
Command prober — race a list of probe commands, keep the best answer.

All commands are started at once on a thread pool and every one of
them is allowed to settle. The winner is then picked by position in
the input list, not by finishing order, so a slow high-priority
command still beats a fast low-priority one and the result is the
same from one run to the next.

The prober never raises: a command that exits non-zero, cannot be
spawned, or whose adapter blows up simply counts as failed.
"""

from __future__ import annotations

import concurrent.futures
import logging
from collections.abc import Sequence

from get_platform.adapters.base import Adapter, ExecutionContext
from get_platform.adapters.shell.command import ShellCommandAdapter
from get_platform.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class CommandProber:
    """Runs probe batches through a single adapter."""

    def __init__(self, adapter: Adapter | None = None, max_workers: int | None = None):
        self.adapter = adapter or ShellCommandAdapter()
        self.max_workers = max_workers

    def run_all(self, commands: Sequence[str]) -> list[Receipt]:
        """Run every command concurrently; receipts come back in input order."""
        if not commands:
            return []

        actions = [
            Action(id=f"probe-{i}", command=cmd, adapter=self.adapter.name)
            for i, cmd in enumerate(commands)
        ]
        workers = self.max_workers or len(actions)

        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(self._execute, action) for action in actions]
            concurrent.futures.wait(futures)

        return [future.result() for future in futures]

    def first_success(self, commands: Sequence[str]) -> str | None:
        """Return the output of the first command (by list order) that succeeded."""
        for command, receipt in zip(commands, self.run_all(commands)):
            if receipt.ok:
                logger.debug('Command "%s" successfully returned "%s"', command, receipt.output)
                return receipt.output
        return None

    def _execute(self, action: Action) -> Receipt:
        try:
            return self.adapter.execute(ExecutionContext(action=action))
        except Exception as e:
            logger.debug("Adapter %s raised on %r: %s", self.adapter.name, action.command, e)
            return Receipt.failure(
                adapter=self.adapter.name,
                action_id=action.id,
                error=f"Adapter error: {e}",
                metadata={"command": action.command},
            )


def first_successful_exec(
    commands: Sequence[str],
    prober: CommandProber | None = None,
) -> str | None:
    """Shortcut for ``CommandProber().first_success(commands)``."""
    return (prober or CommandProber()).first_success(commands)
