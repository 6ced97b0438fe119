"""Adapters — how the resolver talks to the host.

Public re-exports for convenient access.
"""

from get_platform.adapters.base import Adapter, ExecutionContext
from get_platform.adapters.mock import MockCommandAdapter
from get_platform.adapters.shell.command import ShellCommandAdapter

__all__ = [
    "Adapter",
    "ExecutionContext",
    "MockCommandAdapter",
    "ShellCommandAdapter",
]
