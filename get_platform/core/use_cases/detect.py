"""
Detect use case — settings + host resolution + tag composition.

This is what the ``detect`` CLI command runs. Errors come back on the
result instead of being raised so the CLI can print them or put them
in the JSON payload.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from get_platform.adapters.base import Adapter
from get_platform.core.config.loader import ConfigError, load_settings
from get_platform.core.models.host import ResolvedHost
from get_platform.core.models.platform import is_known_platform
from get_platform.core.observability.warn_once import warn_once
from get_platform.core.services.host import UnsupportedPlatformError, get_os
from get_platform.core.services.platform_tag import Notify, platform_tag_for
from get_platform.core.services.prober import CommandProber

logger = logging.getLogger(__name__)


@dataclass
class DetectResult:
    """Result of the detect use case."""

    platform: str | None = None
    host: ResolvedHost | None = None
    known: bool = False
    warnings: list[str] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        result["platform"] = self.platform
        result["known"] = self.known
        result["host"] = self.host.to_dict() if self.host else None
        result["warnings"] = list(self.warnings)
        return result


def run_detect(
    config_path: Path | None = None,
    adapter: Adapter | None = None,
    platform_name: str | None = None,
    arch: str | None = None,
    notify: Notify | None = None,
) -> DetectResult:
    """Resolve the platform tag for this host.

    Args:
        config_path: Optional explicit path to getplatform.yml.
        adapter: Command adapter to probe with (default: shell).
        platform_name: Override the detected OS name.
        arch: Override the detected architecture.
        notify: One-time warning emitter (default: process-wide).

    Returns:
        DetectResult with the tag and the signals behind it.
    """
    result = DetectResult()
    emit = notify or warn_once

    def _collect(key: str, message: str) -> None:
        result.warnings.append(message)
        emit(key, message)

    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    prober = CommandProber(adapter=adapter, max_workers=settings.max_workers)

    try:
        host = get_os(
            platform_name=platform_name,
            arch=arch,
            prober=prober,
            os_release_path=settings.os_release_path,
            openssl_binary=settings.openssl_binary,
        )
    except UnsupportedPlatformError as e:
        result.error = str(e)
        return result

    result.host = host
    result.platform = platform_tag_for(host, notify=_collect)
    result.known = is_known_platform(result.platform)

    logger.info("Resolved platform %s (known=%s)", result.platform, result.known)
    return result
