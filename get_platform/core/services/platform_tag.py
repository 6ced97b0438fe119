"""
Platform tag composer — turn host signals into one binary target.

The decision table is split in two ordered lists, first match wins:

- ``PLATFORM_RULES`` handle hosts whose OS (and, on Linux, distro
  and arch) identify a binary directly.
- ``FALLBACK_RULES`` substitute defaults when signals are missing.

The two defaulting paths are deliberately asymmetric: a known libssl
with an unknown distro goes to ``debian``, while a known distro with
an unknown libssl keeps the distro and uses the default libssl.

Warnings go through ``notify(key, message)``, which is expected to
drop repeats of the same key.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import NamedTuple

from get_platform.core.models.host import ResolvedHost
from get_platform.core.models.platform import is_known_platform
from get_platform.core.observability.warn_once import warn_once
from get_platform.core.services.distro import OS_RELEASE_PATH
from get_platform.core.services.host import get_os
from get_platform.core.services.libssl import is_libssl_1x
from get_platform.core.services.prober import CommandProber

logger = logging.getLogger(__name__)

DEFAULT_LIBSSL = "1.1.x"
DEFAULT_DISTRO = "debian"

Notify = Callable[[str, str], object]


class Signals(NamedTuple):
    platform: str
    arch: str
    libssl: str | None
    target_distro: str | None
    family_distro: str | None
    original_distro: str | None


class TagRule(NamedTuple):
    name: str
    applies: Callable[[Signals], bool]
    tag: Callable[[Signals], str]


def _linux(s: Signals) -> bool:
    return s.platform == "linux"


def _musl_tag(s: Signals) -> str:
    # Alpine <= 3.16 links OpenSSL 1.1, >= 3.17 links OpenSSL 3.0
    if not s.libssl or is_libssl_1x(s.libssl):
        return "linux-musl"
    return f"linux-musl-openssl-{s.libssl}"


PLATFORM_RULES: tuple[TagRule, ...] = (
    TagRule("darwin-arm64", lambda s: s.platform == "darwin" and s.arch == "arm64", lambda s: "darwin-arm64"),
    TagRule("darwin", lambda s: s.platform == "darwin", lambda s: "darwin"),
    TagRule("windows", lambda s: s.platform == "win32", lambda s: "windows"),
    TagRule("freebsd", lambda s: s.platform == "freebsd" and bool(s.target_distro), lambda s: str(s.target_distro)),
    TagRule("openbsd", lambda s: s.platform == "openbsd", lambda s: "openbsd"),
    TagRule("netbsd", lambda s: s.platform == "netbsd", lambda s: "netbsd"),
    TagRule("nixos", lambda s: _linux(s) and s.target_distro == "nixos", lambda s: "linux-nixos"),
    TagRule(
        "linux-arm64",
        lambda s: _linux(s) and s.arch == "arm64",
        lambda s: f"linux-arm64-openssl-{s.libssl or DEFAULT_LIBSSL}",
    ),
    TagRule(
        "linux-arm",
        lambda s: _linux(s) and s.arch == "arm",
        lambda s: f"linux-arm-openssl-{s.libssl or DEFAULT_LIBSSL}",
    ),
    TagRule("musl", lambda s: _linux(s) and s.target_distro == "musl", _musl_tag),
    TagRule(
        "distro-libssl",
        lambda s: _linux(s) and bool(s.target_distro) and bool(s.libssl),
        lambda s: f"{s.target_distro}-openssl-{s.libssl}",
    ),
)

FALLBACK_RULES: tuple[TagRule, ...] = (
    TagRule("libssl-only", lambda s: bool(s.libssl), lambda s: f"{DEFAULT_DISTRO}-openssl-{s.libssl}"),
    TagRule(
        "distro-only",
        lambda s: bool(s.target_distro),
        lambda s: f"{s.target_distro}-openssl-{DEFAULT_LIBSSL}",
    ),
    TagRule("nothing-known", lambda s: True, lambda s: f"{DEFAULT_DISTRO}-openssl-{DEFAULT_LIBSSL}"),
)


def _libssl_hint(family_distro: str | None) -> str:
    if family_distro == "debian":
        return (
            "Please manually install OpenSSL via `apt-get update -y && apt-get install -y openssl` "
            "and try again. If you're running in Docker, you may also try to replace your base "
            "image with `node:lts-slim`, which already ships with OpenSSL installed."
        )
    return "Please manually install OpenSSL and try again."


def _warn_missing_signals(s: Signals, notify: Notify) -> None:
    if not _linux(s):
        return
    if s.libssl is None:
        notify(
            "libssl:undefined",
            "Failed to detect the libssl/openssl version to use, and may not work as expected. "
            f'Defaulting to "openssl-{DEFAULT_LIBSSL}".\n{_libssl_hint(s.family_distro)}',
        )
    if s.target_distro is None:
        notify(
            "distro:undefined",
            f'Unknown native binaries for the Linux distro "{s.original_distro or "unknown"}". '
            f'Falling back to binaries built for "{DEFAULT_DISTRO}".',
        )


def _first_match(rules: tuple[TagRule, ...], s: Signals) -> TagRule | None:
    for rule in rules:
        if rule.applies(s):
            return rule
    return None


def compose_platform_tag(
    platform: str,
    arch: str,
    libssl: str | None = None,
    target_distro: str | None = None,
    family_distro: str | None = None,
    original_distro: str | None = None,
    notify: Notify | None = None,
) -> str:
    """Map host signals onto a platform tag such as ``debian-openssl-3.0.x``."""
    notify = notify or warn_once
    s = Signals(platform, arch, libssl, target_distro, family_distro, original_distro)
    _warn_missing_signals(s, notify)

    rule = _first_match(PLATFORM_RULES, s)
    if rule is None:
        if not _linux(s):
            notify(
                "platform:undefined",
                f'Detected unknown OS "{platform}" and may not work as expected. Defaulting to "linux".',
            )
        rule = _first_match(FALLBACK_RULES, s)
        assert rule is not None  # the last fallback always applies

    tag = rule.tag(s)
    logger.debug("Platform rule %r selected %s", rule.name, tag)
    return tag


def platform_tag_for(host: ResolvedHost, notify: Notify | None = None) -> str:
    """``compose_platform_tag`` over a ``ResolvedHost``."""
    return compose_platform_tag(
        platform=host.platform,
        arch=host.arch,
        libssl=host.libssl,
        target_distro=host.target_distro,
        family_distro=host.family_distro,
        original_distro=host.original_distro,
        notify=notify,
    )


def get_platform(
    prober: CommandProber | None = None,
    os_release_path: Path | str = OS_RELEASE_PATH,
    openssl_binary: str = "openssl",
    notify: Notify | None = None,
) -> str:
    """Detect the current host and return its platform tag.

    Raises:
        UnsupportedPlatformError: musl (Alpine) on a non-x64 architecture.
    """
    host = get_os(prober=prober, os_release_path=os_release_path, openssl_binary=openssl_binary)
    tag = platform_tag_for(host, notify=notify)
    if not is_known_platform(tag):
        logger.debug("Resolved platform %s has no published binaries", tag)
    return tag
