"""
Distro resolver — classify the Linux distro from ``/etc/os-release``.

Only ``ID`` and ``ID_LIKE`` are consulted. Classification is an
ordered rule table, first match wins, so a derivative like Manjaro
(``ID=manjaro``, ``ID_LIKE=arch``) only lands on the Arch rule after
every more specific rule has declined it.

Example release files::

    Alpine Linux => ID=alpine                                     => musl,   family alpine
    Raspbian     => ID=raspbian, ID_LIKE=debian                   => arm,    family debian
    Debian       => ID=debian                                     => debian, family debian
    Ubuntu       => ID=ubuntu, ID_LIKE=debian                     => debian, family debian
    Arch Linux   => ID=arch                                       => debian, family arch
    Manjaro      => ID=manjaro, ID_LIKE=arch                      => debian, family arch
    Red Hat      => ID=rhel, ID_LIKE=fedora                       => rhel,   family rhel
    CentOS       => ID=centos, ID_LIKE=rhel fedora                => rhel,   family rhel
    Alma Linux   => ID="almalinux", ID_LIKE="rhel centos fedora"  => rhel,   family rhel
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from pathlib import Path
from typing import NamedTuple

from get_platform.core.models.host import DistroInfo

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = Path("/etc/os-release")

_ID_RE = re.compile(r'^ID="?([^"\n]*)"?$', re.IGNORECASE | re.MULTILINE)
_ID_LIKE_RE = re.compile(r'^ID_LIKE="?([^"\n]*)"?$', re.IGNORECASE | re.MULTILINE)


class DistroRule(NamedTuple):
    """One row of the classification table."""

    name: str
    matches: Callable[[str, str], bool]     # (id, id_like) -> bool
    target_distro: str
    family_distro: str | None               # None → family is the ID itself


DISTRO_RULES: tuple[DistroRule, ...] = (
    DistroRule("alpine", lambda id_, like: id_ == "alpine", "musl", None),
    DistroRule("raspbian", lambda id_, like: id_ == "raspbian", "arm", "debian"),
    DistroRule("nixos", lambda id_, like: id_ == "nixos", "nixos", "nixos"),
    DistroRule("debian", lambda id_, like: id_ in ("debian", "ubuntu"), "debian", "debian"),
    DistroRule("rhel", lambda id_, like: id_ in ("rhel", "centos", "fedora"), "rhel", "rhel"),
    DistroRule(
        "debian-like",
        lambda id_, like: "debian" in like or "ubuntu" in like,
        "debian", "debian",
    ),
    # Arch ships a glibc/OpenSSL combination the debian binaries run on.
    DistroRule("arch-like", lambda id_, like: id_ == "arch" or "arch" in like, "debian", "arch"),
    DistroRule(
        "rhel-like",
        lambda id_, like: "centos" in like or "fedora" in like or "rhel" in like,
        "rhel", "rhel",
    ),
)


def _field(pattern: re.Pattern[str], text: str) -> str:
    match = pattern.search(text)
    return match.group(1).lower() if match and match.group(1) else ""


def parse_distro(os_release: str) -> DistroInfo:
    """Classify the contents of an os-release file.

    Pure function of its input: the same text always yields the
    same ``DistroInfo``.
    """
    distro_id = _field(_ID_RE, os_release)
    id_like = _field(_ID_LIKE_RE, os_release)
    original = distro_id or None

    info = DistroInfo(original_distro=original)
    for rule in DISTRO_RULES:
        if rule.matches(distro_id, id_like):
            info = DistroInfo(
                original_distro=original,
                family_distro=rule.family_distro or distro_id,
                target_distro=rule.target_distro,
            )
            break

    logger.debug("Found distro info: %s", info.model_dump())
    return info


def resolve_distro(path: Path | str = OS_RELEASE_PATH) -> DistroInfo:
    """Read and classify the release file; never raises.

    A missing or unreadable file yields an empty ``DistroInfo``.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Cannot read %s: %s", path, e)
        return DistroInfo()
    return parse_distro(content)
