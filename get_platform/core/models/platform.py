"""
Platform catalog — every tag a native binary is published for.

The composer never picks from this list; it builds a tag from the
host signals and the catalog is only consulted to tell whether a
binary for that tag is expected to exist.
"""

from __future__ import annotations

PLATFORMS: tuple[str, ...] = (
    "darwin",
    "darwin-arm64",
    "debian-openssl-1.0.x",
    "debian-openssl-1.1.x",
    "debian-openssl-3.0.x",
    "rhel-openssl-1.0.x",
    "rhel-openssl-1.1.x",
    "rhel-openssl-3.0.x",
    "linux-arm64-openssl-1.0.x",
    "linux-arm64-openssl-1.1.x",
    "linux-arm64-openssl-3.0.x",
    "linux-arm-openssl-1.0.x",
    "linux-arm-openssl-1.1.x",
    "linux-arm-openssl-3.0.x",
    "linux-musl",
    "linux-musl-openssl-3.0.x",
    "linux-nixos",
    "windows",
    "freebsd11",
    "freebsd12",
    "freebsd13",
    "openbsd",
    "netbsd",
    "arm",
)


def is_known_platform(tag: str) -> bool:
    """Whether ``tag`` names a published binary variant."""
    return tag in PLATFORMS
