"""
Host resolution — OS/arch snapshot plus the Linux detection steps.

Names follow Node's ``process.platform`` / ``process.arch`` since the
binary catalog is keyed on them.
"""

from __future__ import annotations

import logging
import platform as _platform
import re
import sys
from pathlib import Path

from get_platform.core.models.host import ARCHITECTURES, ResolvedHost
from get_platform.core.services.distro import OS_RELEASE_PATH, resolve_distro
from get_platform.core.services.libssl import get_ssl_version
from get_platform.core.services.prober import CommandProber

logger = logging.getLogger(__name__)


class UnsupportedPlatformError(RuntimeError):
    """The host is a combination no native binary is built for."""


_ARCH_MAP = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv6l": "arm",
    "armv7l": "arm",
    "armv8l": "arm",
    "i386": "ia32",
    "i486": "ia32",
    "i586": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "ppc64le": "ppc64",
    "mips64": "mips",
}

_PLATFORM_PREFIXES = ("linux", "darwin", "win32", "cygwin", "freebsd", "openbsd", "netbsd", "sunos", "aix")

_FREEBSD_VERSION_RE = re.compile(r"^(\d+)\.?")

FREEBSD_TARGETS = ("freebsd11", "freebsd12", "freebsd13")


def normalize_arch(machine: str) -> str:
    """Map ``platform.machine()`` output onto a Node-style arch tag."""
    machine = machine.strip().lower()
    arch = _ARCH_MAP.get(machine, machine)
    if arch not in ARCHITECTURES:
        logger.debug("Unrecognised machine type %r, passing it through", machine)
    return arch


def normalize_platform(name: str) -> str:
    """Map ``sys.platform`` onto a Node-style platform name (``freebsd13`` -> ``freebsd``)."""
    name = name.strip().lower()
    for prefix in _PLATFORM_PREFIXES:
        if name.startswith(prefix):
            return prefix
    if name.startswith("solaris"):
        return "sunos"
    return name


def snapshot() -> tuple[str, str]:
    """Current ``(platform, arch)`` as seen by the interpreter."""
    return normalize_platform(sys.platform), normalize_arch(_platform.machine())


def freebsd_target(prober: CommandProber) -> str | None:
    """``freebsd13`` and friends, from ``freebsd-version``."""
    version = prober.first_success(["freebsd-version"])
    if not version or not version.strip():
        return None
    match = _FREEBSD_VERSION_RE.match(version.strip())
    if not match:
        return None
    target = f"freebsd{match.group(1)}"
    if target not in FREEBSD_TARGETS:
        logger.debug("No binaries are built for %s", target)
        return None
    return target


def check_supported(target_distro: str | None, arch: str) -> None:
    """Raise for a Linux host no native binary is built for."""
    if target_distro == "musl" and arch != "x64":
        raise UnsupportedPlatformError(
            "Linux Alpine (musl) is only supported on the amd64 (x86_64) "
            f"architecture, but this host reports {arch!r}. If you're running "
            "in Docker, use Docker Buildx to emulate amd64 on this device."
        )


def get_os(
    platform_name: str | None = None,
    arch: str | None = None,
    prober: CommandProber | None = None,
    os_release_path: Path | str = OS_RELEASE_PATH,
    openssl_binary: str = "openssl",
) -> ResolvedHost:
    """Collect every signal the composer needs.

    Raises:
        UnsupportedPlatformError: musl (Alpine) on anything but x64.
    """
    if platform_name is None or arch is None:
        current_platform, current_arch = snapshot()
        platform_name = platform_name or current_platform
        arch = arch or current_arch
    prober = prober or CommandProber()

    if platform_name == "freebsd":
        target = freebsd_target(prober)
        if target:
            return ResolvedHost(platform="freebsd", arch=arch, target_distro=target)

    if platform_name != "linux":
        return ResolvedHost(platform=platform_name, arch=arch)

    distro = resolve_distro(os_release_path)

    check_supported(distro.target_distro, arch)

    libssl = get_ssl_version(
        arch=arch,
        target_distro=distro.target_distro,
        prober=prober,
        openssl_binary=openssl_binary,
    )

    return ResolvedHost(
        platform="linux",
        arch=arch,
        libssl=libssl,
        original_distro=distro.original_distro,
        family_distro=distro.family_distro,
        target_distro=distro.target_distro,
    )
