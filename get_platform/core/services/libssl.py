"""
libssl resolver — find which OpenSSL ABI the host links against.

Returns the version without its patch level (``"1.1.x"``), or None.

The installed ``libssl.so`` filename is trusted over the ``openssl``
binary: build and runtime environments can differ (serverless
platforms ship an old runtime libssl next to a newer build-time
openssl), and when a distro carries several libssl versions the
sorted listing puts the older, ABI-compatible one first.

Lookup order, stopping at the first parseable answer:

1. distro-specific library directories
2. the dynamic linker cache, plus the rhel lib64 directories
3. ``openssl version -v``
"""

from __future__ import annotations

import logging
import re

from get_platform.core.models.host import LibsslVersion
from get_platform.core.services.prober import CommandProber

logger = logging.getLogger(__name__)

_LIBSSL_SO_RE = re.compile(r"libssl\.so\.(\d)(\.\d)?")
_OPENSSL_BIN_RE = re.compile(r"^OpenSSL\s(\d+\.\d+)\.\d+")

# ``ldconfig -p`` lines look like
#   libssl.so.1.1 (libc6,hard-float) => /usr/lib/arm-linux-gnueabihf/libssl.so.1.1
# Keep only the filename after ``=>``. The second sed uses ``|`` as its
# separator because the paths contain ``/``.
LDCONFIG_LIBSSL = r'ldconfig -p | sed "s/.*=>\s*//" | sed "s|.*/||" | grep libssl | sort'

GENERIC_LIBSSL_COMMANDS: tuple[str, ...] = (
    LDCONFIG_LIBSSL,
    "ls /lib64 | grep libssl",
    "ls /usr/lib64 | grep libssl",
)


def is_libssl_1x(version: str) -> bool:
    return version.startswith("1.")


def sanitise_ssl_version(version: str) -> str:
    """Collapse OpenSSL 3+ minors onto ``.0``: ``3.1.x`` becomes ``3.0.x``."""
    if is_libssl_1x(version):
        return version
    parts = version.split(".")
    parts[1] = "0"
    return ".".join(parts)


def _as_supported(version: str) -> LibsslVersion | None:
    if version in ("1.0.x", "1.1.x", "3.0.x"):
        return version  # type: ignore[return-value]
    logger.debug("Ignoring unsupported libssl version %s", version)
    return None


def parse_libssl_version(text: str) -> LibsslVersion | None:
    """``"libssl.so.3"`` -> ``"3.0.x"``, ``"libssl.so.1.1"`` -> ``"1.1.x"``."""
    match = _LIBSSL_SO_RE.search(text)
    if not match:
        return None
    partial = f"{match.group(1)}{match.group(2) or '.0'}.x"
    return _as_supported(sanitise_ssl_version(partial))


def parse_openssl_version(text: str) -> LibsslVersion | None:
    """``"OpenSSL 3.0.2 15 Mar 2022 (Library: ...)"`` -> ``"3.0.x"``."""
    match = _OPENSSL_BIN_RE.match(text)
    if not match:
        return None
    return _as_supported(sanitise_ssl_version(f"{match.group(1)}.x"))


def arch_from_uname(prober: CommandProber) -> str | None:
    """``uname -m`` output, e.g. ``x86_64`` or ``aarch64``."""
    output = prober.first_success(["uname -m"])
    return output.strip() if output else None


def libssl_search_paths(target_distro: str | None, uname_arch: str | None) -> list[str]:
    """Directories where the given distro keeps its libssl.so files."""
    if target_distro == "musl":
        logger.debug('Trying platform-specific paths for "alpine"')
        return ["/lib"]
    if target_distro == "debian":
        logger.debug('Trying platform-specific paths for "debian" (and "ubuntu")')
        return [f"/usr/lib/{uname_arch}-linux-gnu", f"/lib/{uname_arch}-linux-gnu"]
    if target_distro == "rhel":
        logger.debug('Trying platform-specific paths for "rhel"')
        return ["/lib64", "/usr/lib64"]
    logger.debug('Don\'t know any platform-specific paths for "%s"', target_distro)
    return []


def get_ssl_version(
    arch: str,
    target_distro: str | None,
    prober: CommandProber | None = None,
    openssl_binary: str = "openssl",
) -> LibsslVersion | None:
    """Detect the libssl version for a Linux host. Never raises."""
    prober = prober or CommandProber()
    uname_arch = arch_from_uname(prober)

    specific = [f"ls {path} | grep libssl.so" for path in libssl_search_paths(target_distro, uname_arch)]
    filename = prober.first_success(specific)
    if filename:
        logger.debug("Found libssl.so file using platform-specific paths: %s", filename)
        version = parse_libssl_version(filename)
        logger.debug("The parsed libssl version is: %s", version)
        if version:
            return version

    logger.debug('Falling back to "ldconfig" and other generic paths')
    filename = prober.first_success(GENERIC_LIBSSL_COMMANDS)
    if filename:
        logger.debug('Found libssl.so file using "ldconfig" or other generic paths: %s', filename)
        version = parse_libssl_version(filename)
        if version:
            return version

    line = prober.first_success([f"{openssl_binary} version -v"])
    if line:
        logger.debug("Found openssl binary with version: %s", line)
        version = parse_openssl_version(line)
        logger.debug("The parsed openssl version is: %s", version)
        if version:
            return version

    logger.debug("Couldn't find any version of libssl or OpenSSL in the system (arch=%s)", arch)
    return None
