"""
Host models — what the resolver learned about the machine.

``DistroInfo`` comes from the release file, ``ResolvedHost`` is the
full snapshot handed to the platform tag composer. Both are frozen:
they are built once per resolution and only read afterwards.
"""

from __future__ import annotations

from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict

# Node-style architecture tags (``process.arch``) used in binary names.
Architecture = Literal[
    "x32", "x64", "arm", "arm64", "s390", "s390x", "mipsel",
    "ia32", "mips", "ppc", "ppc64", "riscv64", "loong64",
]

ARCHITECTURES: tuple[str, ...] = get_args(Architecture)

TargetDistro = Literal[
    "rhel", "debian", "musl", "arm", "nixos",
    "freebsd11", "freebsd12", "freebsd13",
]

# Starting with 3.0, OpenSSL is ABI compatible within a major version.
LibsslVersion = Literal["1.0.x", "1.1.x", "3.0.x"]

SUPPORTED_LIBSSL_VERSIONS: tuple[str, ...] = get_args(LibsslVersion)


class DistroInfo(BaseModel):
    """Linux distro classification.

    - ``original_distro``: the ``ID`` declared in the release file
      (``arch``, ``alpine``, ``manjaro`` ...).
    - ``family_distro``: distros sharing a base and package manager
      (Ubuntu and Debian are both ``debian``).
    - ``target_distro``: the bucket native binaries are built for
      (Arch, Debian and Ubuntu all map to ``debian``, Alpine to ``musl``).
    """

    model_config = ConfigDict(frozen=True)

    original_distro: str | None = None
    family_distro: str | None = None
    target_distro: TargetDistro | None = None


class ResolvedHost(BaseModel):
    """Everything the composer needs, assembled once per invocation."""

    model_config = ConfigDict(frozen=True)

    platform: str
    arch: str
    libssl: LibsslVersion | None = None

    original_distro: str | None = None
    family_distro: str | None = None
    target_distro: TargetDistro | None = None

    @property
    def distro(self) -> DistroInfo:
        return DistroInfo(
            original_distro=self.original_distro,
            family_distro=self.family_distro,
            target_distro=self.target_distro,
        )

    def to_dict(self) -> dict:
        return self.model_dump()
