"""
Domain models — Pydantic types for platform resolution.

All models are re-exported here for convenient access:

    from get_platform.core.models import Action, Receipt, DistroInfo, ResolvedHost
"""

from get_platform.core.models.action import Action, Receipt
from get_platform.core.models.host import (
    ARCHITECTURES,
    SUPPORTED_LIBSSL_VERSIONS,
    Architecture,
    DistroInfo,
    LibsslVersion,
    ResolvedHost,
    TargetDistro,
)
from get_platform.core.models.platform import PLATFORMS, is_known_platform

__all__ = [
    # action.py
    "Action",
    # host.py
    "ARCHITECTURES",
    "Architecture",
    "DistroInfo",
    "LibsslVersion",
    # platform.py
    "PLATFORMS",
    "Receipt",
    "ResolvedHost",
    "SUPPORTED_LIBSSL_VERSIONS",
    "TargetDistro",
    "is_known_platform",
]
