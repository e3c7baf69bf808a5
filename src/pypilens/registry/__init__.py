from __future__ import annotations

from pypilens.registry.client import PackageNotFoundError, RegistryClient, RegistryError, normalize_name
from pypilens.registry.models import (
    DownloadPoint,
    DownloadStats,
    PackageData,
    PackageInfo,
    Release,
    ReleaseFile,
    TimelinePoint,
)

__all__ = [
    "DownloadPoint",
    "DownloadStats",
    "PackageData",
    "PackageInfo",
    "PackageNotFoundError",
    "RegistryClient",
    "RegistryError",
    "Release",
    "ReleaseFile",
    "TimelinePoint",
    "normalize_name",
]
