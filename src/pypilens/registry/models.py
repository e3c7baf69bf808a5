from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pypilens.utils.format import parse_timestamp


@dataclass(frozen=True, slots=True)
class ReleaseFile:
    filename: str
    packagetype: str
    size: int
    upload_time: datetime | None
    url: str
    sha256: str | None = None
    requires_python: str | None = None
    yanked: bool = False

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ReleaseFile:
        digests = data.get("digests") or {}
        return cls(
            filename=data.get("filename") or "",
            packagetype=data.get("packagetype") or "",
            size=int(data.get("size") or 0),
            upload_time=parse_timestamp(data.get("upload_time_iso_8601") or data.get("upload_time")),
            url=data.get("url") or "",
            sha256=digests.get("sha256"),
            requires_python=data.get("requires_python"),
            yanked=bool(data.get("yanked", False)),
        )

    @property
    def is_wheel(self) -> bool:
        return self.packagetype == "bdist_wheel"

    @property
    def is_sdist(self) -> bool:
        return self.packagetype == "sdist"

    @property
    def kind_label(self) -> str:
        return "WHEEL" if self.is_wheel else "SOURCE"


@dataclass(frozen=True, slots=True)
class Release:
    version: str
    files: tuple[ReleaseFile, ...] = ()

    @property
    def upload_time(self) -> datetime | None:
        return self.files[0].upload_time if self.files else None

    @property
    def total_size(self) -> int:
        return sum(f.size for f in self.files)

    @property
    def has_wheel(self) -> bool:
        return any(f.is_wheel for f in self.files)

    @property
    def has_sdist(self) -> bool:
        return any(f.is_sdist for f in self.files)

    def sorted_files(self) -> list[ReleaseFile]:
        # Stable sort: sdists first, everything else keeps registry order.
        return sorted(self.files, key=lambda f: 0 if f.is_sdist else 1)


@dataclass(frozen=True, slots=True)
class TimelinePoint:
    version: str
    uploaded_at: datetime
    size: int


@dataclass(frozen=True, slots=True)
class PackageInfo:
    name: str
    version: str
    summary: str | None = None
    description: str | None = None
    description_content_type: str | None = None
    home_page: str | None = None
    project_urls: dict[str, str] = field(default_factory=dict)
    requires_python: str | None = None
    license: str | None = None
    author: str | None = None
    requires_dist: tuple[str, ...] = ()

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> PackageInfo:
        return cls(
            name=data.get("name") or "",
            version=data.get("version") or "",
            summary=data.get("summary") or None,
            description=data.get("description") or None,
            description_content_type=data.get("description_content_type") or None,
            home_page=data.get("home_page") or None,
            project_urls=dict(data.get("project_urls") or {}),
            requires_python=data.get("requires_python") or None,
            license=data.get("license") or None,
            author=data.get("author") or None,
            requires_dist=tuple(data.get("requires_dist") or ()),
        )

    @property
    def source_url(self) -> str | None:
        return self.project_urls.get("Source")

    @property
    def is_rst(self) -> bool:
        return (self.description_content_type or "").lower().startswith("text/x-rst")

    @property
    def install_command(self) -> str:
        return f"pip install {self.name}"


@dataclass(frozen=True, slots=True)
class PackageData:
    info: PackageInfo
    releases: dict[str, Release] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> PackageData:
        releases = {
            version: Release(version=version, files=tuple(ReleaseFile.from_json(f) for f in (files or [])))
            for version, files in (data.get("releases") or {}).items()
        }
        return cls(info=PackageInfo.from_json(data.get("info") or {}), releases=releases)

    def release_timeline(self) -> list[TimelinePoint]:
        """Releases with at least one dated file, oldest first."""
        points = [
            TimelinePoint(version=r.version, uploaded_at=r.upload_time, size=r.total_size)
            for r in self.releases.values()
            if r.files and r.upload_time is not None
        ]
        return sorted(points, key=lambda p: p.uploaded_at)

    def releases_newest_first(self) -> list[Release]:
        dated = [r for r in self.releases.values() if r.upload_time is not None]
        undated = [r for r in self.releases.values() if r.upload_time is None]
        return sorted(dated, key=lambda r: r.upload_time, reverse=True) + undated

    def latest_size(self) -> int:
        release = self.releases.get(self.info.version)
        if release is None or not release.files:
            return 0
        return release.files[0].size


@dataclass(frozen=True, slots=True)
class DownloadPoint:
    date: str
    downloads: int


@dataclass(frozen=True, slots=True)
class DownloadStats:
    points: tuple[DownloadPoint, ...] = ()

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> DownloadStats:
        return cls(
            points=tuple(
                DownloadPoint(date=str(p.get("date") or ""), downloads=int(p.get("downloads") or 0))
                for p in (data.get("data") or [])
                if isinstance(p, dict)
            )
        )

    def total(self) -> int:
        return sum(p.downloads for p in self.points)

    def recent(self, days: int = 30) -> list[DownloadPoint]:
        if days <= 0:
            return []
        return list(self.points[-days:])
