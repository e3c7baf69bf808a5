"""HTTP client for the PyPI JSON API and the download-stats endpoint."""

from __future__ import annotations

import logging
import re
from types import TracebackType

import httpx

from pypilens.config import DEFAULT_INDEX_URL, DEFAULT_STATS_URL, RegistryConfig
from pypilens.registry.models import DownloadStats, PackageData

logger = logging.getLogger(__name__)

_RE_NAME_SEPARATORS = re.compile(r"[-_.]+")


class RegistryError(RuntimeError):
    pass


class PackageNotFoundError(RegistryError):
    def __init__(self, name: str):
        super().__init__(f"Package not found: {name}")
        self.name = name


def normalize_name(name: str) -> str:
    """PEP 503 project name normalization."""
    return _RE_NAME_SEPARATORS.sub("-", (name or "").strip()).lower()


class RegistryClient:
    def __init__(
        self,
        *,
        base_url: str = DEFAULT_INDEX_URL,
        stats_url: str = DEFAULT_STATS_URL,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.stats_url = stats_url.rstrip("/")
        self._client = httpx.Client(
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_config(cls, config: RegistryConfig, *, transport: httpx.BaseTransport | None = None) -> RegistryClient:
        return cls(
            base_url=config.base_url,
            stats_url=config.stats_url,
            timeout=config.timeout,
            transport=transport,
        )

    def __enter__(self) -> RegistryClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def fetch_package(self, name: str) -> PackageData:
        """
        Fetch `/pypi/<name>/json` and parse it.

        Raises:
            ValueError: empty package name.
            PackageNotFoundError: the registry answered 404.
            RegistryError: any other HTTP or transport failure.
        """
        project = normalize_name(name)
        if not project:
            raise ValueError("package name cannot be empty")

        url = f"{self.base_url}/pypi/{project}/json"
        logger.debug("GET %s", url)
        try:
            resp = self._client.get(url)
        except httpx.HTTPError as e:
            raise RegistryError(f"Failed to fetch data for {name}: {e}") from e

        if resp.status_code == 404:
            raise PackageNotFoundError(name)
        try:
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            raise RegistryError(f"Failed to fetch data for {name}: HTTP {resp.status_code}") from e
        except ValueError as e:
            raise RegistryError(f"Registry returned invalid JSON for {name}") from e

        if not isinstance(data, dict):
            raise RegistryError(f"Registry returned an unexpected payload for {name}")
        return PackageData.from_json(data)

    def fetch_download_stats(self, name: str) -> DownloadStats | None:
        """Best-effort download stats; None when the endpoint is unavailable."""
        project = normalize_name(name)
        if not project:
            return None

        url = f"{self.stats_url}/{project}/overall"
        try:
            resp = self._client.get(url)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Download stats unavailable for %s: %s", project, e)
            return None

        if not isinstance(data, dict):
            logger.warning("Download stats for %s had an unexpected shape", project)
            return None
        try:
            return DownloadStats.from_json(data)
        except (TypeError, ValueError) as e:
            logger.warning("Download stats for %s could not be parsed: %s", project, e)
            return None
