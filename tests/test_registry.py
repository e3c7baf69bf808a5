from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from pypilens.registry import (
    DownloadStats,
    PackageData,
    PackageNotFoundError,
    RegistryClient,
    RegistryError,
    normalize_name,
)


def _client(handler) -> RegistryClient:
    return RegistryClient(
        base_url="https://pypi.test/",
        stats_url="https://stats.test/api/packages",
        transport=httpx.MockTransport(handler),
    )


def test_package_data_parsing(package_payload: dict[str, Any]) -> None:
    data = PackageData.from_json(package_payload)

    assert data.info.name == "demo"
    assert data.info.source_url == "https://github.com/example/demo"
    assert data.info.install_command == "pip install demo"
    assert not data.info.is_rst
    assert set(data.releases) == {"1.0.0", "1.1.0", "0.9.0", "0.0.1"}

    first = data.releases["1.0.0"].files[0]
    assert first.is_wheel and first.kind_label == "WHEEL"
    assert first.sha256 == "0123456789abcdef" * 4
    assert first.upload_time is not None and first.upload_time.year == 2023


def test_release_timeline_skips_empty_and_sorts_oldest_first(package_payload: dict[str, Any]) -> None:
    timeline = PackageData.from_json(package_payload).release_timeline()
    assert [p.version for p in timeline] == ["0.9.0", "1.0.0", "1.1.0"]
    assert timeline[1].size == 2048 + 1024


def test_releases_newest_first_puts_undated_last(package_payload: dict[str, Any]) -> None:
    releases = PackageData.from_json(package_payload).releases_newest_first()
    assert [r.version for r in releases] == ["1.1.0", "1.0.0", "0.9.0", "0.0.1"]


def test_sorted_files_sdist_first(package_payload: dict[str, Any]) -> None:
    release = PackageData.from_json(package_payload).releases["1.0.0"]
    assert [f.packagetype for f in release.sorted_files()] == ["sdist", "bdist_wheel"]
    assert release.has_wheel and release.has_sdist


def test_latest_size(package_payload: dict[str, Any]) -> None:
    assert PackageData.from_json(package_payload).latest_size() == 1536
    package_payload["info"]["version"] = "9.9.9"
    assert PackageData.from_json(package_payload).latest_size() == 0


def test_minimal_payload_tolerated() -> None:
    data = PackageData.from_json({"info": {"name": "x", "version": "1"}})
    assert data.releases == {}
    assert data.release_timeline() == []
    assert data.info.summary is None


def test_download_stats(stats_payload: dict[str, Any]) -> None:
    stats = DownloadStats.from_json(stats_payload)
    assert stats.total() == 400
    assert [p.date for p in stats.recent(2)] == ["2024-01-02", "2024-01-03"]
    assert stats.recent(0) == []


def test_normalize_name() -> None:
    assert normalize_name("Foo.Bar_baz") == "foo-bar-baz"
    assert normalize_name("  requests ") == "requests"


def test_fetch_package_builds_url(package_payload: dict[str, Any]) -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=package_payload)

    with _client(handler) as client:
        data = client.fetch_package("Demo_Pkg")

    assert seen == ["https://pypi.test/pypi/demo-pkg/json"]
    assert data.info.name == "demo"


def test_fetch_package_not_found() -> None:
    with _client(lambda request: httpx.Response(404)) as client:
        with pytest.raises(PackageNotFoundError) as exc:
            client.fetch_package("missing")
    assert exc.value.name == "missing"
    assert "Package not found" in str(exc.value)


def test_fetch_package_server_error() -> None:
    with _client(lambda request: httpx.Response(500)) as client:
        with pytest.raises(RegistryError) as exc:
            client.fetch_package("demo")
    assert not isinstance(exc.value, PackageNotFoundError)


def test_fetch_package_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    with _client(handler) as client:
        with pytest.raises(RegistryError):
            client.fetch_package("demo")


def test_fetch_package_invalid_json() -> None:
    with _client(lambda request: httpx.Response(200, content=b"<html>")) as client:
        with pytest.raises(RegistryError):
            client.fetch_package("demo")


def test_fetch_package_empty_name() -> None:
    with _client(lambda request: httpx.Response(200, json={})) as client:
        with pytest.raises(ValueError):
            client.fetch_package("  ")


def test_fetch_download_stats(stats_payload: dict[str, Any]) -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, content=json.dumps(stats_payload).encode())

    with _client(handler) as client:
        stats = client.fetch_download_stats("demo")

    assert seen == ["https://stats.test/api/packages/demo/overall"]
    assert stats is not None and stats.total() == 400


def test_fetch_download_stats_failure_is_none(caplog: pytest.LogCaptureFixture) -> None:
    with _client(lambda request: httpx.Response(503)) as client:
        with caplog.at_level("WARNING", logger="pypilens.registry.client"):
            assert client.fetch_download_stats("demo") is None
    assert "Download stats unavailable" in caplog.text


def test_fetch_download_stats_malformed_values_is_none(caplog: pytest.LogCaptureFixture) -> None:
    payload = {"data": [{"date": "2024-01-01", "downloads": "n/a"}]}
    with _client(lambda request: httpx.Response(200, json=payload)) as client:
        with caplog.at_level("WARNING", logger="pypilens.registry.client"):
            assert client.fetch_download_stats("demo") is None
    assert "could not be parsed" in caplog.text
