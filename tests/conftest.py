from __future__ import annotations

from typing import Any

import pytest

README = """<div align="center">
<img src="https://example.org/logo.png" alt="demo logo">
</div>

<h2>Features</h2>

| Feature | Status |
|---------|:------:|
| Fast    | **yes** |
| Small   | no |

Install with `pip install demo`.
"""


def make_file(filename: str, packagetype: str, size: int, upload_time: str) -> dict[str, Any]:
    return {
        "filename": filename,
        "packagetype": packagetype,
        "size": size,
        "upload_time": upload_time,
        "upload_time_iso_8601": upload_time + ".000000Z",
        "url": f"https://files.example.org/{filename}",
        "digests": {"sha256": "0123456789abcdef" * 4},
        "requires_python": ">=3.9",
        "yanked": False,
    }


@pytest.fixture
def package_payload() -> dict[str, Any]:
    return {
        "info": {
            "name": "demo",
            "version": "1.1.0",
            "summary": "A demo package.",
            "description": README,
            "description_content_type": "text/markdown",
            "home_page": "https://demo.example.org",
            "project_urls": {"Source": "https://github.com/example/demo"},
            "requires_python": ">=3.9",
            "license": "MIT",
            "author": "Example Dev",
            "requires_dist": ["httpx>=0.27"],
        },
        "releases": {
            "1.0.0": [
                make_file("demo-1.0.0-py3-none-any.whl", "bdist_wheel", 2048, "2023-03-01T10:00:00"),
                make_file("demo-1.0.0.tar.gz", "sdist", 1024, "2023-03-01T10:00:05"),
            ],
            "1.1.0": [
                make_file("demo-1.1.0.tar.gz", "sdist", 1536, "2024-01-05T09:30:00"),
            ],
            "0.9.0": [
                make_file("demo-0.9.0.tar.gz", "sdist", 900, "2022-07-14T08:00:00"),
            ],
            "0.0.1": [],
        },
    }


@pytest.fixture
def stats_payload() -> dict[str, Any]:
    return {
        "data": [
            {"category": "without_mirrors", "date": "2024-01-01", "downloads": 100},
            {"category": "without_mirrors", "date": "2024-01-02", "downloads": 250},
            {"category": "without_mirrors", "date": "2024-01-03", "downloads": 50},
        ]
    }


@pytest.fixture
def readme_text() -> str:
    return README
