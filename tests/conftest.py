"""
Pytest configuration and shared fixtures for placekit tests.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

import orjson
import pytest

from placekit.cli.common.context import clear_cli_context
from placekit.core.codec import PlacekeyCodec
from placekit.core.spatial import SpatialQuery

# Reference points with known identifiers
SF_LAT, SF_LNG = 37.7371, -122.44283
SF_PLACEKEY = "@5vg-82n-kzz"
SF_H3 = "8a2830953157fff"
# Center of a second San Francisco cell
MISSION_LAT, MISSION_LNG = 37.7787130802509, -122.41907986670628
MISSION_PLACEKEY = "@5vg-7gq-tvz"
MISSION_H3 = "8a2830828767fff"
NULL_ISLAND_PLACEKEY = "@dvt-smp-tvz"
NULL_ISLAND_H3 = "8a754e64992ffff"


class FakeClock:
    """Manually advanced clock whose sleep moves time forward."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class ListPages:
    """Minimal paged collection over a list."""

    def __init__(self, records: Sequence[Any]) -> None:
        self.records = list(records)
        self.page_sizes: list[int] = []

    def count(self) -> int:
        return len(self.records)

    def iter_pages(self, page_size: int) -> Iterator[Sequence[Any]]:
        for start in range(0, len(self.records), page_size):
            page = self.records[start : start + page_size]
            self.page_sizes.append(len(page))
            yield page


@pytest.fixture
def codec() -> PlacekeyCodec:
    return PlacekeyCodec()


@pytest.fixture
def spatial(codec: PlacekeyCodec) -> SpatialQuery:
    return SpatialQuery(codec)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(start=1000.0)


@pytest.fixture
def make_response(mocker):
    """Build a fake requests.Response with a status code and a body."""

    def _make(status_code: int = 200, body: Any = None, text: str | None = None):
        response = mocker.Mock()
        response.status_code = status_code
        if text is None:
            text = "" if body is None else orjson.dumps(body).decode("utf-8")
        response.text = text
        return response

    return _make


@pytest.fixture
def mock_session(mocker):
    """Fake requests.Session; configure ``post`` / ``get`` per test."""
    session = mocker.Mock()
    session.headers = {}
    return session


@pytest.fixture(autouse=True)
def _reset_cli_context() -> Iterator[None]:
    yield
    clear_cli_context()
