"""Unit tests for deduplication logic.

Pure function tests - no mocks needed.
"""

import pytest

from src.core.earthquake import Earthquake
from src.core.dedup import (
    get_earthquake_ids,
    deduplicate,
    has_duplicate_ids,
)


@pytest.fixture
def sample_earthquake():
    """Create a sample earthquake."""
    return Earthquake(
        id="eq1",
        time=1_700_000_000_000,
        magnitude=4.0,
        place="Test Location",
        latitude=37.77,
        longitude=-122.42,
        depth_km=10.0,
        url="https://example.com",
    )


@pytest.fixture
def earthquakes(sample_earthquake):
    """Create list of earthquakes."""
    return [
        sample_earthquake,
        Earthquake(**{**sample_earthquake.__dict__, "id": "eq2"}),
        Earthquake(**{**sample_earthquake.__dict__, "id": "eq3"}),
    ]


class TestGetEarthquakeIds:
    """Tests for get_earthquake_ids() function."""

    def test_extracts_ids(self, earthquakes):
        """Should extract all earthquake IDs."""
        result = get_earthquake_ids(earthquakes)
        assert result == {"eq1", "eq2", "eq3"}

    def test_empty_list(self):
        """Should return empty set for empty list."""
        result = get_earthquake_ids([])
        assert result == set()


class TestDeduplicate:
    """Tests for deduplicate() function."""

    def test_unique_list_unchanged(self, earthquakes):
        """A list without repeats comes back in the same order."""
        assert deduplicate(earthquakes) == earthquakes

    def test_first_occurrence_wins(self, sample_earthquake):
        """Later copies of an id are dropped, even if their data differs."""
        updated = Earthquake(**{**sample_earthquake.__dict__, "magnitude": 5.5})
        other = Earthquake(**{**sample_earthquake.__dict__, "id": "eq2"})

        result = deduplicate([sample_earthquake, other, updated])

        assert [e.id for e in result] == ["eq1", "eq2"]
        assert result[0].magnitude == 4.0

    def test_idempotent(self, earthquakes):
        """Deduplicating twice gives the same result as once."""
        doubled = earthquakes + earthquakes
        once = deduplicate(doubled)
        assert deduplicate(once) == once

    @pytest.mark.parametrize("value", [None, "x", 7, {}])
    def test_non_list_yields_empty(self, value):
        assert deduplicate(value) == []


class TestHasDuplicateIds:
    """Tests for has_duplicate_ids() function."""

    def test_detects_repeats(self, earthquakes):
        assert has_duplicate_ids(earthquakes + earthquakes[:1])

    def test_no_repeats(self, earthquakes):
        assert not has_duplicate_ids(earthquakes)
        assert not has_duplicate_ids([])
