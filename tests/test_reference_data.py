"""
Tests for the rover records and the glossary.
"""

from datetime import datetime, timezone

import pytest

from rovers import ROVER_LOCATIONS, InvalidRoverError, validate_rover
from terminology import get_term_definition, get_terms_by_category, search_terms


class TestRoverLocations:
    def test_curiosity(self) -> None:
        rover = ROVER_LOCATIONS["curiosity"]
        assert rover.name == "Curiosity"
        assert rover.longitude == 137.4417
        assert rover.latitude == -4.5895
        assert rover.landing_date == datetime(2012, 8, 6, 5, 17, 57, tzinfo=timezone.utc)
        assert rover.landing_sol == 0

    def test_perseverance(self) -> None:
        rover = ROVER_LOCATIONS["perseverance"]
        assert rover.longitude == 77.4509
        assert rover.latitude == 18.4447
        assert rover.landing_date == datetime(2021, 2, 18, 20, 55, tzinfo=timezone.utc)

    def test_read_only(self) -> None:
        with pytest.raises(TypeError):
            ROVER_LOCATIONS["spirit"] = ROVER_LOCATIONS["curiosity"]


class TestValidateRover:
    @pytest.mark.parametrize("name", ["curiosity", " Curiosity ", "PERSEVERANCE"])
    def test_normalizes(self, name) -> None:
        assert validate_rover(name) == name.strip().lower()

    def test_unknown(self) -> None:
        with pytest.raises(InvalidRoverError) as exc:
            validate_rover("opportunity")
        assert exc.value.code == "INVALID_ROVER"

    def test_not_a_string(self) -> None:
        with pytest.raises(InvalidRoverError) as exc:
            validate_rover(42)
        assert exc.value.code == "INVALID_TYPE"


class TestTerminology:
    def test_lookup_is_case_insensitive(self) -> None:
        assert get_term_definition("  LTST ").term == "LTST"

    def test_unknown_term(self) -> None:
        assert get_term_definition("warp drive") is None

    def test_by_category(self) -> None:
        time_terms = {t.term for t in get_terms_by_category("time")}
        assert {"MTC", "LTST", "Sol", "MSD"} <= time_terms
        assert get_terms_by_category("weather") == []

    def test_search(self) -> None:
        assert {t.term for t in search_terms("utc")} >= {"UTC", "MTC"}

    def test_empty_search(self) -> None:
        assert search_terms("   ") == []
