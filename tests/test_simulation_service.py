"""
Unit tests for the deterministic weather simulator
"""

from datetime import date, datetime, timedelta

from agriweather.services.Simulation_service import (
    DeterministicSimulator,
    location_hash,
    season_for,
)


class TestLocationHash:
    """The rolling hash must match the stored simulated forecasts."""

    def test_empty_string_hashes_to_zero(self):
        assert location_hash("") == 0

    def test_known_values(self):
        assert location_hash("a") == 97
        # 98 + (97 << 5) - 97
        assert location_hash("ab") == 3105

    def test_uses_utf16_code_units(self):
        # U+1F600 is the surrogate pair D83D DE00
        assert location_hash("\U0001F600") == 0xDE00 + 0xD83D * 31

    def test_wraps_to_signed_32_bit(self):
        h = location_hash("Guntur, Andhra Pradesh, India " * 20)
        assert -2**31 <= h < 2**31


class TestSeason:

    def test_month_mapping(self):
        assert [season_for(m) for m in range(1, 13)] == [
            "Winter", "Winter",
            "Summer", "Summer", "Summer",
            "Monsoon", "Monsoon", "Monsoon", "Monsoon",
            "Post-Monsoon",
            "Winter", "Winter",
        ]


class TestDeterministicSimulator:

    def setup_method(self):
        self.simulator = DeterministicSimulator()

    def test_same_inputs_give_identical_output(self):
        first = self.simulator.simulate("Guntur", date(2026, 10, 19))
        second = self.simulator.simulate("Guntur", date(2026, 10, 19))

        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_time_of_day_does_not_matter(self):
        morning = self.simulator.simulate("Guntur", datetime(2026, 10, 19, 6, 0))
        evening = self.simulator.simulate("Guntur", datetime(2026, 10, 19, 23, 59))

        assert morning == evening

    def test_different_locations_diverge(self):
        places = ["Guntur", "Nashik", "Ludhiana", "Mysuru", "Indore", "Patna"]
        curves = {
            tuple(f.temperature_c for f in self.simulator.simulate(p, date(2026, 4, 10)).forecast)
            for p in places
        }
        assert len(curves) == len(places)

    def test_seven_consecutive_days(self):
        snapshot = self.simulator.simulate("Guntur", date(2026, 12, 29))

        assert len(snapshot.forecast) == 7
        assert [f.date for f in snapshot.forecast] == [
            date(2026, 12, 29) + timedelta(days=i) for i in range(7)
        ]

    def test_provenance(self):
        snapshot = self.simulator.simulate("Guntur", date(2026, 10, 19))

        assert snapshot.is_simulated is True
        assert snapshot.source_name == "Simulation"
        assert snapshot.reliability_score == 85
        assert snapshot.location.display_name == "Guntur"
        assert snapshot.location.country == "IN"

    def test_current_is_day_zero(self):
        snapshot = self.simulator.simulate("Warangal", date(2026, 7, 2))
        today = snapshot.forecast[0]

        assert snapshot.current.temperature_c == today.temperature_c
        assert snapshot.current.humidity_pct == today.humidity_pct
        assert snapshot.current.condition_text == today.condition_text

    def test_values_stay_near_season_base(self):
        # Summer base 32C, location spread 3 and daily amplitude 2
        snapshot = self.simulator.simulate("Anantapur", date(2026, 4, 15))

        for day in snapshot.forecast:
            assert 27 <= day.temperature_c <= 37
            assert 0 <= day.humidity_pct <= 100
            assert day.precipitation_mm == 0.0
        assert 0 <= snapshot.current.wind_speed_kph <= 20

    def test_monsoon_days_may_rain(self):
        snapshot = self.simulator.simulate("Kochi", date(2026, 7, 15))

        for day in snapshot.forecast:
            assert 0 <= day.precipitation_mm <= 20
            if day.precipitation_mm > 0:
                assert "rain" in day.condition_text.lower()
