"""
Unit tests for source reliability reporting
"""

import pytest

from agriweather.core.config import SourceConfig
from agriweather.services.Reliability_service import ReliabilityScorer


class TestReliabilityScorer:

    def setup_method(self):
        self.scorer = ReliabilityScorer()

    @pytest.mark.parametrize("primary, secondary, expected", [
        ("k1", "k2", 99),
        ("k1", None, 98),
        (None, "k2", 97),
        (None, None, 85),
        ("demo", "demo", 85),
    ])
    def test_overall_reliability(self, primary, secondary, expected):
        config = SourceConfig(primary_key=primary, secondary_key=secondary)

        assert self.scorer.overall_reliability(config) == expected

    def test_statuses_list_every_tier_in_priority_order(self):
        statuses = self.scorer.source_statuses(SourceConfig(secondary_key="k2"))

        assert [(s.source_name, s.configured, s.reliability_score) for s in statuses] == [
            ("Primary API", False, 98),
            ("Secondary API", True, 97),
            ("Simulation", True, 85),
        ]

    def test_config_repr_hides_credentials(self):
        config = SourceConfig(primary_key="secret-owm", secondary_key="secret-wapi")

        assert "secret" not in repr(config)
