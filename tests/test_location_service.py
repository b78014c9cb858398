"""
Unit tests for the location resolver
"""

import httpx
import pytest

from agriweather.core.config import SourceConfig
from agriweather.core.errors import (
    ConfigurationError,
    NotFoundError,
    UpstreamUnavailable,
    ValidationError,
)
from agriweather.services.Location_service import LocationResolver
from conftest import OWM_GEO_DIRECT, OWM_GEO_REVERSE, FakeUpstream, owm_geocode_body


CONFIGURED = SourceConfig(primary_key="owm-key")


class TestLocationResolver:

    async def test_resolve_by_name(self):
        upstream = FakeUpstream({OWM_GEO_DIRECT: owm_geocode_body()})
        resolver = LocationResolver(CONFIGURED, transport=upstream.transport)

        location = await resolver.resolve_by_name("  Guntur ")

        assert location.display_name == "Guntur, Andhra Pradesh, IN"
        assert location.coordinates.latitude == pytest.approx(16.3067)
        assert upstream.calls[0].url.params["q"] == "Guntur"
        assert len(upstream.calls) == 1

    async def test_resolve_by_coordinates_omits_empty_parts(self):
        upstream = FakeUpstream({OWM_GEO_REVERSE: owm_geocode_body(name="Tenali", state=None)})
        resolver = LocationResolver(CONFIGURED, transport=upstream.transport)

        location = await resolver.resolve_by_coordinates(16.24, 80.64)

        assert location.display_name == "Tenali, IN"
        assert upstream.calls[0].url.params["lat"] == "16.24"
        assert len(upstream.calls) == 1

    async def test_empty_result_is_not_found(self):
        upstream = FakeUpstream({OWM_GEO_REVERSE: []})
        resolver = LocationResolver(CONFIGURED, transport=upstream.transport)

        with pytest.raises(NotFoundError):
            await resolver.resolve_by_coordinates(0.0, -30.0)
        assert len(upstream.calls) == 1

    async def test_upstream_error_is_not_retried(self):
        upstream = FakeUpstream({OWM_GEO_DIRECT: httpx.Response(503)})
        resolver = LocationResolver(CONFIGURED, transport=upstream.transport)

        with pytest.raises(UpstreamUnavailable):
            await resolver.resolve_by_name("Guntur")
        assert len(upstream.calls) == 1

    async def test_malformed_body_is_upstream_failure(self):
        upstream = FakeUpstream({OWM_GEO_DIRECT: {"cod": 401}})
        resolver = LocationResolver(CONFIGURED, transport=upstream.transport)

        with pytest.raises(UpstreamUnavailable):
            await resolver.resolve_by_name("Guntur")

    @pytest.mark.parametrize("lat, lon", [(91, 0), (-90.5, 0), (0, 180.1), (0, -181), (None, 10)])
    async def test_invalid_coordinates_fail_before_io(self, lat, lon):
        upstream = FakeUpstream({})
        resolver = LocationResolver(CONFIGURED, transport=upstream.transport)

        with pytest.raises(ValidationError):
            await resolver.resolve_by_coordinates(lat, lon)
        assert upstream.calls == []

    async def test_boundary_coordinates_are_valid(self):
        upstream = FakeUpstream({OWM_GEO_REVERSE: owm_geocode_body(name="Edge")})
        resolver = LocationResolver(CONFIGURED, transport=upstream.transport)

        location = await resolver.resolve_by_coordinates(-90, 180)

        assert location.display_name.startswith("Edge")

    async def test_blank_name_is_rejected(self):
        resolver = LocationResolver(CONFIGURED, transport=FakeUpstream({}).transport)

        with pytest.raises(ValidationError):
            await resolver.resolve_by_name("")

    async def test_missing_credential_is_configuration_error(self):
        upstream = FakeUpstream({})
        resolver = LocationResolver(SourceConfig(), transport=upstream.transport)

        with pytest.raises(ConfigurationError) as exc:
            await resolver.resolve_by_coordinates(16.3, 80.4)
        assert "OPENWEATHER" not in exc.value.message
        assert upstream.calls == []
