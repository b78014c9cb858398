"""
Error taxonomy shared by services and routes.

Each error carries the HTTP status the API surface renders it with. Messages
for upstream and configuration failures are fixed and generic so that
credential names or values never reach a client.
"""


class AgriWeatherError(Exception):
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AgriWeatherError):
    """Malformed caller input. Never retried."""
    status_code = 400
    default_message = "Invalid request"


class NotFoundError(AgriWeatherError):
    """The geocoder returned zero matches."""
    status_code = 404
    default_message = "No location found"


class UpstreamUnavailable(AgriWeatherError):
    """Network failure, non-2xx response or malformed payload from a source."""
    status_code = 500
    default_message = "Upstream service unavailable"


class ConfigurationError(AgriWeatherError):
    """A required credential is missing and no fallback exists."""
    status_code = 500
    default_message = "Server configuration error"
