from abc import ABC, abstractmethod
from agriweather.models.alert_model import Alert


class AlertRepository(ABC):
    """
    Storage for generated alerts. Implementations report failures by
    returning False / an empty list so that alert generation never fails
    because storage is down.
    """

    @abstractmethod
    async def save_alerts(self, alerts: list[Alert]) -> bool:
        """Persist alerts, newest first."""
        pass

    @abstractmethod
    async def get_recent_alerts(self, limit: int = 20) -> list[Alert]:
        """Return the most recent alerts, newest first."""
        pass
