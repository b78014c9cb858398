"""
Local file-based repository for generated alerts.
Uses a JSON file instead of MongoDB.
"""
import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError as ModelValidationError

from agriweather.core.logger import logs
from agriweather.models.alert_model import Alert
from agriweather.repos.base_repo import AlertRepository


class LocalAlertRepository(AlertRepository):
    """Keeps the newest ``max_alerts`` alerts in ``<base_dir>/alerts/alerts.json``."""

    def __init__(self, base_dir: str = "data", max_alerts: int = 50):
        self.alerts_dir = Path(base_dir) / "alerts"
        self.alerts_file = self.alerts_dir / "alerts.json"
        self.max_alerts = max_alerts

        # Create directories if they don't exist
        self.alerts_dir.mkdir(parents=True, exist_ok=True)

    def _load(self) -> list:
        """Stored records; an unreadable or non-list file counts as empty."""
        if not self.alerts_file.exists():
            return []
        try:
            with open(self.alerts_file, 'r', encoding="utf-8") as f:
                stored = json.load(f)
        except (OSError, ValueError) as e:
            logs.log(logging.WARNING, f"Ignoring unreadable alerts file: {str(e)}")
            return []
        if not isinstance(stored, list):
            logs.log(logging.WARNING, "Ignoring alerts file that does not hold a list")
            return []
        return stored

    def _write(self, records: list[dict]):
        # Temp file + rename so a crash never leaves a truncated store
        fd, tmp_path = tempfile.mkstemp(dir=self.alerts_dir, suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding="utf-8") as f:
                json.dump(records, f, indent=2)
            os.replace(tmp_path, self.alerts_file)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    async def save_alerts(self, alerts: list[Alert]) -> bool:
        """Prepend new alerts and trim the file to the newest entries."""
        if not alerts:
            return True
        try:
            new = [a.model_dump(mode="json") for a in alerts]
            self._write((new + self._load())[:self.max_alerts])
            return True
        except (OSError, TypeError, ValueError) as e:
            logs.log(logging.ERROR, f"Failed to save alerts: {str(e)}")
            return False

    async def get_recent_alerts(self, limit: int = 20) -> list[Alert]:
        alerts = []
        for record in self._load():
            if len(alerts) >= limit:
                break
            try:
                alerts.append(Alert.model_validate(record))
            except ModelValidationError as e:
                logs.log(logging.WARNING, f"Skipping malformed stored alert: {e.error_count()} errors")
        return alerts
