import logging
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from agriweather.core.logger import logs
from agriweather.models.alert_model import Alert
from agriweather.repos.base_repo import AlertRepository


class MongoAlertRepository(AlertRepository):
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db["alerts"]

    async def save_alerts(self, alerts: list[Alert]) -> bool:
        if not alerts:
            return True
        try:
            docs = [{**a.model_dump(mode="json"), "is_read": False} for a in alerts]
            await self.collection.insert_many(docs)
            return True
        except PyMongoError as e:
            logs.log(logging.ERROR, f"Failed to save alerts: {str(e)}")
            return False

    async def get_recent_alerts(self, limit: int = 20) -> list[Alert]:
        try:
            cursor = self.collection.find({}, {"_id": 0}).sort("created_at", -1).limit(limit)
            docs = await cursor.to_list(length=limit)
        except PyMongoError as e:
            logs.log(logging.ERROR, f"Failed to load alerts: {str(e)}")
            return []
        return [Alert.model_validate(d) for d in docs]
