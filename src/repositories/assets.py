"""Asset repository."""

from src.models.asset import Asset
from src.repositories.base import RecordRepository


class AssetRepository(RecordRepository[Asset]):
    prefix = "asset:"
    model = Asset
