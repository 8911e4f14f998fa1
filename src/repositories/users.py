"""User profile repository."""

from src.models.user import UserProfile
from src.repositories.base import RecordRepository


class UserProfileRepository(RecordRepository[UserProfile]):
    prefix = "user:"
    model = UserProfile
