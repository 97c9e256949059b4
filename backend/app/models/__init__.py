from app.models.pet import Pet
from app.models.user import User, UserRole, UserStatus

__all__ = [
    "Pet",
    "User",
    "UserRole",
    "UserStatus",
]
