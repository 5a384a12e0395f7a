from diary_api.models.user import User
from diary_api.models.diary import Diary
from diary_api.models.contact import Contact

__all__ = [
    "User",
    "Diary",
    "Contact",
]
