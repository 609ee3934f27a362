from .user_service import UserService, row_to_user

__all__ = ["UserService", "row_to_user"]
