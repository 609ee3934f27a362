from .user import User, CreateUserPayload, SuccessfulResponse

__all__ = [
    "User",
    "CreateUserPayload",
    "SuccessfulResponse",
]
