from .user_program import UserProgram

__all__ = ["UserProgram"]
