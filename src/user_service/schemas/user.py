"""
Pydantic models for the user HTTP surface.

JSON uses camelCase (`userName`, `firstName`, ...); Python code uses the
snake_case attribute names. Both are accepted on input.
"""

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class User(CamelModel):
    """Domain value for a user."""

    user_name: str
    first_name: str
    last_name: str
    address: str | None = None


class CreateUserPayload(CamelModel):
    """
    Body of POST /user.

    The three name fields are required and must not be empty strings.
    """

    user_name: str
    first_name: str
    last_name: str
    address: str | None = None

    @field_validator("user_name", "first_name", "last_name")
    @classmethod
    def must_not_be_empty(cls, value: str) -> str:
        if value == "":
            raise PydanticCustomError("string_empty", "String should not be empty")
        return value

    def to_user(self) -> User:
        return User(
            user_name=self.user_name,
            first_name=self.first_name,
            last_name=self.last_name,
            address=self.address,
        )


class SuccessfulResponse(BaseModel):
    """Number of rows an operation affected."""

    count: int
