"""Pydantic schemas for API request/response shapes.

Request bodies are not bound by FastAPI; controllers call
``validate_payload()`` on the raw JSON and get back either the DTO or a
structured error list.
"""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from core.models.base import MAX_ID


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class DTO(BaseModel):
    """Base transfer object: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    @classmethod
    def validate_payload(cls, payload: Any) -> tuple[Optional["DTO"], list[dict]]:
        """Validate a decoded JSON payload.

        Returns ``(dto, [])`` on success and ``(None, errors)`` otherwise,
        where each error is ``{"field", "message", "type"}``.
        """
        try:
            return cls.model_validate(payload), []
        except ValidationError as exc:
            return None, [
                {
                    "field": ".".join(str(part) for part in err["loc"]) or "body",
                    "message": err["msg"],
                    "type": err["type"],
                }
                for err in exc.errors()
            ]

    def to_response(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Authors
# ---------------------------------------------------------------------------

class AuthorDTO(DTO):
    """Read shape; also accepts the store's column names when mapped from an entity."""

    id: int
    first_name: str = Field(
        validation_alias=AliasChoices("firstName", "first_name", "firstname"),
        serialization_alias="firstName",
    )
    last_name: str = Field(
        validation_alias=AliasChoices("lastName", "last_name", "lastname"),
        serialization_alias="lastName",
    )


class AuthorCreateDTO(DTO):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)


class AuthorUpdateDTO(DTO):
    id: int = Field(..., ge=1)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)


# ---------------------------------------------------------------------------
# Books
# ---------------------------------------------------------------------------

class BookDTO(DTO):
    id: int
    title: str
    year: Optional[int] = None
    isbn: Optional[str] = None
    summary: Optional[str] = None
    image: Optional[str] = None
    price: Optional[float] = None
    author_id: Optional[int] = None
    author: Optional[AuthorDTO] = None


class BookCreateDTO(DTO):
    title: str = Field(..., min_length=1, max_length=150)
    year: Optional[int] = Field(None, ge=0, le=9999)
    isbn: str = Field(..., min_length=1, max_length=20)
    summary: Optional[str] = Field(None, max_length=500)
    image: Optional[str] = Field(None, max_length=255)
    price: Optional[float] = Field(None, ge=0)
    author_id: int = Field(..., ge=1, le=MAX_ID)


class BookUpdateDTO(DTO):
    id: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=150)
    year: Optional[int] = Field(None, ge=0, le=9999)
    isbn: Optional[str] = Field(None, max_length=20)
    summary: Optional[str] = Field(None, max_length=500)
    image: Optional[str] = Field(None, max_length=255)
    price: Optional[float] = Field(None, ge=0)
    author_id: Optional[int] = Field(None, ge=1, le=MAX_ID)
