"""Request validation for movie payloads.

Both the create and the update models are built from the same per-field
types, so a field present in a partial update obeys exactly the rules of a
full create.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
    field_validator,
)


class Genre(str, Enum):
    ACTION = "Action"
    ADVENTURE = "Adventure"
    COMEDY = "Comedy"
    DRAMA = "Drama"
    FANTASY = "Fantasy"
    HORROR = "Horror"
    THRILLER = "Thriller"
    SCI_FI = "Sci-Fi"
    CRIME = "Crime"
    BIOGRAPHY = "Biography"


_HTTP_URL = TypeAdapter(HttpUrl)


def _check_url(value: str) -> str:
    # Keep the caller's text; HttpUrl would normalise it (e.g. add a trailing slash).
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        raise ValueError("Poster must be a valid URL") from None
    return value


Title = Annotated[StrictStr, Field(min_length=1)]
Year = StrictInt
Director = Annotated[StrictStr, Field(min_length=1)]
Duration = StrictInt
Poster = Annotated[StrictStr, AfterValidator(_check_url)]
Genres = Annotated[list[Genre], Field(min_length=1)]
Rate = Annotated[StrictInt, Field(ge=0, le=10)] | Annotated[StrictFloat, Field(ge=0, le=10)]


class MovieCreate(BaseModel):
    """Full movie payload accepted by ``POST /movies``."""

    model_config = ConfigDict(extra="ignore")

    title: Title
    year: Year
    director: Director
    duration: Duration
    poster: Poster
    genre: Genres
    rate: Rate = 0


class MovieUpdate(BaseModel):
    """Partial payload accepted by ``PATCH /movies/{id}``."""

    model_config = ConfigDict(extra="ignore")

    title: Title | None = None
    year: Year | None = None
    director: Director | None = None
    duration: Duration | None = None
    poster: Poster | None = None
    genre: Genres | None = None
    rate: Rate | None = None

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Input should not be null")
        return value


class MovieValidationError(ValueError):
    """Raised when a payload breaks one or more field rules."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__(f"{len(errors)} invalid field(s)")
        self.errors = errors


def _field_errors(exc: ValidationError) -> list[dict[str, Any]]:
    """Collapse pydantic errors to one entry per top-level field."""

    seen: dict[str, dict[str, Any]] = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        field = str(loc[0]) if loc else ""
        if field in seen:
            continue
        message = error["msg"]
        if field:
            message = f"{field}: {message}"
        seen[field] = {
            "path": [field] if field else [],
            "message": message,
            "code": error["type"],
        }
    return list(seen.values())


def validate_movie(payload: Any) -> dict[str, Any]:
    """Validate a complete movie and return its normalised fields."""

    try:
        model = MovieCreate.model_validate(payload)
    except ValidationError as exc:
        raise MovieValidationError(_field_errors(exc)) from exc
    return model.model_dump(mode="json")


def validate_partial_movie(payload: Any) -> dict[str, Any]:
    """Validate only the fields present in ``payload``.

    Fields explicitly sent as ``null`` are rejected like any other wrong type.
    """

    try:
        model = MovieUpdate.model_validate(payload)
    except ValidationError as exc:
        raise MovieValidationError(_field_errors(exc)) from exc
    return model.model_dump(mode="json", exclude_unset=True)
