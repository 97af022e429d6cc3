from pydantic import BaseModel, ConfigDict, Field, field_validator

# Attribute name -> (wire name, message reported when the field is missing or empty).
# Order matters: the first failing field names the error.
REQUIRED_GAME_FIELDS: dict[str, tuple[str, str]] = {
    "name": ("name", "enter the game name"),
    "url": ("url", "enter the game url"),
    "author": ("author", "enter the game author"),
    "date_published": ("datePublished", "enter the date published"),
}

_TEXT_FIELDS = ("name", "url", "author", "date_published")


def _require_utf8(value: object) -> object:
    """Reject text that cannot be stored or echoed back, such as lone surrogates."""
    if isinstance(value, str):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ValueError("must be valid UTF-8 text") from e
    return value


_BODY_CONFIG = ConfigDict(
    extra="ignore",
    populate_by_name=True,
    coerce_numbers_to_str=True,
)


class GameCreate(BaseModel):
    """Body of POST /game. Presence and emptiness are checked by GameService."""

    model_config = _BODY_CONFIG

    name: str | None = None
    url: str | None = None
    author: str | None = None
    date_published: str | None = Field(default=None, alias="datePublished")

    check_utf8 = field_validator(*_TEXT_FIELDS, mode="before")(_require_utf8)


class GameUpdate(BaseModel):
    """Body of PUT /games/{id}. Only fields the client sent are merged."""

    model_config = _BODY_CONFIG

    name: str | None = None
    url: str | None = None
    author: str | None = None
    date_published: str | None = Field(default=None, alias="datePublished")

    check_utf8 = field_validator(*_TEXT_FIELDS, mode="before")(_require_utf8)

    def changes(self) -> dict[str, str]:
        """Return the provided fields keyed by attribute name. Explicit nulls are dropped."""
        return self.model_dump(exclude_unset=True, exclude_none=True)
