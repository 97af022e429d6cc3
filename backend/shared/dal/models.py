"""Persistence models for the data access layer."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GameRecord(BaseModel):
    """A game as stored in the backend. Serialized with camelCase wire names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    url: str
    author: str
    date_published: str = Field(alias="datePublished")  # free-form text, never parsed as a date
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    def to_wire(self) -> dict:
        """Return the JSON-ready representation sent to clients."""
        return self.model_dump(mode="json", by_alias=True)
