"""Identifier and timestamp capability used when records are created or updated."""

import uuid
from datetime import UTC, datetime
from typing import Protocol


class RecordStamper(Protocol):
    def new_id(self) -> str: ...

    def now(self) -> datetime: ...


class SystemStamper:
    """Random UUIDs and wall-clock UTC time."""

    def new_id(self) -> str:
        return uuid.uuid4().hex

    def now(self) -> datetime:
        return datetime.now(UTC)
