"""Data access layer: repository interface, record stamping and shared persistence models."""

from shared.dal.game_repository import GameRepository
from shared.dal.models import GameRecord
from shared.dal.stamper import RecordStamper, SystemStamper

__all__ = [
    "GameRecord",
    "GameRepository",
    "RecordStamper",
    "SystemStamper",
]
