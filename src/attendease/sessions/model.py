from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import combine_date_time


@dataclass(frozen=True)
class ClassSession:
    """Domain entity: a scheduled class.

    ``date`` is YYYY-MM-DD and ``time`` is 24h HH:mm, kept as stored strings.
    """

    id: str
    name: str
    date: str
    time: str
    location: str
    trainer_id: str = ""
    creator_id: Optional[str] = None

    @property
    def starts_at(self) -> datetime:
        return combine_date_time(self.date, self.time)


@dataclass(frozen=True)
class SessionForm:
    """Input collected when scheduling or editing a session."""

    name: str
    date: str
    time: str
    location: str
    trainer_id: str = ""
