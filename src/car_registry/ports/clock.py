from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    """Port for the current time used for created_at/updated_at."""

    @abstractmethod
    def now(self) -> datetime: ...
