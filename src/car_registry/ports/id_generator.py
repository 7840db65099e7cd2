from __future__ import annotations

from abc import ABC, abstractmethod


class IdGenerator(ABC):
    """Port for fresh car identifiers. Ids must be globally unique."""

    @abstractmethod
    def new_id(self) -> str: ...
