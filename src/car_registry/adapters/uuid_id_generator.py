from __future__ import annotations

import uuid

from car_registry.ports.id_generator import IdGenerator


class UuidIdGenerator(IdGenerator):
    """Random UUID4 ids rendered in canonical hyphenated form."""

    def new_id(self) -> str:
        return str(uuid.uuid4())
