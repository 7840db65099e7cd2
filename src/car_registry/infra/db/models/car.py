from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from car_registry.infra.db.models.base import Base


class CarRow(Base):
    __tablename__ = "cars"

    # Ids come from the IdGenerator port, not from the database
    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    company_name: Mapped[str] = mapped_column(String(100), nullable=False)
    image: Mapped[str] = mapped_column(Text, nullable=False)

    cubic_capacity_of_engine: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2), nullable=False
    )  # $9,999,999,999.99
    top_speed: Mapped[int] = mapped_column(Integer, nullable=False)

    owner: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # Set by the Clock port; no server defaults so the domain stays the source of truth
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
