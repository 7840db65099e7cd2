from __future__ import annotations

from decimal import Decimal

from car_registry.domain.car import Car, CarHistoryEntry, CarPayload, CarPreferences
from car_registry.entrypoints.http.dtos.car import (
    CarHistoryEntryDTO,
    CarListResponseDTO,
    CarPayloadDTO,
    CarResponseDTO,
    PreferencesDTO,
)


class CarMapper:
    """Maps between REST DTOs and domain models for the car registry."""

    @staticmethod
    def to_domain_payload(dto: CarPayloadDTO) -> CarPayload:
        """
        Converts a request body to a domain payload, handling Decimal conversion.

        Args:
            dto: Validated request body

        Returns:
            CarPayload: Domain payload with Decimal price
        """
        return CarPayload(
            name=dto.name,
            model=dto.model,
            company_name=dto.company_name,
            image=dto.image,
            cubic_capacity_of_engine=dto.cubic_capacity_of_engine,
            price=Decimal(dto.price),
            top_speed=dto.top_speed,
        )

    @staticmethod
    def to_domain_preferences(dto: PreferencesDTO) -> CarPreferences:
        return CarPreferences(
            company_name=dto.company_name,
            model=dto.model,
            price_min=Decimal(dto.price_min) if dto.price_min else None,
            price_max=Decimal(dto.price_max) if dto.price_max else None,
        )

    @staticmethod
    def to_car_response(car: Car) -> CarResponseDTO:
        """
        Converts domain Car entity to REST response DTO.

        Handles Decimal → str conversion at the boundary.
        """
        return CarResponseDTO(
            id=car.id,
            name=car.name,
            model=car.model,
            company_name=car.company_name,
            image=car.image,
            cubic_capacity_of_engine=car.cubic_capacity_of_engine,
            price=str(car.price),  # Decimal → str at boundary
            top_speed=car.top_speed,
            owner=car.owner,
            created_at=car.created_at,
            updated_at=car.updated_at,
        )

    @staticmethod
    def to_list_response(cars: list[Car]) -> CarListResponseDTO:
        return CarListResponseDTO(
            cars=[CarMapper.to_car_response(car) for car in cars],
            total=len(cars),
        )

    @staticmethod
    def to_history_response(entries: list[CarHistoryEntry]) -> list[CarHistoryEntryDTO]:
        return [
            CarHistoryEntryDTO(
                owner=entry.owner,
                created_at=entry.created_at,
                updated_at=entry.updated_at,
            )
            for entry in entries
        ]
