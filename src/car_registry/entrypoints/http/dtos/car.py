from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CarPayloadDTO(BaseModel):
    """Request body for creating or fully updating a car."""

    name: str = Field(min_length=1, max_length=100, examples=["Model X"])
    model: str = Field(min_length=1, max_length=100, examples=["X"])
    company_name: str = Field(min_length=1, max_length=100, examples=["Tesla"])
    image: str = Field(min_length=1, examples=["x.png"])
    cubic_capacity_of_engine: int = Field(
        ge=0,
        le=2_147_483_647,
        description="Engine displacement in cc (0 for electric cars)",
        examples=[0],
    )
    price: str = Field(
        description="Price (decimal as string)",
        examples=["80000.00"],
        pattern=r"^\d{1,10}(\.\d{1,2})?$",
    )
    top_speed: int = Field(gt=0, le=2_147_483_647, description="Top speed in km/h", examples=[250])

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Model X",
                "model": "X",
                "company_name": "Tesla",
                "image": "x.png",
                "cubic_capacity_of_engine": 0,
                "price": "80000.00",
                "top_speed": 250,
            }
        }
    )


class OwnerUpdateDTO(BaseModel):
    owner: str = Field(min_length=1, max_length=255, examples=["user-b"])


class ImageUpdateDTO(BaseModel):
    image: str = Field(min_length=1, examples=["x-2024.png"])


class PreferencesDTO(BaseModel):
    """Buyer preferences. Accepted for forward compatibility; not scored yet."""

    company_name: str | None = None
    model: str | None = None
    price_min: str | None = Field(default=None, pattern=r"^\d+(\.\d{1,2})?$")
    price_max: str | None = Field(default=None, pattern=r"^\d+(\.\d{1,2})?$")


class CarResponseDTO(BaseModel):
    id: str
    name: str
    model: str
    company_name: str
    image: str
    cubic_capacity_of_engine: int
    price: str
    top_speed: int
    owner: str
    created_at: datetime
    updated_at: datetime | None = None


class CarListResponseDTO(BaseModel):
    cars: list[CarResponseDTO]
    total: int


class CarHistoryEntryDTO(BaseModel):
    owner: str
    created_at: datetime
    updated_at: datetime | None = None
