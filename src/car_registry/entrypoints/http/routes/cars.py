from fastapi import APIRouter, Depends, Query, status

from car_registry.entrypoints.http.dependencies import get_caller, get_car_service
from car_registry.entrypoints.http.dtos.car import (
    CarHistoryEntryDTO,
    CarListResponseDTO,
    CarPayloadDTO,
    CarResponseDTO,
    ImageUpdateDTO,
    OwnerUpdateDTO,
    PreferencesDTO,
)
from car_registry.entrypoints.http.error_responses import ErrorResponse
from car_registry.entrypoints.http.mappers.car_mapper import CarMapper
from car_registry.use_cases.car_service import CarService


router = APIRouter(tags=["Cars"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Car not found"}}
INVALID = {422: {"model": ErrorResponse, "description": "Validation error"}}


# Static paths are registered before /cars/{car_id} so they are not shadowed.


@router.get(
    "/cars",
    response_model=CarListResponseDTO,
    summary="List all cars",
    description="All cars in key order. An empty registry returns an empty list.",
)
def list_cars(service: CarService = Depends(get_car_service)) -> CarListResponseDTO:
    return CarMapper.to_list_response(service.list_cars())


@router.post(
    "/cars",
    response_model=CarResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a car",
    description="""
    Register a car owned by the caller.

    The id, owner and created_at are assigned by the server;
    updated_at stays null until the first update.
    """,
    responses={401: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, **INVALID},
)
def create_car(
    body: CarPayloadDTO,
    caller: str = Depends(get_caller),
    service: CarService = Depends(get_car_service),
) -> CarResponseDTO:
    """Create car endpoint following parse → execute → map → return pattern."""
    # 1. Map to domain payload
    payload = CarMapper.to_domain_payload(body)

    # 2. Execute use case
    car = service.create_car(payload, caller=caller)

    # 3. Map to response
    return CarMapper.to_car_response(car)


@router.get(
    "/cars/newest",
    response_model=CarResponseDTO,
    summary="Most recently created car",
    responses=NOT_FOUND,
)
def get_newest_car(service: CarService = Depends(get_car_service)) -> CarResponseDTO:
    return CarMapper.to_car_response(service.get_newest_car())


@router.get(
    "/cars/oldest",
    response_model=CarResponseDTO,
    summary="Earliest created car",
    responses=NOT_FOUND,
)
def get_oldest_car(service: CarService = Depends(get_car_service)) -> CarResponseDTO:
    return CarMapper.to_car_response(service.get_oldest_car())


@router.get(
    "/cars/price-range",
    response_model=CarListResponseDTO,
    summary="Filter cars by price range",
    description="""
    Cars whose price lies in [min, max], both inclusive.

    An inverted range returns an empty list. Non-numeric bounds are rejected with 422.

    ## Example
    ```
    GET /v1/cars/price-range?min=20000&max=90000
    ```
    """,
    responses=INVALID,
)
def filter_by_price_range(
    min_price: str = Query(alias="min", description="Lower bound (inclusive)"),
    max_price: str = Query(alias="max", description="Upper bound (inclusive)"),
    service: CarService = Depends(get_car_service),
) -> CarListResponseDTO:
    return CarMapper.to_list_response(service.filter_by_price_range(min_price, max_price))


@router.get(
    "/cars/by-name/{name}",
    response_model=CarResponseDTO,
    summary="Get a car by name",
    description="Case-insensitive match; the first car in key order wins.",
    responses=NOT_FOUND,
)
def get_car_by_name(name: str, service: CarService = Depends(get_car_service)) -> CarResponseDTO:
    return CarMapper.to_car_response(service.get_car_by_name(name))


@router.get(
    "/cars/by-company/{company_name}",
    response_model=CarListResponseDTO,
    summary="Search cars by company name",
)
def search_by_company_name(
    company_name: str, service: CarService = Depends(get_car_service)
) -> CarListResponseDTO:
    return CarMapper.to_list_response(service.search_by_company_name(company_name))


@router.get(
    "/cars/by-model/{model}",
    response_model=CarListResponseDTO,
    summary="Search cars by model",
)
def search_by_model(model: str, service: CarService = Depends(get_car_service)) -> CarListResponseDTO:
    return CarMapper.to_list_response(service.search_by_model(model))


@router.get(
    "/cars/by-owner/{owner}",
    response_model=CarListResponseDTO,
    summary="List cars owned by an identity",
)
def get_cars_by_owner(owner: str, service: CarService = Depends(get_car_service)) -> CarListResponseDTO:
    return CarMapper.to_list_response(service.get_cars_by_owner(owner))


@router.get(
    "/cars/by-price/{price}",
    response_model=CarResponseDTO,
    summary="Get the first car with an exact price",
    responses={**NOT_FOUND, **INVALID},
)
def get_car_by_price(price: str, service: CarService = Depends(get_car_service)) -> CarResponseDTO:
    return CarMapper.to_car_response(service.get_car_by_price(price))


@router.post(
    "/cars/recommendations",
    response_model=CarListResponseDTO,
    summary="Recommend cars",
    description="Placeholder policy: returns the first few cars regardless of preferences.",
)
def recommend(
    body: PreferencesDTO, service: CarService = Depends(get_car_service)
) -> CarListResponseDTO:
    preferences = CarMapper.to_domain_preferences(body)
    return CarMapper.to_list_response(service.recommend(preferences))


@router.get(
    "/cars/{car_id}",
    response_model=CarResponseDTO,
    summary="Get a car by id",
    responses=NOT_FOUND,
)
def get_car_by_id(car_id: str, service: CarService = Depends(get_car_service)) -> CarResponseDTO:
    return CarMapper.to_car_response(service.get_car_by_id(car_id))


@router.put(
    "/cars/{car_id}",
    response_model=CarResponseDTO,
    summary="Update a car",
    description="Overwrites every payload field; id, owner and created_at are preserved.",
    responses={**NOT_FOUND, **INVALID},
)
def update_car(
    car_id: str,
    body: CarPayloadDTO,
    service: CarService = Depends(get_car_service),
) -> CarResponseDTO:
    payload = CarMapper.to_domain_payload(body)
    return CarMapper.to_car_response(service.update_car(car_id, payload))


@router.delete(
    "/cars/{car_id}",
    response_model=CarResponseDTO,
    summary="Delete a car",
    description="Only the owner may delete. Returns the car as it was before removal.",
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse, "description": "Caller is not the owner"},
        **NOT_FOUND,
    },
)
def delete_car(
    car_id: str,
    caller: str = Depends(get_caller),
    service: CarService = Depends(get_car_service),
) -> CarResponseDTO:
    return CarMapper.to_car_response(service.delete_car(car_id, caller=caller))


@router.patch(
    "/cars/{car_id}/owner",
    response_model=CarResponseDTO,
    summary="Change the owner of a car",
    responses={**NOT_FOUND, **INVALID},
)
def update_owner(
    car_id: str,
    body: OwnerUpdateDTO,
    service: CarService = Depends(get_car_service),
) -> CarResponseDTO:
    return CarMapper.to_car_response(service.update_owner(car_id, body.owner))


@router.patch(
    "/cars/{car_id}/image",
    response_model=CarResponseDTO,
    summary="Replace the image of a car",
    responses={**NOT_FOUND, **INVALID},
)
def update_image(
    car_id: str,
    body: ImageUpdateDTO,
    service: CarService = Depends(get_car_service),
) -> CarResponseDTO:
    return CarMapper.to_car_response(service.update_image(car_id, body.image))


@router.get(
    "/cars/{car_id}/history",
    response_model=list[CarHistoryEntryDTO],
    summary="Ownership and timestamp history of a car",
    description="Single-entry audit view; prior versions are not retained.",
    responses=NOT_FOUND,
)
def get_history(
    car_id: str, service: CarService = Depends(get_car_service)
) -> list[CarHistoryEntryDTO]:
    return CarMapper.to_history_response(service.get_history(car_id))
