"""
Property management API endpoints: listing with search and pagination, CRUD, and statistics.
Every response is wrapped in the {status, message, statusCode, data, meta?} envelope.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Annotated, Any, List

from app.services.property import PropertyService
from app.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertyFilters,
    PropertyStatistics
)
from app.schemas.response import ApiResponse
from app.schemas.error import get_read_error_responses, get_write_error_responses
from app.utils.dependencies import get_property_service, valid_property_id


router = APIRouter(prefix="/properties", tags=["Properties"])


@router.post(
    "",
    response_model=ApiResponse[PropertyResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create new property",
    responses=get_write_error_responses()
)
async def create_property(
    property_data: PropertyCreate,
    property_service: PropertyService = Depends(get_property_service)
) -> ApiResponse[PropertyResponse]:
    """
    Create a new property listing. The server assigns id and timestamps;
    status defaults to "available".
    """
    property_obj = await property_service.create_property(property_data)

    return ApiResponse.build(
        status.HTTP_201_CREATED,
        "Property created successfully",
        PropertyResponse.model_validate(property_obj.to_dict())
    )


@router.get(
    "",
    response_model=ApiResponse[List[PropertyResponse]],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="List properties with search and pagination",
    responses=get_read_error_responses()
)
async def list_properties(
    filters: Annotated[PropertyFilters, Query()],
    property_service: PropertyService = Depends(get_property_service)
) -> ApiResponse[List[PropertyResponse]]:
    """
    Get one page of properties, newest first.

    `search` matches title or location, case-insensitively.
    """
    properties, meta = await property_service.list_properties(filters)

    return ApiResponse.build(
        status.HTTP_200_OK,
        "Properties fetched successfully",
        [PropertyResponse.model_validate(prop.to_dict()) for prop in properties],
        meta
    )


@router.get(
    "/statistics",
    response_model=ApiResponse[PropertyStatistics],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Get property statistics",
    responses=get_read_error_responses()
)
async def get_property_statistics(
    property_service: PropertyService = Depends(get_property_service)
) -> ApiResponse[PropertyStatistics]:
    """
    Total count, average price per currency, count per status and
    per-location bedroom/bathroom averages.
    """
    statistics = await property_service.get_property_statistics()

    return ApiResponse.build(status.HTTP_200_OK, "Property statistics fetched successfully", statistics)


@router.put(
    "/{id}",
    response_model=ApiResponse[PropertyResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Replace property",
    responses=get_write_error_responses()
)
async def update_property(
    property_data: PropertyUpdate,
    property_id: str = Depends(valid_property_id),
    property_service: PropertyService = Depends(get_property_service)
) -> ApiResponse[PropertyResponse]:
    """
    Replace property details with the supplied document.
    """
    updated_property = await property_service.update_property(property_id, property_data)

    return ApiResponse.build(
        status.HTTP_200_OK,
        "Property updated successfully",
        PropertyResponse.model_validate(updated_property.to_dict())
    )


@router.delete(
    "/{id}",
    response_model=ApiResponse[Any],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Delete property",
    responses=get_write_error_responses()
)
async def delete_property(
    property_id: str = Depends(valid_property_id),
    property_service: PropertyService = Depends(get_property_service)
) -> ApiResponse[Any]:
    """
    Permanently delete a property listing.
    """
    await property_service.delete_property(property_id)

    return ApiResponse.build(status.HTTP_200_OK, "Property deleted successfully")
