"""
Property API endpoints for listing management, filtering and the watchlist.
Every route requires an authenticated session.
"""

from fastapi import APIRouter, Depends, status, Path
from typing import List
from uuid import UUID

from app.models.user import User
from app.services.property import PropertyService
from app.services.email import EmailService
from app.schemas.response import APIResponse
from app.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyFilterRequest,
    SendOwnerInfoRequest,
    ToggleLikeRequest,
    PropertyResponse,
    PropertyWithOwnerResponse,
    PropertyDetailResponse
)
from app.utils.dependencies import (
    get_current_user,
    get_email_service,
    get_property_service
)
from app.schemas.error import get_crud_error_responses, get_error_responses


router = APIRouter(
    prefix="/properties",
    tags=["Properties"],
    dependencies=[Depends(get_current_user)],
    responses=get_error_responses(401)
)


@router.post(
    "/post-property",
    response_model=APIResponse[PropertyResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create new property",
    description="Create a listing owned by the caller",
    responses=get_error_responses(400)
)
async def create_property(
    property_data: PropertyCreate,
    current_user: User = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> APIResponse[PropertyResponse]:
    """
    Create a new property listing.

    Args:
        property_data: Property creation data
        current_user: Current authenticated user
        property_service: Property service instance

    Returns:
        Envelope with the created listing
    """
    property_obj = await property_service.create_property(property_data, current_user)

    return APIResponse.build(
        status.HTTP_201_CREATED,
        "Property Added Successfully",
        PropertyResponse.model_validate(property_obj.to_dict())
    )


@router.get(
    "/get-properties",
    response_model=APIResponse[List[PropertyResponse]],
    status_code=status.HTTP_200_OK,
    summary="List own properties",
    description="Get every listing posted by the caller"
)
async def list_properties(
    current_user: User = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> APIResponse[List[PropertyResponse]]:
    properties = await property_service.get_user_properties(current_user)

    return APIResponse.build(
        status.HTTP_200_OK,
        "List of Properties",
        [PropertyResponse.model_validate(prop.to_dict()) for prop in properties]
    )


@router.delete(
    "/delete/{property_id}",
    response_model=APIResponse[None],
    status_code=status.HTTP_201_CREATED,
    summary="Delete property",
    description="Delete a listing. Only the owner may delete it.",
    responses=get_crud_error_responses()
)
async def delete_property(
    property_id: UUID = Path(..., description="Property ID"),
    current_user: User = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> APIResponse[None]:
    """
    Delete a property listing.

    Raises:
        PropertyNotFoundError: If property doesn't exist
        PropertyOwnershipError: If the caller is not the owner
    """
    await property_service.delete_property(property_id, current_user)
    return APIResponse.build(status.HTTP_201_CREATED, "Property deleted successfully")


@router.get(
    "/getPropertyById/{property_id}",
    response_model=APIResponse[PropertyDetailResponse],
    status_code=status.HTTP_200_OK,
    summary="Get property details",
    description="Get a listing's details without owner, likes or timestamps",
    responses=get_error_responses(404)
)
async def get_property(
    property_id: UUID = Path(..., description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> APIResponse[PropertyDetailResponse]:
    property_obj = await property_service.get_property(property_id)

    return APIResponse.build(
        status.HTTP_200_OK,
        "Property Details Found",
        PropertyDetailResponse.model_validate(property_obj.to_dict())
    )


@router.put(
    "/update/{property_id}",
    response_model=APIResponse[PropertyResponse],
    status_code=status.HTTP_200_OK,
    summary="Update property",
    description="Update the supplied fields of a listing. Only the owner may update it.",
    responses=get_crud_error_responses()
)
async def update_property(
    property_data: PropertyUpdate,
    property_id: UUID = Path(..., description="Property ID"),
    current_user: User = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> APIResponse[PropertyResponse]:
    """
    Update a property listing.

    Args:
        property_data: Partial update data
        property_id: UUID of the property
        current_user: Current authenticated user
        property_service: Property service instance

    Returns:
        Envelope with the updated listing
    """
    property_obj = await property_service.update_property(property_id, property_data, current_user)

    return APIResponse.build(
        status.HTTP_200_OK,
        "Property updated successfully",
        PropertyResponse.model_validate(property_obj.to_dict())
    )


@router.post(
    "/filter",
    response_model=APIResponse[List[PropertyWithOwnerResponse]],
    status_code=status.HTTP_200_OK,
    summary="Filter properties",
    description=(
        "Find listings by property type, state and city, optionally narrowed by "
        "bedrooms, bathrooms, bachelors allowed and an inclusive price range"
    ),
    responses=get_error_responses(400)
)
async def filter_properties(
    filters: PropertyFilterRequest,
    property_service: PropertyService = Depends(get_property_service)
) -> APIResponse[List[PropertyWithOwnerResponse]]:
    properties = await property_service.filter_properties(filters)

    return APIResponse.build(
        status.HTTP_200_OK,
        "Properties According to filters",
        [PropertyWithOwnerResponse.model_validate(prop.to_dict(include_owner=True)) for prop in properties]
    )


@router.post(
    "/sendOwnerInfo",
    response_model=APIResponse[None],
    status_code=status.HTTP_200_OK,
    summary="Send owner info",
    description="Email the owner's contact details to the buyer and the buyer's to the owner",
    responses=get_error_responses(404, 500)
)
async def send_owner_info(
    request_data: SendOwnerInfoRequest,
    property_service: PropertyService = Depends(get_property_service),
    email_service: EmailService = Depends(get_email_service)
) -> APIResponse[None]:
    await property_service.send_owner_info(
        request_data.property_id,
        request_data.buyer_id,
        email_service
    )
    return APIResponse.build(status.HTTP_200_OK, "Owner and buyer info sent via email")


@router.post(
    "/toggle-like",
    response_model=APIResponse[PropertyResponse],
    status_code=status.HTTP_200_OK,
    summary="Toggle watchlist",
    description="Add the listing to the user's watchlist, or remove it if already there",
    responses=get_error_responses(404)
)
async def toggle_like(
    request_data: ToggleLikeRequest,
    property_service: PropertyService = Depends(get_property_service)
) -> APIResponse[PropertyResponse]:
    property_obj, liked = await property_service.toggle_like(
        request_data.property_id,
        request_data.user_id
    )

    return APIResponse.build(
        status.HTTP_200_OK,
        "Added to watchlist" if liked else "Removed from watchlist",
        PropertyResponse.model_validate(property_obj.to_dict())
    )


@router.get(
    "/getMYwatchlist",
    response_model=APIResponse[List[PropertyResponse]],
    status_code=status.HTTP_200_OK,
    summary="Get watchlist",
    description="Get every listing the caller has liked"
)
async def get_watchlist(
    current_user: User = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> APIResponse[List[PropertyResponse]]:
    properties = await property_service.get_watchlist(current_user)

    return APIResponse.build(
        status.HTTP_200_OK,
        "Your Watchlist",
        [PropertyResponse.model_validate(prop.to_dict()) for prop in properties]
    )
