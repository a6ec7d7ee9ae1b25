"""Place search API endpoints."""

from fastapi import APIRouter, HTTPException, Query, status

from safepath.services.geocoding_service import GeocodingService

router = APIRouter()


@router.get(
    "",
    summary="Search for a place",
    description="Forward a free-text place search to the geocoder and return its results.",
    responses={
        400: {"description": "Empty query"},
        503: {"description": "Geocoder unavailable"},
    },
)
async def search_places(query: str = Query(default="", description="Place name or address")):
    """Geocode a free-text query."""
    if not query.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Query is required")

    return await GeocodingService().search(query)
