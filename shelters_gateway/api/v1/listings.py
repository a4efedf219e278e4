"""GET /v1/listings - Property search and detail passthrough to Airtable"""

import logging
from dataclasses import asdict
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from shelters_gateway.api.dependencies import get_airtable_client, get_request_id
from shelters_gateway.api.v1.schemas import ListingSchema, ListingsResponse, PropertyDetailResponse
from shelters_gateway.domain.exceptions import (
    AirtableAPIError,
    AirtableConfigError,
    InvalidRecordIdError,
    RecordNotFoundError,
)
from shelters_gateway.infrastructure.clients.airtable import AirtableClient

router = APIRouter()

DETAIL_CACHE_CONTROL = "public, max-age=300, s-maxage=300"


@router.get("/listings", response_model=ListingsResponse)
async def search_listings(
    request: Request,
    q: Optional[str] = Query(None, description="Free-text search over title, location and description"),
    property_type: Optional[str] = Query(None),
    offer_type: Optional[str] = Query(None),
    location: Optional[str] = Query(None),
    max_price: Optional[str] = Query(None, description="Upper price bound, digits only"),
    airtable: AirtableClient = Depends(get_airtable_client),
):
    """
    Search published properties.

    Airtable errors are passed through with their upstream status code.
    """
    request_id = get_request_id(request)
    try:
        listings = await airtable.search_listings(
            q=q,
            property_type=property_type,
            offer_type=offer_type,
            location=location,
            max_price=max_price,
        )
    except AirtableConfigError as e:
        logging.error(str(e), extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Missing AIRTABLE_API_KEY or AIRTABLE_BASE_ID")
    except AirtableAPIError as e:
        logging.error(f"Airtable API error: {e}", extra={"request_id": request_id})
        raise HTTPException(
            status_code=e.status_code or 502,
            detail={"error": "Airtable API Error", "status": e.status_code, "details": e.details},
        )

    return ListingsResponse(records=[ListingSchema(**asdict(listing)) for listing in listings])


@router.get("/listings/{record_id}", response_model=PropertyDetailResponse)
async def get_property_detail(
    record_id: str,
    request: Request,
    response: Response,
    airtable: AirtableClient = Depends(get_airtable_client),
):
    """Retrieve one property with sanitized text and agent contact link"""
    request_id = get_request_id(request)
    try:
        detail = await airtable.get_property(record_id)
    except InvalidRecordIdError:
        raise HTTPException(status_code=400, detail="A valid property ID is required.")
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Property not found.")
    except AirtableConfigError as e:
        logging.error(str(e), extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="An internal server error occurred.")
    except AirtableAPIError as e:
        logging.error(f"Airtable API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=e.status_code or 502, detail="Failed to fetch data from Airtable.")

    response.headers["Cache-Control"] = DETAIL_CACHE_CONTROL
    return PropertyDetailResponse(**asdict(detail))
