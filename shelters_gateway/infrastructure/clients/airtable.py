"""Airtable REST API client for listings and lead records"""

import httpx
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from shelters_gateway.config import settings
from shelters_gateway.domain.exceptions import (
    AirtableAPIError,
    AirtableConfigError,
    InvalidRecordIdError,
    RecordNotFoundError,
)
from shelters_gateway.domain.listings import (
    build_filter_formula,
    is_valid_record_id,
    record_to_listing,
    record_to_property_detail,
)
from shelters_gateway.domain.models import Listing, PropertyDetail
from shelters_gateway.infrastructure.observability.metrics import airtable_failures_counter


class AirtableClient:
    """Client for the Airtable records API"""

    def __init__(
        self,
        api_key: str | None = None,
        base_id: str | None = None,
        api_base: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.airtable_api_key
        self.base_id = base_id if base_id is not None else settings.airtable_base_id
        self.api_base = api_base or settings.airtable_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def _table_url(self, table: str) -> str:
        if not self.api_key or not self.base_id:
            raise AirtableConfigError("Missing AIRTABLE_API_KEY or AIRTABLE_BASE_ID")
        return f"{self.api_base}/{self.base_id}/{quote(table, safe='')}"

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    async def _request(self, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        """
        Issue a request and decode the JSON body.

        Raises:
            RecordNotFoundError: On 404
            AirtableAPIError: On timeout, other HTTP errors, or invalid JSON
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.request(method, url, headers=self._headers(), **kwargs)
                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                airtable_failures_counter.inc()
                raise AirtableAPIError(f"Airtable API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                if e.response.status_code == 404:
                    raise RecordNotFoundError(url) from e
                airtable_failures_counter.inc()
                raise AirtableAPIError(
                    f"Airtable API error: {e.response.status_code}",
                    status_code=e.response.status_code,
                    details=e.response.text,
                ) from e
            except httpx.RequestError as e:
                airtable_failures_counter.inc()
                raise AirtableAPIError(f"Airtable API unreachable: {e}") from e
            except ValueError as e:
                airtable_failures_counter.inc()
                raise AirtableAPIError(f"Invalid JSON from Airtable: {e}") from e

    async def search_listings(
        self,
        q: Optional[str] = None,
        property_type: Optional[str] = None,
        offer_type: Optional[str] = None,
        location: Optional[str] = None,
        max_price: Optional[str] = None,
    ) -> List[Listing]:
        """Fetch properties from the configured view, filtered by search parameters"""
        url = self._table_url(settings.properties_table)
        params = {"view": settings.listings_view}
        formula = build_filter_formula(
            q=q,
            property_type=property_type,
            offer_type=offer_type,
            location=location,
            max_price=max_price,
        )
        if formula:
            params["filterByFormula"] = formula

        data = await self._request("GET", url, params=params)
        try:
            return [record_to_listing(record) for record in data.get("records", [])]
        except (KeyError, TypeError, AttributeError) as e:
            raise AirtableAPIError(f"Invalid listing data from Airtable: {e}") from e

    async def get_property(self, record_id: str) -> PropertyDetail:
        """
        Fetch a single property record.

        Raises:
            InvalidRecordIdError: If record_id is not an Airtable record ID
        """
        if not is_valid_record_id(record_id):
            raise InvalidRecordIdError(record_id)
        url = f"{self._table_url(settings.properties_table)}/{record_id}"
        data = await self._request("GET", url)
        try:
            return record_to_property_detail(data)
        except (KeyError, TypeError, AttributeError) as e:
            raise AirtableAPIError(f"Invalid property data from Airtable: {e}") from e

    async def create_record(self, table: str, fields: Dict[str, Any]) -> Optional[str]:
        """Create one record and return its Airtable ID"""
        url = self._table_url(table)
        data = await self._request("POST", url, json={"records": [{"fields": fields}]})
        records = data.get("records") or []
        return records[0].get("id") if records else None
