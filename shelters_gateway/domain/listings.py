"""Listing search and property detail mapping from Airtable records"""

import re
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from shelters_gateway.domain.models import Listing, PropertyDetail

RECORD_ID_PATTERN = re.compile(r"^[a-zA-Z0-9]{15,20}$")
_TAG_PATTERN = re.compile(r"<[^>]*>?")
_DIGITS_ONLY = re.compile(r"^\d+$")
_NON_DIGITS = re.compile(r"\D")

WHATSAPP_COUNTRY_CODE = "91"


def is_valid_record_id(record_id: Optional[str]) -> bool:
    return bool(record_id) and RECORD_ID_PATTERN.match(record_id) is not None


def sanitize(text: Any) -> Any:
    """Strip HTML tags from strings; other values pass through"""
    if not isinstance(text, str) or not text:
        return text
    return _TAG_PATTERN.sub("", text)


def _escape_formula_string(value: str) -> str:
    return value.replace('"', '\\"')


def build_filter_formula(
    q: Optional[str] = None,
    property_type: Optional[str] = None,
    offer_type: Optional[str] = None,
    location: Optional[str] = None,
    max_price: Optional[str] = None,
) -> str:
    """
    Build an Airtable filterByFormula from search parameters.

    Returns "" when no filter applies. max_price is ignored unless it is all
    digits; q matches Title, Location or Description case-insensitively.
    """
    clauses: List[str] = []

    if property_type:
        clauses.append(f'{{Property Type}} = "{_escape_formula_string(property_type)}"')
    if offer_type:
        clauses.append(f'{{Offer Type}} = "{_escape_formula_string(offer_type)}"')
    if location:
        clauses.append(f'{{Location}} = "{_escape_formula_string(location)}"')
    if max_price and _DIGITS_ONLY.match(max_price):
        clauses.append(f"{{Price}} <= {max_price}")
    if q:
        term = _escape_formula_string(q.lower())
        clauses.append(
            "OR("
            f'FIND(LOWER("{term}"), LOWER(Title)),'
            f'FIND(LOWER("{term}"), LOWER(Location)),'
            f'FIND(LOWER("{term}"), LOWER(Description))'
            ")"
        )

    if not clauses:
        return ""
    return f"AND({','.join(clauses)})"


def record_to_listing(record: Dict[str, Any]) -> Listing:
    """Rename Airtable columns to the listing summary shape"""
    fields = record.get("fields", {})
    images = fields.get("Image") or []

    return Listing(
        listing_id=record["id"],
        title=fields.get("Title") or "Untitled Property",
        property_type=fields.get("Property Type") or "N/A",
        offer_type=fields.get("Offer Type") or "N/A",
        price=fields.get("Price") or 0,
        location=fields.get("Location") or "Unknown Location",
        status=fields.get("Status") or "N/A",
        image=images[0].get("url") if images else None,
        property_type_description=fields.get("Property Type Description") or "",
        offer_type_description=fields.get("Offer Type Description") or "",
        location_description=fields.get("Location Description") or "",
    )


def whatsapp_url(phone_digits: Optional[str], message: str) -> Optional[str]:
    """wa.me deep link for an Indian mobile number"""
    if not phone_digits:
        return None
    return f"https://wa.me/{WHATSAPP_COUNTRY_CODE}{phone_digits}?text={quote(message, safe='')}"


def record_to_property_detail(record: Dict[str, Any]) -> PropertyDetail:
    """Rename and sanitize Airtable columns into a property detail"""
    fields = record.get("fields", {})
    agent_phone = fields.get("Agent Phone")
    phone_digits = _NON_DIGITS.sub("", str(agent_phone)) if agent_phone else None
    title = sanitize(fields.get("Title")) or "Untitled Property"
    agent_name = sanitize(fields.get("Agent Name"))

    # Contact link needs both a name and a number
    contact_url = None
    if agent_name and phone_digits:
        contact_url = whatsapp_url(
            phone_digits,
            f'Hi {agent_name}, I\'m interested in the property "{title}" (ID: {record["id"]}). Can we connect?',
        )

    return PropertyDetail(
        id=record["id"],
        title=title,
        location=sanitize(fields.get("Location")) or "Unknown Location",
        price=fields.get("Price") or 0,
        status=sanitize(fields.get("Status")) or "N/A",
        property_type=sanitize(fields.get("Property Type")) or "N/A",
        description=sanitize(fields.get("Description")) or "No detailed description available.",
        agent_name=agent_name or "N/A",
        agent_phone=phone_digits or None,
        bedrooms=fields.get("Bedrooms") or None,
        bathrooms=fields.get("Bathrooms") or None,
        size_sqft=fields.get("Size (sqft)") or None,
        latitude=fields.get("Latitude") or None,
        longitude=fields.get("Longitude") or None,
        amenities=[sanitize(a) for a in fields.get("Amenities") or []],
        images=[img.get("url") for img in fields.get("Image") or []],
        whatsapp_url=contact_url,
    )
