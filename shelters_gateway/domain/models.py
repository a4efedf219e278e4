"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class LoanInput:
    """Financed amount and terms for an EMI computation"""

    principal: float
    annual_rate_percent: float
    tenure_months: int


@dataclass(frozen=True)
class EmiResult:
    """Output of an EMI computation, unrounded"""

    monthly_installment: float
    principal: float
    total_interest: float
    total_payable: float

    @classmethod
    def zero(cls) -> "EmiResult":
        return cls(monthly_installment=0.0, principal=0.0, total_interest=0.0, total_payable=0.0)


@dataclass(frozen=True)
class EligibilityInput:
    """Affordable installment and terms for an eligibility computation"""

    max_monthly_installment: float
    annual_rate_percent: float
    tenure_months: int


@dataclass(frozen=True)
class EligibilityResult:
    """Maximum principal a borrower can be approved for"""

    max_principal: float


@dataclass
class Listing:
    """Property summary row returned by listing search"""

    listing_id: str
    title: str
    property_type: str
    offer_type: str
    price: float
    location: str
    status: str
    image: Optional[str]
    property_type_description: str = ""
    offer_type_description: str = ""
    location_description: str = ""


@dataclass
class PropertyDetail:
    """Full property record with agent contact"""

    id: str
    title: str
    location: str
    price: float
    status: str
    property_type: str
    description: str
    agent_name: str
    agent_phone: Optional[str]  # digits only
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    size_sqft: Optional[float] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    amenities: List[str] = field(default_factory=list)
    images: List[str] = field(default_factory=list)
    whatsapp_url: Optional[str] = None

