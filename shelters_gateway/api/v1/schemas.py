"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional


class FormModel(BaseModel):
    """Form payloads reject NaN and infinity at the edge"""

    model_config = ConfigDict(allow_inf_nan=False)


class EmiRequest(FormModel):
    """Request body for POST /v1/calculator/emi"""

    property_price: float = Field(..., description="Property price in rupees")
    down_payment: float = Field(0, description="Down payment in rupees")
    tenure_years: float = Field(..., description="Loan tenure in years")
    annual_rate_percent: Optional[float] = Field(None, description="Annual interest rate; defaults to partner rate")


class EmiDisplay(BaseModel):
    """Rupee-formatted EMI figures"""

    monthly_installment: str
    principal: str
    total_interest: str
    total_payable: str


class EmiResponse(BaseModel):
    """Response for POST /v1/calculator/emi"""

    annual_rate_percent: float
    tenure_months: int
    monthly_installment: float
    principal: float
    total_interest: float
    total_payable: float
    display: EmiDisplay


class EligibilityRequest(FormModel):
    """Request body for POST /v1/calculator/eligibility"""

    monthly_income: float = Field(..., description="Applicant monthly income")
    existing_emis: float = Field(0, description="Existing monthly loan obligations")
    loan_type: Literal["single", "joint"] = "single"
    co_applicant_income: Optional[float] = None
    tenure_years: float = Field(..., description="Loan tenure in years")
    annual_rate_percent: Optional[float] = None
    affordability_fraction: Optional[float] = Field(None, gt=0, le=1)


class EligibilityResponse(BaseModel):
    """Response for POST /v1/calculator/eligibility"""

    max_monthly_installment: float
    eligible_amount: int
    eligible_amount_display: str


class LoanLeadRequest(FormModel):
    """Request body for POST /v1/leads/loan"""

    applicant_name: str = Field(..., min_length=1)
    applicant_phone: str = Field(..., min_length=1)
    applicant_email: str = Field(..., pattern=r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
    applicant_age: Optional[int] = Field(None, ge=18, le=100)
    credit_score: Optional[str] = None
    loan_amount: float = Field(..., gt=0, description="Requested loan / property amount")
    loan_tenure: int = Field(..., gt=0, le=100, description="Tenure in whole years")
    loan_type: Literal["single", "joint"] = "single"
    monthly_income: float = Field(..., ge=0)
    existing_emis: float = Field(0, ge=0)
    co_applicant_name: Optional[str] = None
    co_applicant_income: Optional[float] = Field(None, ge=0)


class LoanLeadResponse(BaseModel):
    """Response for POST /v1/leads/loan"""

    message: str
    referral_id: str
    eligible_amount: int
    eligible_amount_display: str
    affiliate_url: str
    redirect_after_seconds: int


class InsuranceLeadRequest(BaseModel):
    """Request body for POST /v1/leads/insurance"""

    applicant_name: Optional[str] = None
    applicant_phone: Optional[str] = None
    applicant_email: Optional[str] = None
    message: Optional[str] = None


class InsuranceLeadResponse(BaseModel):
    """Response for POST /v1/leads/insurance"""

    message: str
    referral_id: str


class ListingSchema(BaseModel):
    """Single listing in search results"""

    listing_id: str
    title: str
    property_type: str
    offer_type: str
    price: float
    location: str
    status: str
    image: Optional[str] = None
    property_type_description: str = ""
    offer_type_description: str = ""
    location_description: str = ""


class ListingsResponse(BaseModel):
    """Response for GET /v1/listings"""

    records: List[ListingSchema]


class PropertyDetailResponse(BaseModel):
    """Response for GET /v1/listings/{record_id}"""

    id: str
    title: str
    location: str
    price: float
    status: str
    property_type: str
    description: str
    agent_name: str
    agent_phone: Optional[str] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    size_sqft: Optional[float] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    amenities: List[str] = []
    images: List[str] = []
    whatsapp_url: Optional[str] = None
