"""POST /v1/calculator/* - EMI and loan eligibility endpoints"""

from fastapi import APIRouter

from shelters_gateway.api.v1.schemas import (
    EligibilityRequest,
    EligibilityResponse,
    EmiDisplay,
    EmiRequest,
    EmiResponse,
)
from shelters_gateway.config import settings
from shelters_gateway.domain.affordability import (
    combined_monthly_income,
    financed_principal,
    max_affordable_installment,
    tenure_years_to_months,
)
from shelters_gateway.domain.loan_calculator import compute_eligibility, compute_emi
from shelters_gateway.domain.models import EligibilityInput, LoanInput
from shelters_gateway.infrastructure.observability.metrics import record_calculation
from shelters_gateway.utils.currency import format_inr, round_currency

router = APIRouter()


@router.post("/calculator/emi", response_model=EmiResponse)
def calculate_emi(request_body: EmiRequest):
    """
    Compute EMI, total interest and total payable for a property purchase.

    Financed principal is property price minus down payment. Incomplete or
    non-positive input returns zeros rather than an error, so the form can
    call this on every keystroke.
    """
    rate = request_body.annual_rate_percent
    if rate is None:
        rate = settings.fixed_interest_rate
    tenure_months = tenure_years_to_months(request_body.tenure_years)

    result = compute_emi(
        LoanInput(
            principal=financed_principal(request_body.property_price, request_body.down_payment),
            annual_rate_percent=rate,
            tenure_months=tenure_months,
        )
    )
    record_calculation("emi", result.monthly_installment)

    return EmiResponse(
        annual_rate_percent=rate,
        tenure_months=tenure_months,
        monthly_installment=result.monthly_installment,
        principal=result.principal,
        total_interest=result.total_interest,
        total_payable=result.total_payable,
        display=EmiDisplay(
            monthly_installment=format_inr(result.monthly_installment),
            principal=format_inr(result.principal),
            total_interest=format_inr(result.total_interest),
            total_payable=format_inr(result.total_payable),
        ),
    )


@router.post("/calculator/eligibility", response_model=EligibilityResponse)
def calculate_eligibility(request_body: EligibilityRequest):
    """Maximum loan for the applicant's income after existing EMIs"""
    rate = request_body.annual_rate_percent
    if rate is None:
        rate = settings.fixed_interest_rate
    fraction = request_body.affordability_fraction or settings.affordability_fraction

    income = combined_monthly_income(
        request_body.monthly_income,
        request_body.co_applicant_income,
        request_body.loan_type,
    )
    installment = max_affordable_installment(income, request_body.existing_emis, fraction)
    result = compute_eligibility(
        EligibilityInput(
            max_monthly_installment=installment,
            annual_rate_percent=rate,
            tenure_months=tenure_years_to_months(request_body.tenure_years),
        )
    )
    record_calculation("eligibility", result.max_principal)

    return EligibilityResponse(
        max_monthly_installment=installment,
        eligible_amount=int(round_currency(result.max_principal)),
        eligible_amount_display=format_inr(result.max_principal),
    )
