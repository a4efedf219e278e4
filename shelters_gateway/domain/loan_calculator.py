"""EMI and loan eligibility calculation - core business logic for the calculator"""

import math

from shelters_gateway.domain.models import (
    EligibilityInput,
    EligibilityResult,
    EmiResult,
    LoanInput,
)


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert an annual percentage rate to a monthly decimal rate"""
    return annual_rate_percent / (12 * 100)


def _all_finite(*values: float) -> bool:
    try:
        return all(math.isfinite(v) for v in values)
    except (TypeError, OverflowError):
        # Non-numeric, or an int too large to convert to float
        return False


def _growth_factor(rate: float, tenure_months: float) -> float:
    """(1 + r)^n, saturating to infinity instead of raising on overflow"""
    try:
        return (1 + rate) ** tenure_months
    except OverflowError:
        return math.inf


def compute_emi(loan: LoanInput) -> EmiResult:
    """
    Compute the equal monthly installment for an amortizing loan.

    EMI = P * r * (1+r)^n / ((1+r)^n - 1)
    where r = annual_rate / (12 * 100), P = principal, n = tenure in months.

    Degenerate input (principal, tenure or rate not strictly positive, or any
    value NaN/infinite) yields the all-zero result. This is the
    "not enough information yet" state of a partially filled form, so the
    function never raises. Values are returned unrounded.

    Example:
        8,000,000 at 7.3% over 240 months -> EMI 63,472.66
    """
    principal = loan.principal
    tenure = loan.tenure_months
    if not _all_finite(principal, loan.annual_rate_percent, tenure):
        return EmiResult.zero()

    rate = monthly_rate(loan.annual_rate_percent)
    if principal <= 0 or tenure <= 0 or rate <= 0:
        return EmiResult.zero()

    factor = _growth_factor(rate, tenure)
    if math.isinf(factor):
        # Limit of the formula as (1+r)^n grows without bound
        emi = principal * rate
    else:
        emi = principal * rate * factor / (factor - 1)

    total_payable = emi * tenure
    total_interest = total_payable - principal
    if not _all_finite(emi, total_payable, total_interest):
        return EmiResult.zero()

    return EmiResult(
        monthly_installment=emi,
        principal=principal,
        total_interest=total_interest,
        total_payable=total_payable,
    )


def compute_eligibility(eligibility: EligibilityInput) -> EligibilityResult:
    """
    Compute the maximum principal affordable at a fixed monthly installment.

    Inverse of the EMI formula solved for principal:
    P = M * ((1+r)^n - 1) / (r * (1+r)^n)

    Installment, tenure or rate not strictly positive (or non-finite) gives
    a max_principal of 0.
    """
    installment = eligibility.max_monthly_installment
    tenure = eligibility.tenure_months
    if not _all_finite(installment, eligibility.annual_rate_percent, tenure):
        return EligibilityResult(max_principal=0.0)

    rate = monthly_rate(eligibility.annual_rate_percent)
    if installment <= 0 or tenure <= 0 or rate <= 0:
        return EligibilityResult(max_principal=0.0)

    factor = _growth_factor(rate, tenure)
    if math.isinf(factor):
        max_principal = installment / rate
    else:
        max_principal = installment * (factor - 1) / (rate * factor)

    if not math.isfinite(max_principal):
        return EligibilityResult(max_principal=0.0)
    return EligibilityResult(max_principal=max_principal)
