"""Affordability policy - derives the installment a borrower can carry"""

import math
from typing import Optional

JOINT_LOAN = "joint"
SINGLE_LOAN = "single"


def combined_monthly_income(
    applicant_income: Optional[float],
    co_applicant_income: Optional[float] = None,
    loan_type: str = SINGLE_LOAN,
) -> float:
    """Applicant income, plus co-applicant income for joint applications"""
    total = float(applicant_income or 0)
    if loan_type == JOINT_LOAN:
        total += float(co_applicant_income or 0)
    return total


def max_affordable_installment(
    total_monthly_income: float,
    existing_obligations: Optional[float],
    affordability_fraction: float,
) -> float:
    """
    Monthly installment left for a new loan.

    income * fraction - existing EMIs. May be zero or negative; the
    calculator treats that as no eligibility.
    """
    return total_monthly_income * affordability_fraction - float(existing_obligations or 0)


def tenure_years_to_months(tenure_years: float) -> int:
    """
    Months in a tenure given in years, counting whole years only.

    2.5 years -> 24 months. Tenure that is non-finite, or whose month count
    overflows a float, gives 0.
    """
    try:
        if not math.isfinite(tenure_years * 12):
            return 0
    except (TypeError, OverflowError):
        # None, or an int too large to convert to float
        return 0
    return int(tenure_years) * 12


def financed_principal(property_price: float, down_payment: Optional[float] = None) -> float:
    """Loan principal after down payment"""
    return property_price - float(down_payment or 0)
