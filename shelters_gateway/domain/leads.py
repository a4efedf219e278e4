"""Lead capture - referral IDs, Airtable field mapping and affiliate handoff"""

import secrets
import string
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import urlencode

LOAN_REFERRAL_PREFIX = "SR"
INSURANCE_REFERRAL_PREFIX = "SI"
NEW_LEAD_STATUS = "New Lead"

_REFERRAL_ALPHABET = string.ascii_uppercase + string.digits


def generate_referral_id(prefix: str, now_ms: Optional[int] = None) -> str:
    """
    Build a sortable, unique-enough referral ID.

    Format: <prefix>-<epoch millis>-<5 random uppercase alphanumerics>
    Example: SR-1718000000000-7QX2M
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_REFERRAL_ALPHABET) for _ in range(5))
    return f"{prefix}-{now_ms}-{suffix}"


def _submitted_at(submitted_at: Optional[datetime]) -> str:
    return (submitted_at or datetime.now(timezone.utc)).isoformat()


def build_loan_lead_fields(
    lead: Dict[str, Any],
    referral_id: str,
    submitted_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Map a loan lead onto the Airtable Leads table columns"""
    return {
        "Name": lead.get("applicant_name"),
        "Phone": lead.get("applicant_phone"),
        "Email": lead.get("applicant_email"),
        "Loan Amount": lead.get("loan_amount"),
        "Tenure (Years)": lead.get("loan_tenure"),
        "Application": lead.get("loan_type"),
        "Applicant Age": lead.get("applicant_age"),
        "Credit Score": lead.get("credit_score"),
        "Monthly Income": lead.get("monthly_income"),
        "Existing EMIs": lead.get("existing_emis"),
        "Co-Applicant Name": lead.get("co_applicant_name") or None,
        "Co-Applicant Income": lead.get("co_applicant_income") or None,
        "Eligible Amount": lead.get("eligible_amount"),
        "Status": NEW_LEAD_STATUS,
        "Referral ID": referral_id,
        "Submission Date": _submitted_at(submitted_at),
    }


def build_insurance_lead_fields(
    lead: Dict[str, Any],
    referral_id: str,
    submitted_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Map an insurance inquiry onto the Airtable Leads table columns"""
    return {
        "Name": lead.get("applicant_name") or "N/A",
        "Phone": lead.get("applicant_phone") or "N/A",
        "Email": lead.get("applicant_email") or "N/A",
        "Message": lead.get("message"),
        "Type": "Insurance",
        "Status": NEW_LEAD_STATUS,
        "Referral ID": referral_id,
        "Submission Date": _submitted_at(submitted_at),
    }


_AFFILIATE_PARAM_NAMES = {
    "applicant_name": "applicantName",
    "applicant_phone": "applicantPhone",
    "applicant_email": "applicantEmail",
    "applicant_age": "applicantAge",
    "credit_score": "creditScore",
    "loan_amount": "loanAmount",
    "loan_tenure": "loanTenure",
    "loan_type": "loanType",
    "monthly_income": "monthlyIncome",
    "existing_emis": "existingEMIs",
    "co_applicant_name": "coApplicantName",
    "co_applicant_income": "coApplicantIncome",
    "eligible_amount": "eligibleAmount",
    "referral_id": "referralId",
}


def _query_value(value: Any) -> str:
    # Whole amounts go out as integers: 8000000.0 -> "8000000"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def generate_affiliate_url(base_url: str, lead: Dict[str, Any], ref: str) -> str:
    """
    Partner handoff URL carrying the referral tag and non-empty lead fields.

    Fields are renamed to the partner's camelCase parameter names; fields the
    partner form does not know are left out. Empty values (None, "", 0) are
    dropped too, so the partner form only prefills what the applicant gave us.
    """
    params = [("ref", ref)]
    for key, value in lead.items():
        name = _AFFILIATE_PARAM_NAMES.get(key)
        if name and value:
            params.append((name, _query_value(value)))
    return f"{base_url}?{urlencode(params)}"
