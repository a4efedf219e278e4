"""POST /v1/leads/* - Loan and insurance lead capture endpoints"""

import time
import logging
from typing import Any, Dict
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request

from shelters_gateway.api.dependencies import get_airtable_client, get_lead_webhook_client, get_request_id
from shelters_gateway.api.v1.schemas import (
    InsuranceLeadRequest,
    InsuranceLeadResponse,
    LoanLeadRequest,
    LoanLeadResponse,
)
from shelters_gateway.config import settings
from shelters_gateway.domain.affordability import (
    combined_monthly_income,
    max_affordable_installment,
    tenure_years_to_months,
)
from shelters_gateway.domain.exceptions import AirtableAPIError, AirtableConfigError, LeadWebhookError
from shelters_gateway.domain.leads import (
    INSURANCE_REFERRAL_PREFIX,
    LOAN_REFERRAL_PREFIX,
    build_insurance_lead_fields,
    build_loan_lead_fields,
    generate_affiliate_url,
    generate_referral_id,
)
from shelters_gateway.domain.loan_calculator import compute_eligibility
from shelters_gateway.domain.models import EligibilityInput
from shelters_gateway.infrastructure.clients.airtable import AirtableClient
from shelters_gateway.infrastructure.clients.lead_webhook import LeadWebhookClient
from shelters_gateway.infrastructure.observability.logging import log_lead
from shelters_gateway.infrastructure.observability.metrics import record_lead
from shelters_gateway.utils.currency import format_inr, round_currency

router = APIRouter()


async def forward_lead(webhook_client: LeadWebhookClient, payload: Dict[str, Any], request_id: str) -> None:
    """Background delivery of a captured lead to the automation webhook"""
    try:
        await webhook_client.send_lead(payload)
    except LeadWebhookError as e:
        logging.error(
            f"Lead webhook delivery failed: {e}",
            extra={"request_id": request_id, "referral_id": payload.get("referral_id")},
        )


def eligible_amount_for(lead: LoanLeadRequest) -> int:
    """Rounded maximum loan for the applicant at the partner rate"""
    income = combined_monthly_income(lead.monthly_income, lead.co_applicant_income, lead.loan_type)
    installment = max_affordable_installment(income, lead.existing_emis, settings.affordability_fraction)
    result = compute_eligibility(
        EligibilityInput(
            max_monthly_installment=installment,
            annual_rate_percent=settings.fixed_interest_rate,
            tenure_months=tenure_years_to_months(lead.loan_tenure),
        )
    )
    return int(round_currency(result.max_principal))


@router.post("/leads/loan", response_model=LoanLeadResponse)
async def submit_loan_lead(
    request_body: LoanLeadRequest,
    background_tasks: BackgroundTasks,
    request: Request,
    airtable: AirtableClient = Depends(get_airtable_client),
    webhook_client: LeadWebhookClient = Depends(get_lead_webhook_client),
):
    """
    Capture a home-loan lead and hand the applicant off to the partner lender.

    Flow:
    1. Compute eligibility server-side from income and existing EMIs
    2. Store the lead in the Airtable Leads table with a referral ID
    3. Schedule webhook forwarding
    4. Return the affiliate URL and redirect countdown
    """
    start_time = time.time()
    request_id = get_request_id(request)

    lead = request_body.model_dump()
    if lead["loan_type"] != "joint":
        lead["co_applicant_name"] = None
        lead["co_applicant_income"] = None
    lead["eligible_amount"] = eligible_amount_for(request_body)

    referral_id = generate_referral_id(LOAN_REFERRAL_PREFIX)

    try:
        await airtable.create_record(settings.leads_table, build_loan_lead_fields(lead, referral_id))
    except (AirtableAPIError, AirtableConfigError) as e:
        record_lead("loan", captured=False)
        log_lead(request_id, "loan", referral_id, False, (time.time() - start_time) * 1000)
        logging.error(f"Failed to save lead to Airtable: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=502, detail="Failed to process lead.")

    lead["referral_id"] = referral_id
    background_tasks.add_task(forward_lead, webhook_client, lead, request_id)

    record_lead("loan", captured=True)
    log_lead(request_id, "loan", referral_id, True, (time.time() - start_time) * 1000)

    return LoanLeadResponse(
        message="Lead captured successfully.",
        referral_id=referral_id,
        eligible_amount=lead["eligible_amount"],
        eligible_amount_display=format_inr(lead["eligible_amount"]),
        affiliate_url=generate_affiliate_url(settings.affiliate_base_url, lead, settings.affiliate_ref),
        redirect_after_seconds=settings.redirect_countdown_seconds,
    )


@router.post("/leads/insurance", response_model=InsuranceLeadResponse)
async def submit_insurance_lead(
    request_body: InsuranceLeadRequest,
    request: Request,
    airtable: AirtableClient = Depends(get_airtable_client),
):
    """Capture an insurance inquiry in the Airtable Leads table"""
    start_time = time.time()
    request_id = get_request_id(request)
    referral_id = generate_referral_id(INSURANCE_REFERRAL_PREFIX)

    try:
        await airtable.create_record(
            settings.leads_table,
            build_insurance_lead_fields(request_body.model_dump(), referral_id),
        )
    except (AirtableAPIError, AirtableConfigError) as e:
        record_lead("insurance", captured=False)
        log_lead(request_id, "insurance", referral_id, False, (time.time() - start_time) * 1000)
        logging.error(f"Failed to save insurance lead to Airtable: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=502, detail="Failed to process insurance inquiry.")

    record_lead("insurance", captured=True)
    log_lead(request_id, "insurance", referral_id, True, (time.time() - start_time) * 1000)

    return InsuranceLeadResponse(
        message="Insurance inquiry captured successfully.",
        referral_id=referral_id,
    )
