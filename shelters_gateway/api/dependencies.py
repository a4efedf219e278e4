"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from shelters_gateway.infrastructure.clients.airtable import AirtableClient
from shelters_gateway.infrastructure.clients.lead_webhook import LeadWebhookClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_airtable_client() -> AirtableClient:
    """Provide Airtable API client instance"""
    return AirtableClient()


def get_lead_webhook_client() -> LeadWebhookClient:
    """Provide lead webhook client instance"""
    return LeadWebhookClient()
