"""Domain-specific exceptions"""

from typing import Optional


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class AirtableConfigError(DomainException):
    """Airtable credentials are missing from configuration"""

    pass


class AirtableAPIError(DomainException):
    """Airtable API returned an error or is unavailable"""

    def __init__(self, message: str, status_code: Optional[int] = None, details: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class RecordNotFoundError(DomainException):
    """Requested Airtable record does not exist"""

    pass


class InvalidRecordIdError(DomainException):
    """Record identifier is malformed"""

    pass


class LeadWebhookError(DomainException):
    """Lead webhook rejected the payload after all retries"""

    pass
