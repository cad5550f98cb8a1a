"""Storage-agnostic portal interfaces.

Available Interfaces:
    DocumentRepository: Protocol every storage backend must satisfy

Service Types:
    UploadRequest: Input to the intake service
    IntakeResult: Document and field rows created by an upload
    ClientSummaryView: A built summary with client details
"""

from taxdesk_portal.interfaces.base import DocumentRepository
from taxdesk_portal.interfaces.types import (
    ClientSummaryView,
    IntakeResult,
    UploadRequest,
)

__all__ = [
    # Protocols
    "DocumentRepository",
    # Service types
    "UploadRequest",
    "IntakeResult",
    "ClientSummaryView",
]
