"""TaxDesk Portal - Document intake, review and tax-prep workspace services."""

from taxdesk_portal.config import (
    IntakeConfig,
    TaxDeskConfig,
    WorkspaceConfig,
)
from taxdesk_portal.intake import DocumentIntakeService
from taxdesk_portal.memory_store import InMemoryDocumentRepository
from taxdesk_portal.review import FieldReviewService
from taxdesk_portal.workspace import TaxPrepWorkspace

__version__ = "0.1.0"

__all__ = [
    "IntakeConfig",
    "TaxDeskConfig",
    "WorkspaceConfig",
    "DocumentIntakeService",
    "FieldReviewService",
    "InMemoryDocumentRepository",
    "TaxPrepWorkspace",
]
