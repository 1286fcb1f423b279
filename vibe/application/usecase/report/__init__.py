"""Report use cases."""

from .create_report import (
    CreateReportRequest,
    CreateReportResponse,
    CreateReportUseCase,
)
from .list_reports import (
    ListReportsRequest,
    ListReportsResponse,
    ListReportsUseCase,
    ReportItem,
)
from .resolve_report import (
    ResolveReportRequest,
    ResolveReportResponse,
    ResolveReportUseCase,
)

__all__ = [
    "CreateReportRequest",
    "CreateReportResponse",
    "CreateReportUseCase",
    "ListReportsRequest",
    "ListReportsResponse",
    "ListReportsUseCase",
    "ReportItem",
    "ResolveReportRequest",
    "ResolveReportResponse",
    "ResolveReportUseCase",
]
