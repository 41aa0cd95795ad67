"""Public surface for the find & replace feature."""

from .domain.aggregation import (
    ApplyOverview,
    PreviewOverview,
    ScanGroup,
    build_commit_payload,
    group_scan_matches,
    summarize_apply,
    summarize_preview,
)
from .domain.errors import ApplyFailure, FindReplaceError, LoadFailure, PreviewFailure, ScanFailure
from .domain.models import (
    ApplyRecord,
    ApplyStatus,
    ApplySummary,
    Category,
    CommitItem,
    Entry,
    PreviewEntry,
    ProposedChange,
    ScanMatch,
    ScanReport,
    WorkflowStage,
)
from .domain.selection import SelectionLedger
from .usecases.ports import ContentStoreGateway, Notice, NoticeLevel, Notifier
from .usecases.session import FindReplaceSession

__all__ = [
    "ApplyFailure",
    "ApplyOverview",
    "ApplyRecord",
    "ApplyStatus",
    "ApplySummary",
    "Category",
    "CommitItem",
    "ContentStoreGateway",
    "Entry",
    "FindReplaceError",
    "FindReplaceSession",
    "LoadFailure",
    "Notice",
    "NoticeLevel",
    "Notifier",
    "PreviewEntry",
    "PreviewFailure",
    "PreviewOverview",
    "ProposedChange",
    "ScanFailure",
    "ScanGroup",
    "ScanMatch",
    "ScanReport",
    "SelectionLedger",
    "WorkflowStage",
    "build_commit_payload",
    "group_scan_matches",
    "summarize_apply",
    "summarize_preview",
]
