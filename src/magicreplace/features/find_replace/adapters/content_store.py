"""Where: src/magicreplace/features/find_replace/adapters/content_store.py
What: HTTP implementation of the content store gateway port.
Why: Translate wire payloads into domain values and transport problems into
     the failure kinds the workflow reports.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Final, TypeVar

from magicreplace.config.settings import API_BASE_URL
from magicreplace.platform.http.http_client import (
    ContentStoreHTTPClient,
    HTTPClient,
    HTTPResult,
)
from magicreplace.platform.logging import logger

from ..domain.errors import (
    ApplyFailure,
    FindReplaceError,
    LoadFailure,
    PreviewFailure,
    ScanFailure,
)
from ..domain.models import (
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
)

T = TypeVar("T")

_MALFORMED_ERRORS: Final[tuple[type[Exception], ...]] = (KeyError, TypeError, ValueError)


class MalformedPayloadError(ValueError):
    """Raised while parsing a response that does not match the expected shape."""


class HttpContentStoreGateway:
    """Reach the content store's REST endpoints over HTTP."""

    _base_url: str
    _http: HTTPClient
    _owns_http: bool

    def __init__(self, *, base_url: str = API_BASE_URL, http_client: HTTPClient | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_http = http_client is None
        self._http = http_client or ContentStoreHTTPClient()

    def close(self) -> None:
        # An injected client belongs to the caller.
        if self._owns_http:
            self._http.close()

    def list_categories(self) -> list[Category]:
        data = self._get("/content-types", [], LoadFailure)
        return _parse(parse_categories, data, LoadFailure)

    def list_entries(self, category_id: str) -> list[Entry]:
        data = self._get("/entries", [("contentTypeUid", category_id)], LoadFailure)
        return _parse(parse_entries, data, LoadFailure)

    def scan(self, category_id: str, pattern: str, entry_ids: Sequence[str]) -> ScanReport:
        params = [("contentTypeUid", category_id), ("query", pattern)]
        params.extend(("entryUids", uid) for uid in entry_ids)
        data = self._get("/scan", params, ScanFailure)
        return _parse(parse_scan_report, data, ScanFailure)

    def preview(
        self,
        category_id: str,
        pattern: str,
        replacement: str,
        entry_ids: Sequence[str],
        smart_mode: bool,
    ) -> list[PreviewEntry]:
        params = [
            ("contentTypeUid", category_id),
            ("query", pattern),
            ("replaceWith", replacement),
        ]
        params.extend(("entryUids", uid) for uid in entry_ids)
        if smart_mode:
            params.append(("smart", "true"))
        data = self._get("/preview", params, PreviewFailure)
        return _parse(parse_preview, data, PreviewFailure)

    def apply(self, category_id: str, changes: Sequence[CommitItem]) -> ApplySummary:
        body = {
            "contentTypeUid": category_id,
            "changes": [
                {
                    "entryUid": item.entry_id,
                    "field": item.field_name,
                    "newValue": item.new_value,
                }
                for item in changes
            ],
        }
        result = self._http.post_json(f"{self._base_url}/apply", body)
        data = _require_ok(result, "/apply", ApplyFailure)
        return _parse(parse_apply_summary, data, ApplyFailure)

    def _get(
        self,
        path: str,
        params: list[tuple[str, str]],
        failure: type[FindReplaceError],
    ) -> Any:
        result = self._http.get_json(f"{self._base_url}{path}", params)
        return _require_ok(result, path, failure)


def _require_ok(result: HTTPResult, path: str, failure: type[FindReplaceError]) -> Any:
    if not result.ok or result.data is None:
        reason = result.error or f"empty response (status={result.status})"
        raise failure(f"{path}: {reason}")
    return result.data


def _parse(parser: Callable[[Any], T], data: Any, failure: type[FindReplaceError]) -> T:
    try:
        return parser(data)
    except _MALFORMED_ERRORS as exc:
        logger.warning("Malformed content store payload: %s", exc)
        raise failure(f"malformed response: {exc}") from exc


# Payload parsing ---------------------------------------------------------------


def _as_mapping(value: Any, label: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise MalformedPayloadError(f"{label} must be an object")
    return value


def _as_list(value: Any, label: str) -> list[Any]:
    # An absent list is an empty result, matching how the store omits empty keys.
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedPayloadError(f"{label} must be a list")
    return value


def _as_text(value: Any, label: str, *, default: str | None = None) -> str:
    if value is None and default is not None:
        return default
    if not isinstance(value, str):
        raise MalformedPayloadError(f"{label} must be a string")
    return value


def _as_count(value: Any, label: str, *, fallback: int) -> int:
    if value is None:
        return fallback
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedPayloadError(f"{label} must be an integer")
    return value


def _as_flag(value: Any) -> bool | None:
    if value is None or isinstance(value, bool):
        return value
    raise MalformedPayloadError("brandkit_approved must be a boolean when present")


def parse_categories(data: Any) -> list[Category]:
    items = data.get("contentTypes") if isinstance(data, dict) else data
    categories: list[Category] = []
    for raw in _as_list(items, "contentTypes"):
        item = _as_mapping(raw, "content type")
        uid = _as_text(item.get("uid"), "content type uid")
        categories.append(Category(id=uid, label=_as_text(item.get("title"), "title", default=uid)))
    return categories


def parse_entries(data: Any) -> list[Entry]:
    payload = _as_mapping(data, "entries response")
    entries: list[Entry] = []
    for raw in _as_list(payload.get("entries"), "entries"):
        item = _as_mapping(raw, "entry")
        uid = _as_text(item.get("uid"), "entry uid")
        entries.append(Entry(id=uid, label=_as_text(item.get("title"), "title", default=uid)))
    return entries


def parse_scan_report(data: Any) -> ScanReport:
    payload = _as_mapping(data, "scan response")
    matches: list[ScanMatch] = []
    for raw in _as_list(payload.get("matches"), "matches"):
        item = _as_mapping(raw, "match")
        uid = _as_text(item.get("entryUid"), "entryUid")
        matches.append(
            ScanMatch(
                entry_id=uid,
                field_name=_as_text(item.get("field"), "field"),
                before_text=_as_text(item.get("before"), "before", default=""),
                entry_label=_as_text(item.get("title"), "title", default=uid),
            )
        )
    total = _as_count(payload.get("totalMatches"), "totalMatches", fallback=len(matches))
    return ScanReport(total_matches=total, matches=tuple(matches))


def _parse_change(raw: Any) -> ProposedChange:
    item = _as_mapping(raw, "change")
    return ProposedChange(
        field_name=_as_text(item.get("field"), "field"),
        before_text=_as_text(item.get("before"), "before", default=""),
        after_text=_as_text(item.get("after"), "after"),
        policy_approved=_as_flag(item.get("brandkit_approved")),
    )


def parse_preview(data: Any) -> list[PreviewEntry]:
    payload = _as_mapping(data, "preview response")
    entries: list[PreviewEntry] = []
    for raw in _as_list(payload.get("preview"), "preview"):
        item = _as_mapping(raw, "preview entry")
        uid = _as_text(item.get("entryUid"), "entryUid")
        changes = tuple(_parse_change(c) for c in _as_list(item.get("changes"), "changes"))
        # Selections are keyed by field name, so each field may change once per entry.
        field_names = [change.field_name for change in changes]
        if len(set(field_names)) != len(field_names):
            raise MalformedPayloadError(f"duplicate field in preview entry {uid}")
        entries.append(
            PreviewEntry(
                entry_id=uid,
                entry_label=_as_text(item.get("title"), "title", default=uid),
                changes=changes,
            )
        )
    return entries


def parse_apply_summary(data: Any) -> ApplySummary:
    payload = _as_mapping(data, "apply response")
    records: list[ApplyRecord] = []
    for raw in _as_list(payload.get("results"), "results"):
        item = _as_mapping(raw, "apply result")
        uid = _as_text(item.get("entryUid"), "entryUid")
        raw_changes = item.get("changes")
        error = item.get("error")
        records.append(
            ApplyRecord(
                entry_id=uid,
                entry_label=_as_text(item.get("title"), "title", default=uid),
                status=ApplyStatus.from_payload(_as_text(item.get("status"), "status")),
                changes=(
                    tuple(_parse_change(c) for c in _as_list(raw_changes, "changes"))
                    if raw_changes is not None
                    else None
                ),
                error=str(error) if error is not None else None,
            )
        )
    updated = sum(1 for record in records if record.succeeded)
    total = _as_count(payload.get("totalUpdated"), "totalUpdated", fallback=updated)
    return ApplySummary(total_updated=total, records=tuple(records))


__all__ = [
    "HttpContentStoreGateway",
    "MalformedPayloadError",
    "parse_apply_summary",
    "parse_categories",
    "parse_entries",
    "parse_preview",
    "parse_scan_report",
]
