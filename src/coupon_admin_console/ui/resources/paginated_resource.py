from __future__ import annotations

import logging
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Callable, ClassVar, Generic, Mapping, Protocol, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from coupon_admin_sdk.exceptions import ApiError
from coupon_admin_sdk.models import ListResponse
from coupon_admin_sdk.tracing import TraceContext
from coupon_admin_sdk.ui_errors import user_message

from coupon_admin_console.telemetry import TelemetryLogger, disabled_telemetry, result_event
from coupon_admin_console.ui.resources.pagination import PaginationState
from coupon_admin_console.ui.shared.notification_center import NotificationCenter
from coupon_admin_console.ui.shared.view_state import resolve_state

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT", bound=BaseModel)
ItemT_co = TypeVar("ItemT_co", bound=BaseModel, covariant=True)

ConfirmFn = Callable[[str], bool]


class ResourceEndpoint(Protocol[ItemT_co]):
    def list(self, query: Mapping[str, Any] | None = None) -> ListResponse[Any]: ...


class MutableResourceEndpoint(ResourceEndpoint[ItemT_co], Protocol):
    def create(self, payload: Mapping[str, Any]) -> Any: ...

    def update(self, item_id: str, payload: Mapping[str, Any]) -> Any: ...

    def delete(self, item_id: str) -> None: ...


def _deny(_message: str) -> bool:
    return False


@dataclass
class EditorDialog:
    is_open: bool = False
    editing_id: str | None = None
    draft: dict[str, Any] = field(default_factory=dict)

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def open(self, draft: dict[str, Any], editing_id: str | None = None) -> None:
        self.is_open = True
        self.editing_id = editing_id
        self.draft = draft

    def close(self) -> None:
        self.is_open = False
        self.editing_id = None


class ResourceListPage(Generic[ItemT]):
    """One server-paginated table with an optional create/edit dialog.

    Each concrete page supplies the endpoint and the per-resource hooks
    (draft shape, validation, payload, row rendering and messages). Every
    cursor change re-issues exactly one list request; responses are
    applied in arrival order.
    """

    module: ClassVar[str] = "resource"
    title: ClassVar[str] = ""
    editable: ClassVar[bool] = True
    filter_param: ClassVar[str | None] = None
    default_filter: ClassVar[str | None] = None
    columns: ClassVar[tuple[tuple[str, str], ...]] = ()
    empty_message: ClassVar[str] = "No records yet"
    created_message: ClassVar[str] = "Created successfully"
    updated_message: ClassVar[str] = "Updated successfully"
    deleted_message: ClassVar[str] = "Deleted successfully"
    save_failed_message: ClassVar[str] = "Operation failed"
    delete_failed_message: ClassVar[str] = "Delete failed"
    delete_confirm_message: ClassVar[str] = "Are you sure you want to delete this record?"

    def __init__(
        self,
        endpoint: ResourceEndpoint[ItemT],
        *,
        confirm: ConfirmFn | None = None,
        page_size: int = 10,
        notifications: NotificationCenter | None = None,
        telemetry: TelemetryLogger | None = None,
        trace: TraceContext | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.trace = trace
        self.confirm = confirm or _deny
        self.pagination = PaginationState(
            page_size=page_size,
            filter=self.default_filter,
            filter_param=self.filter_param,
        )
        self.notifications = notifications or NotificationCenter()
        self.telemetry = telemetry or disabled_telemetry()
        self.items: list[ItemT] = []
        self.dialog = EditorDialog()
        self.is_loading = False

    # Hooks

    def blank_draft(self) -> dict[str, Any]:
        return {}

    def draft_from(self, item: ItemT) -> dict[str, Any]:
        return item.model_dump(by_alias=True, exclude={"id"})

    def validate(self, draft: Mapping[str, Any]) -> str | None:
        return None

    def payload(self, draft: Mapping[str, Any]) -> dict[str, Any]:
        return dict(draft)

    def normalize_field(self, name: str, value: Any) -> Any:
        return value

    def read_only_fields(self) -> set[str]:
        return set()

    def dialog_hints(self) -> dict[str, Any]:
        return {}

    def row(self, item: ItemT) -> dict[str, Any]:
        return item.model_dump(mode="json")

    def item_id(self, item: ItemT) -> str:
        return str(getattr(item, "id"))

    # Loading

    def load(self) -> bool:
        query = self.pagination.as_query()
        self.is_loading = True
        started = self._begin()
        try:
            response = self.endpoint.list(query)
        except (ApiError, PydanticValidationError) as exc:
            self.is_loading = False
            logger.warning(
                f"{self.module}_load_failed",
                extra={"resource": self.module, "query": query, "error": type(exc).__name__},
            )
            self.items = []
            self.pagination.total = 0
            self._emit_result("load", started, error=exc)
            return False
        self.is_loading = False
        self.items = list(response.data)
        self.pagination.total = response.total
        logger.info(
            "list_fetch_success",
            extra={"resource": self.module, "page": self.pagination.page, "count": len(self.items), "total": response.total},
        )
        self._emit_result("load", started, count=len(self.items), total=response.total)
        return True

    def refresh(self) -> bool:
        return self.load()

    def set_search(self, search: str) -> bool:
        self.pagination.set_search(search)
        return self.load()

    def set_filter(self, value: str | None) -> bool:
        self.pagination.set_filter(value)
        return self.load()

    def set_page_size(self, page_size: int) -> bool:
        self.pagination.set_page_size(page_size)
        return self.load()

    def next_page(self) -> bool:
        if not self.pagination.next_page():
            return False
        return self.load()

    def previous_page(self) -> bool:
        if not self.pagination.previous_page():
            return False
        return self.load()

    def goto_page(self, page: int) -> bool:
        self.pagination.goto(page)
        return self.load()

    # Editing

    def open_create(self) -> EditorDialog:
        self._require_editable()
        self.dialog.open(self.blank_draft())
        return self.dialog

    def open_edit(self, item: ItemT) -> EditorDialog:
        self._require_editable()
        self.dialog.open(self.draft_from(item), editing_id=self.item_id(item))
        return self.dialog

    def cancel_edit(self) -> None:
        self.dialog.close()

    def update_draft(self, **changes: Any) -> dict[str, Any]:
        """Apply field edits; read-only fields keep their value."""
        locked = self.read_only_fields()
        for name, value in changes.items():
            if name in locked:
                continue
            self.dialog.draft[name] = self.normalize_field(name, value)
        return self.dialog.draft

    def submit(self) -> bool:
        if not self.dialog.is_open:
            return False
        draft = self.dialog.draft
        problem = self.validate(draft)
        if problem:
            self.notifications.blocking_error(problem)
            return False

        endpoint = self._mutable_endpoint()
        payload = self.payload(draft)
        editing_id = self.dialog.editing_id
        action = "update" if editing_id else "create"
        started = self._begin()
        try:
            if editing_id:
                endpoint.update(editing_id, payload)
            else:
                endpoint.create(payload)
        except ApiError as exc:
            logger.info(f"{self.module}_{action}_failed", extra={"status_code": exc.status_code, "trace_id": exc.trace_id})
            self.notifications.error(user_message(exc, self.save_failed_message), trace_id=exc.trace_id)
            self._emit_result(action, started, error=exc)
            return False

        self._emit_result(action, started)
        self.dialog.close()
        self.notifications.success(self.updated_message if editing_id else self.created_message)
        self.load()
        return True

    def delete(self, item_id: str) -> bool:
        self._require_editable()
        if not self.confirm(self.delete_confirm_message):
            return False
        endpoint = self._mutable_endpoint()
        started = self._begin()
        try:
            endpoint.delete(item_id)
        except ApiError as exc:
            logger.info(f"{self.module}_delete_failed", extra={"status_code": exc.status_code, "trace_id": exc.trace_id})
            self.notifications.error(user_message(exc, self.delete_failed_message), trace_id=exc.trace_id)
            self._emit_result("delete", started, error=exc)
            return False
        self._emit_result("delete", started)
        # The page number is kept even when the deleted row was the last one on it.
        self.load()
        self.notifications.success(self.deleted_message)
        return True

    # Rendering

    def render(self) -> dict[str, Any]:
        state = resolve_state(is_loading=self.is_loading, has_data=bool(self.items), empty_message=self.empty_message)
        payload: dict[str, Any] = {
            "title": self.title,
            "columns": list(self.columns),
            "rows": [self.row(item) for item in self.items],
            "pagination": self.pagination.render(),
            "view_state": state.render(),
            "notifications": self.notifications.render(),
            "editable": self.editable,
        }
        if self.editable:
            payload["dialog"] = {
                "open": self.dialog.is_open,
                "editing_id": self.dialog.editing_id,
                "draft": dict(self.dialog.draft),
                "read_only_fields": sorted(self.read_only_fields()),
                "hints": self.dialog_hints(),
            }
        return payload

    def _require_editable(self) -> None:
        if not self.editable:
            raise RuntimeError(f"{self.module} is read-only")

    def _mutable_endpoint(self) -> MutableResourceEndpoint[ItemT]:
        return self.endpoint  # type: ignore[return-value]

    def _begin(self) -> float:
        if self.trace is not None:
            self.trace.begin()
        return perf_counter()

    def _emit_result(self, action: str, started: float, *, error: Exception | None = None, **context: Any) -> None:
        self.telemetry.emit(
            result_event(
                f"{self.module}.{action}",
                started=started,
                trace_id=self.trace.trace_id if self.trace is not None else None,
                error=error,
                context={"page": self.pagination.page, "page_size": self.pagination.page_size, **context},
            )
        )
