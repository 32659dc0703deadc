from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, Mapping, TypeVar

from pydantic import BaseModel

from ..exceptions import InvalidResponseError
from ..http_client import HttpClient, JsonPayload
from ..models import ListResponse

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class BaseClient:
    http: HttpClient
    module: ClassVar[str] = "unknown"

    def _request(self, method: str, path: str, *, operation: str = "unknown", **kwargs: Any) -> JsonPayload:
        return self.http.request(method, path, module=self.module, operation=operation, **kwargs)


@dataclass
class ResourceClient(BaseClient, Generic[ModelT]):
    """List/create/update/delete over one REST collection.

    Every list endpoint answers ``{"data": [...], "total": n}``.
    """

    base_path: ClassVar[str] = ""
    model: ClassVar[type[BaseModel]]

    def list(self, query: Mapping[str, Any] | None = None) -> ListResponse[ModelT]:
        data = self._request("GET", self.base_path, operation="list", params=dict(query or {}))
        if data is None:
            return ListResponse[self.model]()  # type: ignore[name-defined]
        if not isinstance(data, dict):
            last = self.http.last_operation
            raise InvalidResponseError(
                code="INVALID_LIST",
                message=f"Expected {{data, total}} from {self.base_path}, got {type(data).__name__}",
                details=None,
                trace_id=last.trace_id if last else None,
                status_code=200,
                raw_payload=None,
            )
        return ListResponse[self.model].model_validate(data)  # type: ignore[name-defined]

    def create(self, payload: Mapping[str, Any]) -> ModelT | None:
        data = self._request("POST", self.base_path, operation="create", json_body=dict(payload))
        return self._parse_item(data)

    def update(self, item_id: str, payload: Mapping[str, Any]) -> ModelT | None:
        data = self._request("PUT", f"{self.base_path}/{item_id}", operation="update", json_body=dict(payload))
        return self._parse_item(data)

    def delete(self, item_id: str) -> None:
        self._request("DELETE", f"{self.base_path}/{item_id}", operation="delete")

    def _parse_item(self, data: JsonPayload) -> ModelT | None:
        # Mutation responses vary between the bare record and an ack message.
        if isinstance(data, dict) and "_id" in data:
            return self.model.model_validate(data)  # type: ignore[return-value]
        return None
