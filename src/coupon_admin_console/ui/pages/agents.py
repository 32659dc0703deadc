from __future__ import annotations

from typing import Any, Mapping

from coupon_admin_sdk.models import Agent, AgentPayload

from coupon_admin_console.ui.resources.paginated_resource import ResourceListPage

DEFAULT_AGENT_PASSWORD = "123456789"


class AgentsPage(ResourceListPage[Agent]):
    module = "agents"
    title = "Agents"
    columns = (("name", "Name"), ("phone", "Phone"), ("status", "Status"))
    empty_message = "No agents yet"
    created_message = "Agent created successfully"
    updated_message = "Agent updated successfully"
    deleted_message = "Agent deleted successfully"
    save_failed_message = "Failed to save agent"
    delete_failed_message = "Failed to delete agent"
    delete_confirm_message = "Are you sure you want to delete this agent? Related data may be affected!"

    def blank_draft(self) -> dict[str, Any]:
        return {"name": "", "phone": "", "active": True}

    def draft_from(self, item: Agent) -> dict[str, Any]:
        return {"name": item.name, "phone": item.phone, "active": item.active}

    def validate(self, draft: Mapping[str, Any]) -> str | None:
        if not str(draft.get("name") or "").strip():
            return "Please enter the agent name"
        if not str(draft.get("phone") or "").strip():
            return "Please enter the agent phone number"
        return None

    def payload(self, draft: Mapping[str, Any]) -> dict[str, Any]:
        return AgentPayload.model_validate(dict(draft)).model_dump()

    def read_only_fields(self) -> set[str]:
        # New agents always start active; the toggle exists only when editing.
        return set() if self.dialog.is_editing else {"active"}

    def dialog_hints(self) -> dict[str, Any]:
        if self.dialog.is_editing:
            return {"show_active_toggle": True}
        return {
            "show_active_toggle": False,
            "default_password": DEFAULT_AGENT_PASSWORD,
            "message": f"New agents sign in with the default password {DEFAULT_AGENT_PASSWORD}",
        }

    def row(self, item: Agent) -> dict[str, Any]:
        return {
            "id": item.id,
            "name": item.name,
            "phone": item.phone,
            "active": item.active,
            "status": "Active" if item.active else "Inactive",
        }
