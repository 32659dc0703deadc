from __future__ import annotations

import argparse
import getpass
import logging
import shlex
from typing import Any

from coupon_admin_sdk import ConfigError, load_config

from coupon_admin_console.app.bootstrap import ConsoleApp, ResolvedView
from coupon_admin_console.app.navigation import resolve_path
from coupon_admin_console.ui.pages import (
    AdminOrdersPage,
    ChangePasswordPage,
    ConfigRulesPage,
    LoginPage,
)
from coupon_admin_console.ui.resources.paginated_resource import ResourceListPage

EMPTY_VALUE = "-"

HELP_TEXT = """Commands:
  go <path>            open a page (e.g. go /admin/coupons)
  refresh              reload the current page
  logout               end the session
  quit                 exit
 Lists:   search <text> | filter <value> | size <n> | next | prev | page <n>
          new | edit <row> | set <field> <value> | save | cancel | delete <row>
 Orders:  sync
 Config:  set <field> <value> | save
 Auth:    login | change"""


def confirm_prompt(message: str) -> bool:
    answer = input(f"{message} [y/N]: ").strip().lower()
    return answer in {"y", "yes"}


def _normalize(value: Any) -> str:
    if value is None or value == "":
        return EMPTY_VALUE
    return str(value)


def print_table(title: str, rows: list[dict[str, Any]], columns: list[tuple[str, str]], empty: str) -> None:
    print(f"\n{title}")
    if not rows:
        print(f"({empty})")
        return

    keyed = [("#", "#")] + columns
    numbered = [{"#": index, **row} for index, row in enumerate(rows, start=1)]
    widths = []
    for key, header in keyed:
        max_cell = max(len(_normalize(row.get(key))) for row in numbered)
        widths.append(max(len(header), max_cell))

    print(" | ".join(header.ljust(widths[idx]) for idx, (_, header) in enumerate(keyed)))
    print("-+-".join("-" * width for width in widths))
    for row in numbered:
        print(" | ".join(_normalize(row.get(key)).ljust(widths[idx]) for idx, (key, _) in enumerate(keyed)))


def _print_notifications(payload: dict[str, Any]) -> None:
    for note in payload.get("messages", []):
        prefix = "!!" if note.get("level") == "error" else "--"
        print(f"{prefix} {note['title']}: {note['message']}")


def render_view(app: ConsoleApp, view: ResolvedView) -> None:
    identity = app.store.identity
    header = f"[{view.route.value}]"
    if identity is not None:
        header += f" {identity.name} ({identity.role.value})"
    print(f"\n===== {header} =====")
    links = app.sidebar()
    if links:
        print("Menu: " + "  ".join(f"{link['label']} {link['path']}" for link in links))
    if view.loading:
        print("Loading...")
        return

    page = view.page
    payload = page.render()
    if isinstance(page, ResourceListPage):
        print_table(payload["title"], payload["rows"], payload["columns"], payload["view_state"]["message"])
        paging = payload["pagination"]
        print(
            f"Page {paging['page']}/{paging['page_count']} | total {paging['total']} | "
            f"size {paging['page_size']} | search '{paging['search']}' | filter {paging['filter'] or EMPTY_VALUE}"
        )
        for option in payload.get("filter_options", []):
            print(f"  filter option: {option['value']} ({option['label']})")
        dialog = payload.get("dialog")
        if dialog and dialog["open"]:
            mode = "Edit" if dialog["editing_id"] else "Create"
            print(f"{mode} dialog: {dialog['draft']} read-only={dialog['read_only_fields']}")
            for key, hint in dialog["hints"].items():
                if hint not in (None, False, []):
                    print(f"  {key}: {hint}")
        _print_notifications(payload["notifications"])
        page.notifications.clear()
        return

    for key, value in payload.items():
        if key == "notifications":
            continue
        print(f"{key}: {value}")
    notifications = payload.get("notifications")
    if notifications:
        _print_notifications(notifications)
        page.notifications.clear()


def _row_item(page: ResourceListPage[Any], raw: str) -> Any:
    index = int(raw) - 1
    if not 0 <= index < len(page.items):
        raise ValueError(f"No row {raw} on this page")
    return page.items[index]


def handle_list_command(page: ResourceListPage[Any], command: str, args: list[str]) -> bool:
    if command == "search":
        page.set_search(" ".join(args))
    elif command == "filter":
        page.set_filter(args[0] if args else None)
    elif command == "size":
        page.set_page_size(int(args[0]))
    elif command == "next":
        page.next_page()
    elif command == "prev":
        page.previous_page()
    elif command == "page":
        page.goto_page(int(args[0]))
    elif command == "new":
        page.open_create()
    elif command == "edit":
        page.open_edit(_row_item(page, args[0]))
    elif command == "set":
        page.update_draft(**{args[0]: " ".join(args[1:])})
    elif command == "save":
        page.submit()
    elif command == "cancel":
        page.cancel_edit()
    elif command == "delete":
        page.delete(page.item_id(_row_item(page, args[0])))
    elif command == "sync" and isinstance(page, AdminOrdersPage):
        page.sync()
    else:
        return False
    return True


def handle_command(app: ConsoleApp, view: ResolvedView, line: str) -> ResolvedView:
    parts = shlex.split(line)
    if not parts:
        return app.resolve()
    command, args = parts[0].lower(), parts[1:]
    page = view.page

    if command == "help":
        print(HELP_TEXT)
    elif command == "go" and args:
        route = resolve_path(args[0])
        if route is None:
            print(f"Unknown page: {args[0]}")
        else:
            return app.go(route)
    elif command == "logout":
        return app.logout()
    elif command == "refresh" and page is not None and callable(getattr(page, "load", None)):
        page.load()
    elif command == "login" and isinstance(page, LoginPage):
        phone = input("Phone: ").strip()
        if not page.submit(phone, getpass.getpass("Password: ")):
            print(f"!! {page.error}")
    elif command == "change" and isinstance(page, ChangePasswordPage):
        ok = page.submit(
            getpass.getpass("Current password: "),
            getpass.getpass("New password: "),
            getpass.getpass("Repeat new password: "),
        )
        if not ok:
            print(f"!! {page.error}")
    elif isinstance(page, ConfigRulesPage) and command in {"set", "save"}:
        if command == "save":
            page.save()
        elif len(args) == 2:
            value: Any = args[1].lower() in {"1", "true", "yes", "on"} if args[0] == "applyRules" else args[1]
            page.update(**{args[0]: value})
    elif isinstance(page, ResourceListPage) and handle_list_command(page, command, args):
        pass
    else:
        print("Unknown command; type 'help'")
    return app.resolve()


def run(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Coupon and agent commission admin console")
    parser.add_argument("--env-file", default=None, help="optional .env file with COUPON_CONSOLE_* settings")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    try:
        config = load_config(args.env_file)
    except ConfigError as exc:
        print(f"Configuration error: {exc}")
        return 2

    app = ConsoleApp(config, confirm=confirm_prompt)
    view = app.start()
    print("Coupon console ready. Type 'help' for commands.")
    while True:
        render_view(app, view)
        try:
            line = input("> ").strip()
        except EOFError:
            print()
            return 0
        if line.lower() in {"quit", "exit"}:
            return 0
        try:
            view = handle_command(app, view, line)
        except (ValueError, IndexError, KeyError) as exc:
            print(f"!! {exc}")
            view = app.resolve()


if __name__ == "__main__":
    raise SystemExit(run())
