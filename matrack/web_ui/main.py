"""NiceGUI entrypoint for the asset-tracking client."""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import asdict
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from nicegui import app, context, ui
from nicegui.client import Client

from matrack.domain.filters import DEFAULT_BASE, UNSCOPED
from matrack.utils.config import ClientSettings
from matrack.utils.logging import configure_root
from matrack.viewmodels.page_base import Option, ResourcePageVM
from matrack.web_ui.runtime import WebRuntime

NAV_LINKS = (
    ("Dashboard", "/"),
    ("Purchases", "/purchases"),
    ("Transfers", "/transfer"),
    ("Logs", "/logs"),
)


def _install_theme() -> None:
    """Install global CSS tokens for the web client."""
    ui.add_head_html(
        """
<style>
:root {
  --mat-bg: #eef1ec;
  --mat-card: rgba(255, 255, 255, 0.9);
  --mat-border: #c4ccbd;
  --mat-accent: #3f5a36;
}
body { background: var(--mat-bg); }
.mat-page { max-width: 1280px; margin: 0 auto; padding: 14px; }
.mat-card { background: var(--mat-card); border: 1px solid var(--mat-border); border-radius: 12px; }
.mat-reason { color: #8a5a00; font-size: 13px; }
</style>
        """
    )


def _notifier(client: Client) -> Callable[[str, str], None]:
    """Bind viewmodel notifications to the page's client.

    Viewmodel coroutines may run in tasks spawned by ``_track`` that carry no
    NiceGUI slot of their own, so the toast is emitted inside ``client``.
    """

    def notify(message: str, kind: str = "info") -> None:
        with client:
            ui.notify(message, color=kind, close_button="OK" if kind == "negative" else False)

    return notify


def _select_options(
    pairs: Iterable[Option],
    current: str,
    *,
    unscoped_label: Optional[str] = None,
    leading: Optional[Option] = None,
) -> Dict[str, str]:
    """Build a ``{value: label}`` map that always contains ``current``."""
    options: Dict[str, str] = {}
    if unscoped_label is not None:
        options[UNSCOPED] = unscoped_label
    if leading is not None:
        options[leading[0]] = leading[1]
    for value, label in pairs:
        options[value] = label
    if current not in options:
        options[current] = current or "-"
    return options


async def _track(action: Callable[[], Awaitable[Any]], *renders: Any) -> None:
    """Run ``action`` and redraw ``renders`` once it is in flight and once done."""
    pending = asyncio.ensure_future(action())
    await asyncio.sleep(0)
    for render in renders:
        render.refresh()
    await pending
    for render in renders:
        render.refresh()


def _render_header(runtime: WebRuntime, title: str) -> None:
    def logout() -> None:
        runtime.logout(app.storage.user)
        ui.navigate.to("/login")

    _install_theme()
    with ui.header().classes("items-center justify-between"):
        ui.label(f"Military Asset Tracking - {title}").classes("text-h6")
        with ui.row().classes("items-center q-gutter-sm"):
            for label, target in NAV_LINKS:
                ui.link(label, target).classes("text-white")
            ui.button("Logout", on_click=logout, color="negative").props("dense flat")


def _require_login(runtime: WebRuntime) -> bool:
    if runtime.is_authenticated(app.storage.user):
        return True
    ui.navigate.to("/login")
    return False


def _render_reason(vm: ResourcePageVM) -> None:
    if vm.sequencer.metadata_ready and vm.fetch_reason:
        ui.label(vm.fetch_reason).classes("mat-reason")
    if vm.flags.metadata_loading:
        ui.label("Loading filter data...").classes("text-caption")
    if vm.flags.resource_loading:
        ui.spinner(size="sm")


def _row_dicts(rows: List[Any]) -> List[Dict[str, Any]]:
    return [asdict(row) for row in rows]


def _build_ui(runtime: WebRuntime) -> None:
    """Register the NiceGUI pages for the runtime."""

    @ui.page("/login")
    async def login_page() -> None:
        vm = runtime.login_vm(app.storage.user, notify=_notifier(context.client))

        async def submit() -> None:
            if await vm.submit():
                ui.navigate.to("/")
            else:
                render_button.refresh()

        def on_field(name: str, value: Any) -> None:
            setattr(vm, name, str(value or ""))
            render_button.refresh()

        _install_theme()
        with ui.column().classes("mat-page items-center"):
            with ui.card().classes("mat-card q-pa-lg").style("min-width: 360px"):
                ui.label("Sign in").classes("text-h5")
                ui.input(
                    "Email",
                    value=vm.email,
                    on_change=lambda e: on_field("email", e.value),
                ).props("outlined dense type=email").classes("w-full")
                ui.input(
                    "Password",
                    value=vm.password,
                    password=True,
                    on_change=lambda e: on_field("password", e.value),
                ).props("outlined dense").classes("w-full")

                @ui.refreshable
                def render_button() -> None:
                    button = ui.button("Login", on_click=submit, color="primary").classes("w-full")
                    if not vm.can_submit:
                        button.disable()

                render_button()

    @ui.page("/")
    async def dashboard_page() -> None:
        if not _require_login(runtime):
            return
        vm = runtime.dashboard_vm(app.storage.user, notify=_notifier(context.client))

        def on_filter(name: str, value: Any) -> None:
            vm.set_filter(name, value)
            render_actions.refresh()

        @ui.refreshable
        def render_filters() -> None:
            with ui.row().classes("q-gutter-sm items-end"):
                ui.select(
                    _select_options(vm.base_options(), vm.filters.base, unscoped_label="All Bases"),
                    value=vm.filters.base,
                    label="Base",
                    on_change=lambda e: on_filter("base", e.value),
                ).props("dense outlined").style("min-width: 180px")
                ui.select(
                    _select_options(
                        vm.equipment_type_options(), vm.filters.equipment_type, unscoped_label="All Types"
                    ),
                    value=vm.filters.equipment_type,
                    label="Equipment type",
                    on_change=lambda e: on_filter("equipment_type", e.value),
                ).props("dense outlined").style("min-width: 180px")
                ui.select(
                    _select_options(vm.date_range_options(), vm.filters.date_range),
                    value=vm.filters.date_range,
                    label="Date range",
                    on_change=lambda e: on_filter("date_range", e.value),
                ).props("dense outlined").style("min-width: 200px")

        @ui.refreshable
        def render_actions() -> None:
            with ui.row().classes("items-center q-gutter-sm"):
                button = ui.button(
                    "Apply Filters",
                    on_click=lambda: _track(vm.fetch, render_actions, render_summary),
                    color="primary",
                )
                if not vm.can_fetch:
                    button.disable()
                _render_reason(vm)

        @ui.refreshable
        def render_summary() -> None:
            if vm.summary is None:
                ui.label("No data loaded.").classes("text-caption")
                return
            with ui.row().classes("q-gutter-sm"):
                for label, value in vm.metric_rows():
                    with ui.card().classes("mat-card q-pa-sm"):
                        ui.label(label).classes("text-caption")
                        ui.label(f"{value:g}").classes("text-h6")

        _render_header(runtime, "Dashboard")
        with ui.column().classes("mat-page w-full q-gutter-md"):
            render_filters()
            render_actions()
            render_summary()

        async def mount() -> None:
            await _track(vm.mount, render_actions, render_summary)
            render_filters.refresh()

        ui.timer(0.1, mount, once=True)

    @ui.page("/purchases")
    async def purchases_page() -> None:
        if not _require_login(runtime):
            return
        vm = runtime.purchases_vm(app.storage.user, notify=_notifier(context.client))

        def on_filter(name: str, value: Any) -> None:
            vm.set_filter(name, value)
            render_actions.refresh()

        def on_form(name: str, value: Any) -> None:
            vm.set_form_field(name, value)
            render_submit.refresh()

        @ui.refreshable
        def render_form() -> None:
            form = vm.form
            with ui.card().classes("mat-card q-pa-md w-full"):
                ui.label("New Purchase").classes("text-subtitle1")
                with ui.row().classes("q-gutter-sm items-end"):
                    ui.select(
                        _select_options(vm.asset_options(), form.asset_id, leading=("", "Select Asset")),
                        value=form.asset_id,
                        label="Asset",
                        on_change=lambda e: on_form("asset_id", e.value),
                    ).props("dense outlined").style("min-width: 200px")
                    ui.select(
                        _select_options(vm.base_options(), form.base_id, leading=(DEFAULT_BASE, "Default Base")),
                        value=form.base_id,
                        label="Base",
                        on_change=lambda e: on_form("base_id", e.value),
                    ).props("dense outlined").style("min-width: 180px")
                    ui.input(
                        "Quantity",
                        value=form.quantity,
                        on_change=lambda e: on_form("quantity", e.value),
                    ).props("outlined dense type=number min=1")
                    ui.input(
                        "Date",
                        value=form.date,
                        on_change=lambda e: on_form("date", e.value),
                    ).props("outlined dense type=date")
                render_submit()

        @ui.refreshable
        def render_submit() -> None:
            with ui.row().classes("items-center q-gutter-sm"):
                button = ui.button("Create Purchase", on_click=submit, color="positive")
                if not vm.can_submit:
                    button.disable()
                reason = vm.form_error or vm.form_reason
                if reason:
                    ui.label(reason).classes("mat-reason")

        async def submit() -> None:
            created = vm.form
            await _track(vm.submit, render_submit, render_actions, render_table)
            if vm.form is not created:
                render_form.refresh()

        @ui.refreshable
        def render_filters() -> None:
            with ui.row().classes("q-gutter-sm items-end"):
                ui.select(
                    _select_options(vm.base_options(), vm.filters.base_id, unscoped_label="All Bases"),
                    value=vm.filters.base_id,
                    label="Base",
                    on_change=lambda e: on_filter("base_id", e.value),
                ).props("dense outlined").style("min-width: 180px")
                ui.select(
                    _select_options(
                        vm.equipment_type_options(), vm.filters.equipment_type, unscoped_label="All Types"
                    ),
                    value=vm.filters.equipment_type,
                    label="Equipment type",
                    on_change=lambda e: on_filter("equipment_type", e.value),
                ).props("dense outlined").style("min-width: 180px")
                ui.input(
                    "Start date",
                    value=vm.filters.start_date,
                    on_change=lambda e: on_filter("start_date", e.value),
                ).props("outlined dense type=date")
                ui.input(
                    "End date",
                    value=vm.filters.end_date,
                    on_change=lambda e: on_filter("end_date", e.value),
                ).props("outlined dense type=date")

        @ui.refreshable
        def render_actions() -> None:
            with ui.row().classes("items-center q-gutter-sm"):
                button = ui.button(
                    "Apply Filters",
                    on_click=lambda: _track(vm.fetch, render_actions, render_table),
                    color="primary",
                )
                if not vm.can_fetch:
                    button.disable()
                _render_reason(vm)

        @ui.refreshable
        def render_table() -> None:
            ui.table(
                columns=[
                    {"name": "id", "label": "ID", "field": "id"},
                    {"name": "asset", "label": "Asset", "field": "asset"},
                    {"name": "equipment_type", "label": "Type", "field": "equipment_type"},
                    {"name": "base", "label": "Base", "field": "base"},
                    {"name": "quantity", "label": "Quantity", "field": "quantity"},
                    {"name": "date", "label": "Date", "field": "date"},
                ],
                rows=_row_dicts(vm.rows()),
                row_key="id",
            ).classes("w-full")

        _render_header(runtime, "Purchases")
        with ui.column().classes("mat-page w-full q-gutter-md"):
            render_form()
            ui.separator()
            render_filters()
            render_actions()
            render_table()

        async def mount() -> None:
            await _track(vm.mount, render_actions, render_table)
            render_form.refresh()
            render_filters.refresh()

        ui.timer(0.1, mount, once=True)

    @ui.page("/transfer")
    async def transfers_page() -> None:
        if not _require_login(runtime):
            return
        vm = runtime.transfers_vm(app.storage.user, notify=_notifier(context.client))

        def on_filter(name: str, value: Any) -> None:
            vm.set_filter(name, value)
            render_actions.refresh()

        def on_form(name: str, value: Any) -> None:
            vm.set_form_field(name, value)
            render_submit.refresh()

        @ui.refreshable
        def render_form() -> None:
            form = vm.form
            with ui.card().classes("mat-card q-pa-md w-full"):
                ui.label("New Transfer").classes("text-subtitle1")
                with ui.row().classes("q-gutter-sm items-end"):
                    ui.select(
                        _select_options(vm.asset_options(), form.asset_id, leading=("", "Select Asset")),
                        value=form.asset_id,
                        label="Asset",
                        on_change=lambda e: on_form("asset_id", e.value),
                    ).props("dense outlined").style("min-width: 200px")
                    ui.select(
                        _select_options(vm.base_options(), form.from_base_id, leading=("", "Select Base")),
                        value=form.from_base_id,
                        label="From base",
                        on_change=lambda e: on_form("from_base_id", e.value),
                    ).props("dense outlined").style("min-width: 180px")
                    ui.select(
                        _select_options(vm.base_options(), form.to_base_id, leading=("", "Select Base")),
                        value=form.to_base_id,
                        label="To base",
                        on_change=lambda e: on_form("to_base_id", e.value),
                    ).props("dense outlined").style("min-width: 180px")
                    ui.input(
                        "Quantity",
                        value=form.quantity,
                        on_change=lambda e: on_form("quantity", e.value),
                    ).props("outlined dense type=number min=1")
                    ui.input(
                        "Date",
                        value=form.date,
                        on_change=lambda e: on_form("date", e.value),
                    ).props("outlined dense type=date")
                render_submit()

        @ui.refreshable
        def render_submit() -> None:
            with ui.row().classes("items-center q-gutter-sm"):
                button = ui.button("Create Transfer", on_click=submit, color="positive")
                if not vm.can_submit:
                    button.disable()
                reason = vm.form_error or vm.form_reason
                if reason:
                    ui.label(reason).classes("mat-reason")

        async def submit() -> None:
            created = vm.form
            await _track(vm.submit, render_submit, render_actions, render_table)
            if vm.form is not created:
                render_form.refresh()

        @ui.refreshable
        def render_filters() -> None:
            with ui.row().classes("q-gutter-sm items-end"):
                for name, label, options in (
                    ("from_base_id", "From base", vm.base_options()),
                    ("to_base_id", "To base", vm.base_options()),
                    ("asset_id", "Asset", vm.asset_options()),
                    ("equipment_type", "Equipment type", vm.equipment_type_options()),
                ):
                    current = getattr(vm.filters, name)
                    ui.select(
                        _select_options(options, current, unscoped_label="All"),
                        value=current,
                        label=label,
                        on_change=lambda e, n=name: on_filter(n, e.value),
                    ).props("dense outlined").style("min-width: 160px")
                ui.input(
                    "Start date",
                    value=vm.filters.start_date,
                    on_change=lambda e: on_filter("start_date", e.value),
                ).props("outlined dense type=date")
                ui.input(
                    "End date",
                    value=vm.filters.end_date,
                    on_change=lambda e: on_filter("end_date", e.value),
                ).props("outlined dense type=date")

        @ui.refreshable
        def render_actions() -> None:
            with ui.row().classes("items-center q-gutter-sm"):
                button = ui.button(
                    "Apply Filters",
                    on_click=lambda: _track(vm.fetch, render_actions, render_table),
                    color="primary",
                )
                if not vm.can_fetch:
                    button.disable()
                _render_reason(vm)

        @ui.refreshable
        def render_table() -> None:
            ui.table(
                columns=[
                    {"name": "id", "label": "ID", "field": "id"},
                    {"name": "asset", "label": "Asset", "field": "asset"},
                    {"name": "equipment_type", "label": "Type", "field": "equipment_type"},
                    {"name": "from_base", "label": "From", "field": "from_base"},
                    {"name": "to_base", "label": "To", "field": "to_base"},
                    {"name": "quantity", "label": "Quantity", "field": "quantity"},
                    {"name": "date", "label": "Date", "field": "date"},
                ],
                rows=_row_dicts(vm.rows()),
                row_key="id",
            ).classes("w-full")

        _render_header(runtime, "Transfers")
        with ui.column().classes("mat-page w-full q-gutter-md"):
            render_form()
            ui.separator()
            render_filters()
            render_actions()
            render_table()

        async def mount() -> None:
            await _track(vm.mount, render_actions, render_table)
            render_form.refresh()
            render_filters.refresh()

        ui.timer(0.1, mount, once=True)

    @ui.page("/logs")
    async def logs_page() -> None:
        if not _require_login(runtime):
            return
        vm = runtime.logs_vm(app.storage.user, notify=_notifier(context.client))

        @ui.refreshable
        def render_table() -> None:
            if vm.access_denied:
                ui.label(vm.last_error.message).classes("text-negative")
                return
            ui.table(
                columns=[
                    {"name": "id", "label": "ID", "field": "id"},
                    {"name": "user", "label": "User", "field": "user"},
                    {"name": "action", "label": "Action", "field": "action"},
                    {"name": "details", "label": "Details", "field": "details"},
                    {"name": "timestamp", "label": "Timestamp", "field": "timestamp"},
                ],
                rows=_row_dicts(vm.rows()),
                row_key="id",
            ).classes("w-full")

        @ui.refreshable
        def render_actions() -> None:
            with ui.row().classes("items-center q-gutter-sm"):
                button = ui.button(
                    "Refresh",
                    on_click=lambda: _track(vm.fetch, render_actions, render_table),
                    color="primary",
                )
                if not vm.can_fetch:
                    button.disable()
                _render_reason(vm)

        _render_header(runtime, "Logs")
        with ui.column().classes("mat-page w-full q-gutter-md"):
            render_actions()
            render_table()

        ui.timer(0.1, lambda: _track(vm.mount, render_actions, render_table), once=True)


def _parse_args(settings: ClientSettings) -> argparse.Namespace:
    """Parse CLI args for web client startup."""
    parser = argparse.ArgumentParser(description="Run the asset-tracking NiceGUI web UI.")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--reload", action="store_true")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args()


def main() -> None:
    """CLI entrypoint for the NiceGUI client."""
    settings = ClientSettings.from_env()
    args = _parse_args(settings)
    configure_root(args.log_level)
    runtime = WebRuntime(settings)
    app.on_shutdown(runtime.shutdown)
    _build_ui(runtime)
    ui.run(
        host=args.host,
        port=args.port,
        title="Military Asset Tracking",
        reload=args.reload,
        show=False,
        storage_secret=settings.storage_secret,
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
