"""Shared page lifecycle for the resource pages.

Each page instance owns its filters, form, catalog, loaded data, and
loading flags; nothing here is shared between pages or mounts. The
lifecycle is:

    mount -> metadata fetch -> sequencer -> (first load | blocked)
    fetch -> sequencer -> load
    submit -> mutation coordinator -> reset form -> fetch

Call context:
    ``matrack.web_ui.main`` builds one viewmodel per page render and binds
    widgets to the attributes and coroutines exposed here.
"""

from __future__ import annotations

import logging
from dataclasses import fields, replace
from typing import Any, Callable, List, Optional, Tuple

from matrack.domain.entities import LoadingFlags, MetadataCatalog
from matrack.domain.errors import ValidationError
from matrack.domain.ports import QueryParams, UseCaseError
from matrack.domain.sequencer import (
    FetchRequested,
    MetadataFailed,
    MetadataLoaded,
    SequencerEvent,
    SequencerState,
    Transition,
    reduce,
)
from matrack.domain.validation import ALLOW, GateDecision
from matrack.usecases.load_resources import LoadMetadata, LoadResult, ResourceLoader
from matrack.usecases.submit_mutation import MutationCoordinator

LOGGER = logging.getLogger(__name__)

Notify = Callable[[str, str], None]
Option = Tuple[str, str]


def noop_notify(message: str, kind: str = "info") -> None:
    """Default notification sink used when no UI is attached."""


def replace_field(state: Any, name: str, value: Any) -> Any:
    """Return a copy of a filter/form dataclass with one field updated."""
    known = {item.name for item in fields(state)}
    if name not in known:
        raise ValueError(f"Unknown field '{name}' for {type(state).__name__}")
    return replace(state, **{name: "" if value is None else str(value)})


class ResourcePageVM:
    """Page state container for one resource type."""

    def __init__(
        self,
        *,
        loader: ResourceLoader,
        load_metadata: Optional[LoadMetadata] = None,
        notify: Optional[Notify] = None,
    ) -> None:
        self.loader = loader
        self.load_metadata = load_metadata
        self.notify: Notify = notify or noop_notify
        self.flags = LoadingFlags()
        self.catalog = MetadataCatalog()
        self.sequencer = SequencerState()
        self.data: Any = self.empty_data()
        self.last_error: Optional[UseCaseError] = None
        self._mounted = False

    # ------------------------------------------------------------------
    # Page-specific hooks
    # ------------------------------------------------------------------
    def empty_data(self) -> Any:
        return []

    def read_gate(self) -> GateDecision:
        return ALLOW

    def build_query(self) -> QueryParams:
        return {}

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------
    @property
    def can_fetch(self) -> bool:
        """Whether the fetch control should be enabled right now."""
        return (
            self.sequencer.metadata_ready
            and not self.flags.resource_loading
            and self.read_gate().allowed
        )

    @property
    def fetch_reason(self) -> str:
        return self.read_gate().reason

    def base_options(self) -> List[Option]:
        return [(str(base.id), base.name or "Unknown Base") for base in self.catalog.bases]

    def asset_options(self) -> List[Option]:
        return [(str(asset.id), asset.name or "Unknown Asset") for asset in self.catalog.assets]

    def equipment_type_options(self) -> List[Option]:
        return [(name, name) for name in self.catalog.equipment_types]

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    async def mount(self) -> None:
        """Load metadata, then run the first load if the filters allow it."""
        if self._mounted:
            return
        self._mounted = True
        await self.refresh_metadata()

    async def refresh_metadata(self) -> None:
        """(Re)load the catalog. Only the first resolution can auto-load."""
        event = await self._fetch_metadata()
        if event is None:
            return
        transition = self._dispatch(event)
        if transition.fetch:
            await self._run_load()

    async def fetch(self) -> bool:
        """User-initiated load with the current filters."""
        gate = self.read_gate()
        transition = self._dispatch(FetchRequested(), gate)
        if not transition.fetch:
            if self.sequencer.metadata_ready and not gate.allowed:
                self.notify(gate.reason, "warning")
            return False
        await self._run_load()
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _dispatch(
        self, event: SequencerEvent, gate: Optional[GateDecision] = None
    ) -> Transition:
        decision = gate if gate is not None else self.read_gate()
        transition = reduce(self.sequencer, event, decision)
        LOGGER.debug(
            "%s: %s -> %s (fetch=%s)",
            type(self).__name__,
            type(event).__name__,
            transition.state.phase.value,
            transition.fetch,
        )
        self.sequencer = transition.state
        return transition

    async def _guarded(
        self, flag: str, loader: ResourceLoader, params: Optional[QueryParams] = None
    ) -> Optional[LoadResult]:
        """Run a loader with its in-flight flag raised.

        The flag is lowered on every exit path except a stale result, where a
        newer request of the same loader is still running and owns the flag.
        """
        setattr(self.flags, flag, True)
        result: Optional[LoadResult] = None
        try:
            result = await loader(params)
        finally:
            if result is None or not result.stale:
                setattr(self.flags, flag, False)
        return result

    async def _fetch_metadata(self) -> Optional[SequencerEvent]:
        if self.load_metadata is None:
            return MetadataLoaded()
        result = await self._guarded("metadata_loading", self.load_metadata)
        if result.stale:
            return None
        if result.error is not None:
            LOGGER.warning("Continuing with empty catalog: %s", result.error.message)
            return MetadataFailed(result.error.message)
        self.catalog = result.data
        return MetadataLoaded()

    async def _run_load(self) -> None:
        try:
            query = self.build_query()
        except ValidationError as exc:
            self.notify(exc.reason, "warning")
            return
        result = await self._guarded("resource_loading", self.loader, query)
        if result.stale:
            return
        if result.error is not None:
            self.last_error = result.error
            self.notify(self._error_text(result.error), "negative")
            return
        self.last_error = None
        self.data = result.data

    def _error_text(self, error: UseCaseError) -> str:
        prefix = self.loader.error_message
        if prefix and error.code != "ACCESS_DENIED":
            return f"{prefix}: {error.message}"
        return error.message


class MutationPageVM(ResourcePageVM):
    """Resource page that also owns a create form."""

    success_message = "Created successfully!"

    def __init__(
        self,
        *,
        loader: ResourceLoader,
        submit: MutationCoordinator,
        load_metadata: Optional[LoadMetadata] = None,
        notify: Optional[Notify] = None,
    ) -> None:
        super().__init__(loader=loader, load_metadata=load_metadata, notify=notify)
        self.submit_uc = submit
        self.form = self.default_form()
        self.form_error = ""

    def default_form(self) -> Any:
        raise NotImplementedError

    def write_gate(self) -> GateDecision:
        return self.submit_uc.gate(self.form, self.catalog)

    @property
    def can_submit(self) -> bool:
        return not self.flags.submitting and self.write_gate().allowed

    @property
    def form_reason(self) -> str:
        """Inline reason shown next to the form; empty when submittable."""
        return self.write_gate().reason

    def set_form_field(self, name: str, value: Any) -> None:
        self.form = replace_field(self.form, name, value)
        self.form_error = ""

    async def submit(self) -> bool:
        """Post the form; on success reset it and refresh the list."""
        if self.flags.submitting:
            return False
        self.flags.submitting = True
        try:
            result = await self.submit_uc(self.form, self.catalog)
        finally:
            self.flags.submitting = False

        if result.reason:
            self.form_error = result.reason
            self.notify(result.reason, "warning")
            return False
        if result.error is not None:
            self.notify(f"{self.submit_uc.error_message}: {result.error.message}", "negative")
            return False

        self.form = self.default_form()
        self.form_error = ""
        self.notify(self.success_message, "positive")
        await self.fetch()
        return True


__all__ = ["MutationPageVM", "Notify", "ResourcePageVM", "noop_notify", "replace_field"]
