"""Metadata-before-resource sequencing as a pure reducer.

Pages feed events into ``reduce`` and act on the returned ``Transition``:
when ``fetch`` is true they run their resource loader. The reducer never
performs I/O, so the ordering rules are testable without a network.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from .validation import GateDecision


class SequencerPhase(Enum):
    METADATA_PENDING = "metadata_pending"
    METADATA_READY = "metadata_ready"
    RESOURCE_QUERYABLE = "resource_queryable"
    RESOURCE_BLOCKED = "resource_blocked"


@dataclass(frozen=True)
class MetadataLoaded:
    """Metadata request resolved with a usable catalog."""


@dataclass(frozen=True)
class MetadataFailed:
    """Metadata request failed; the page continues with an empty catalog."""

    error: str = ""


@dataclass(frozen=True)
class FetchRequested:
    """The user asked for the resource list to be (re)loaded."""


SequencerEvent = Union[MetadataLoaded, MetadataFailed, FetchRequested]


@dataclass(frozen=True)
class SequencerState:
    phase: SequencerPhase = SequencerPhase.METADATA_PENDING
    auto_fetch_consumed: bool = False
    """Set once the automatic post-metadata evaluation has happened."""

    @property
    def metadata_ready(self) -> bool:
        return self.phase is not SequencerPhase.METADATA_PENDING


@dataclass(frozen=True)
class Transition:
    state: SequencerState
    fetch: bool = False
    """True when the caller must run its resource loader now."""


def _gate_outcome(state: SequencerState, gate: GateDecision) -> Transition:
    if gate.allowed:
        return Transition(replace(state, phase=SequencerPhase.RESOURCE_QUERYABLE), fetch=True)
    return Transition(replace(state, phase=SequencerPhase.RESOURCE_BLOCKED), fetch=False)


def reduce(state: SequencerState, event: SequencerEvent, gate: GateDecision) -> Transition:
    """Advance the sequencer by one event.

    ``gate`` is the read-gate decision for the page's current filters,
    evaluated by the caller right before dispatching the event.
    """
    if isinstance(event, (MetadataLoaded, MetadataFailed)):
        if state.auto_fetch_consumed:
            # Metadata re-fetch: the automatic first load already happened.
            return Transition(state)
        ready = SequencerState(phase=SequencerPhase.METADATA_READY, auto_fetch_consumed=True)
        return _gate_outcome(ready, gate)

    if isinstance(event, FetchRequested):
        if not state.metadata_ready:
            return Transition(state)
        return _gate_outcome(state, gate)

    raise TypeError(f"Unsupported sequencer event: {event!r}")


__all__ = [
    "FetchRequested",
    "MetadataFailed",
    "MetadataLoaded",
    "SequencerEvent",
    "SequencerPhase",
    "SequencerState",
    "Transition",
    "reduce",
]
