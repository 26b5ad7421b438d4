"""Field extraction: project one event or candidate onto a flat output row.

Row building is a pure function of the input records and the resolved
identifier lookups. References are resolved from explicit per-batch
`id -> record` maps; a missing entry is fatal for the run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

import numpy as np

from .errors import UnresolvedReferenceError
from .models import CandidateRecord, CentralityEstimator, EventRecord, McTruthAnnotation, TrackRecord
from .schema import EVENT_COLUMNS, Column

CENTRALITY_NOT_APPLICABLE = -999.0


def normalized_ratio(value: float, uncertainty: float) -> float:
    """Return `value / uncertainty` without guarding a zero denominator.

    Both operands are rounded to float32, as stored in their own columns, and
    the float32 quotient is widened to float64. A zero uncertainty yields
    +-inf (or nan for 0/0).
    """
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return float(np.float64(np.float32(value) / np.float32(uncertainty)))


def resolve_centrality(event: EventRecord, estimator: CentralityEstimator | None) -> float:
    """Return the event centrality for `estimator`, or the not-applicable sentinel."""
    if estimator is None:
        return CENTRALITY_NOT_APPLICABLE
    try:
        return float(event.centralities[estimator.value])
    except KeyError as exc:
        raise UnresolvedReferenceError(
            f"Event '{event.event_id}' has no {estimator.value} centrality joined."
        ) from exc


@dataclass(frozen=True)
class EventContext:
    """Inputs needed to build one event row."""

    event: EventRecord
    z_pv_cut: float


@dataclass(frozen=True)
class CandidateContext:
    """A candidate with every record its output columns refer to."""

    candidate: CandidateRecord
    event: EventRecord
    tracks: Mapping[str, TrackRecord]
    mc: McTruthAnnotation | None = None
    centrality_estimator: CentralityEstimator | None = None

    def track(self, ref: str) -> TrackRecord:
        """Resolve the daughter track referenced by candidate field `ref`."""
        track_id = getattr(self.candidate, ref)
        try:
            return self.tracks[track_id]
        except KeyError as exc:
            raise UnresolvedReferenceError(
                f"Candidate '{self.candidate.candidate_id}' references missing track "
                f"'{track_id}' ({ref})."
            ) from exc

    def ratio(self, num: str, den: str) -> float:
        return normalized_ratio(getattr(self.candidate, num), getattr(self.candidate, den))

    def truth(self, attr: str, placeholder: Any) -> Any:
        if self.mc is None:
            return placeholder
        return getattr(self.mc, attr)

    def centrality(self) -> float:
        return resolve_centrality(self.event, self.centrality_estimator)


def resolve_context(
    candidate: CandidateRecord,
    events: Mapping[str, EventRecord],
    tracks: Mapping[str, TrackRecord],
    mc_annotations: Mapping[str, McTruthAnnotation] | None = None,
    centrality_estimator: CentralityEstimator | None = None,
) -> CandidateContext:
    """Resolve a candidate's event (and truth, when requested) into a context.

    Passing `mc_annotations=None` means the active variant reads no truth;
    otherwise every candidate must have an annotation.
    """
    try:
        event = events[candidate.event_id]
    except KeyError as exc:
        raise UnresolvedReferenceError(
            f"Candidate '{candidate.candidate_id}' references missing event '{candidate.event_id}'."
        ) from exc
    mc = None
    if mc_annotations is not None:
        try:
            mc = mc_annotations[candidate.candidate_id]
        except KeyError as exc:
            raise UnresolvedReferenceError(
                f"Candidate '{candidate.candidate_id}' has no MC truth annotation."
            ) from exc
    return CandidateContext(
        candidate=candidate,
        event=event,
        tracks=tracks,
        mc=mc,
        centrality_estimator=centrality_estimator,
    )


def project(columns: Sequence[Column], context: Any) -> dict[str, Any]:
    """Evaluate every column getter on `context`, in column order."""
    return {col.name: col.getter(context) for col in columns}


def event_row(event: EventRecord, z_pv_cut: float) -> dict[str, Any]:
    """Build the event-table row: baseline selection and |z_PV| < cut."""
    return project(EVENT_COLUMNS, EventContext(event=event, z_pv_cut=z_pv_cut))


def candidate_row(columns: Sequence[Column], context: CandidateContext) -> dict[str, Any]:
    """Build one candidate-table row for the given schema."""
    return project(columns, context)
