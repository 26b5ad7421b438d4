"""Batch driver writing event and candidate rows for the active process variant."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .extract import candidate_row, event_row, resolve_context
from .logger import logger
from .models import InputBatch, RunConfiguration
from .schema import EVENT_COLUMNS
from .selection import passes_lite_quality_gate
from .tables import ColumnTable
from .variants import PipelinePlan, TableKind, resolve_plan


@dataclass(frozen=True)
class BatchSummary:
    """Row counts for one processed batch."""

    n_events: int
    n_candidates: int
    n_written: int

    @property
    def n_gated(self) -> int:
        """Candidates dropped by the lite quality gate."""
        return self.n_candidates - self.n_written


class TreeCreator:
    """Fill flat event and candidate tables from linked candidate batches.

    The configuration is validated on construction, before any batch is read;
    a conflicting configuration raises and no table is created. Only the
    sinks of the selected variant exist: `event_table` always, plus either
    `full_table` or `lite_table`.
    """

    def __init__(self, config: RunConfiguration | None = None):
        self.config = config or RunConfiguration()
        self.plan: PipelinePlan = resolve_plan(self.config)
        self.event_table = ColumnTable("events", EVENT_COLUMNS)
        self.full_table = ColumnTable("full", self.plan.columns) if self.plan.table is TableKind.FULL else None
        self.lite_table = ColumnTable("lite", self.plan.columns) if self.plan.table is TableKind.LITE else None
        self._closed = False
        species = self.plan.species.name if self.plan.species is not None else "none (data)"
        centrality = self.plan.centrality.value if self.plan.centrality is not None else "none"
        logger.info(
            "Selected %s: %s table, MC species %s, centrality %s, |zPV| cut %g",
            self.plan.variant.switch,
            self.plan.table.value,
            species,
            centrality,
            self.plan.z_pv_cut,
        )

    @property
    def candidate_table(self) -> ColumnTable:
        """Candidate sink of the active variant."""
        table = self.full_table if self.full_table is not None else self.lite_table
        assert table is not None
        return table

    @property
    def closed(self) -> bool:
        return self._closed

    def process(self, batch: InputBatch) -> BatchSummary:
        """Write one event row per event and one candidate row per accepted candidate.

        Any unresolved reference raises `UnresolvedReferenceError`; the run is
        not expected to continue after that.
        """
        if self._closed:
            raise RuntimeError("TreeCreator is closed; no further batches can be processed.")

        self.event_table.reserve(len(batch.events))
        for event in batch.events:
            self.event_table.append(event_row(event, self.plan.z_pv_cut))

        events = batch.event_lookup()
        tracks = batch.track_lookup()
        mc_annotations = batch.mc_lookup() if self.plan.reads_mc else None
        table = self.candidate_table
        table.reserve(len(batch.candidates))
        n_written = 0
        for candidate in batch.candidates:
            if self.plan.applies_quality_gate and not passes_lite_quality_gate(candidate):
                continue
            context = resolve_context(
                candidate,
                events=events,
                tracks=tracks,
                mc_annotations=mc_annotations,
                centrality_estimator=self.plan.centrality,
            )
            table.append(candidate_row(self.plan.columns, context))
            n_written += 1

        summary = BatchSummary(
            n_events=len(batch.events),
            n_candidates=len(batch.candidates),
            n_written=n_written,
        )
        logger.info(
            "Batch: %d events, %d/%d candidates written to %s table",
            summary.n_events,
            summary.n_written,
            summary.n_candidates,
            table.name,
        )
        if summary.n_gated:
            logger.debug("Quality gate dropped %d candidates", summary.n_gated)
        return summary

    def process_batches(self, batches: Iterable[InputBatch]) -> list[BatchSummary]:
        """Run `process` on each batch in order."""
        return [self.process(batch) for batch in batches]

    def tables(self) -> dict[str, ColumnTable]:
        """Return the active sinks keyed by table name."""
        out = {self.event_table.name: self.event_table}
        out[self.candidate_table.name] = self.candidate_table
        return out

    def close(self) -> dict[str, ColumnTable]:
        """Stop accepting batches and return the filled tables."""
        self._closed = True
        logger.info(
            "Done: %d event rows, %d %s candidate rows",
            len(self.event_table),
            len(self.candidate_table),
            self.candidate_table.name,
        )
        return self.tables()
