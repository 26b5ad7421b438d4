"""Process-variant selection: which table is filled, from which joined inputs.

Every process switch names one variant: candidate table kind (full/lite),
optional simulation species whose truth is forwarded, and optional centrality
estimator joined to the events. A run resolves its switches exactly once into
a `PipelinePlan` before any batch is read.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import ConfigurationConflictError, ConfigurationError
from .logger import logger
from .models import CentralityEstimator, CharmBaryonSpecies, RunConfiguration
from .schema import FULL_COLUMNS, LITE_COLUMNS, Column
from .species import make_omegac0, make_xic0


class TableKind(str, Enum):
    """Candidate output table filled by a variant."""

    FULL = "full"
    LITE = "lite"


@dataclass(frozen=True)
class ProcessVariant:
    """One selectable process switch."""

    switch: str
    table: TableKind
    species: CharmBaryonSpecies | None = None
    centrality: CentralityEstimator | None = None
    description: str = ""

    @property
    def is_mc(self) -> bool:
        """True if the variant forwards simulation truth."""
        return self.species is not None


_XIC0 = make_xic0()
_OMEGAC0 = make_omegac0()

PROCESS_VARIANTS: tuple[ProcessVariant, ...] = (
    ProcessVariant("processDataFull", TableKind.FULL,
                   description="Process data with full information w/o centrality"),
    ProcessVariant("processMcFullXic0", TableKind.FULL, _XIC0,
                   description="Process MC with full information for xic0 w/o centrality"),
    ProcessVariant("processMcFullOmegac0", TableKind.FULL, _OMEGAC0,
                   description="Process MC with full information for omegac0"),
    ProcessVariant("processDataLite", TableKind.LITE,
                   description="Process data and produce lite table version"),
    ProcessVariant("processDataLiteWithFT0M", TableKind.LITE, None, CentralityEstimator.FT0M,
                   description="Process data and produce lite table version with FT0M"),
    ProcessVariant("processDataLiteWithFT0C", TableKind.LITE, None, CentralityEstimator.FT0C,
                   description="Process data and produce lite table version with FT0C"),
    ProcessVariant("processDataLiteWithNTracksPV", TableKind.LITE, None, CentralityEstimator.NTRACKS_PV,
                   description="Process data and produce lite table version with NTracksPV"),
    ProcessVariant("processMcLiteXic0", TableKind.LITE, _XIC0,
                   description="Process MC and produce lite table version for xic0"),
    ProcessVariant("processMcLiteXic0WithFT0C", TableKind.LITE, _XIC0, CentralityEstimator.FT0C,
                   description="Process MC and produce lite table version for Xic0 with FT0C"),
    ProcessVariant("processMcLiteXic0WithFT0M", TableKind.LITE, _XIC0, CentralityEstimator.FT0M,
                   description="Process MC and produce lite table version for Xic0 with FT0M"),
    ProcessVariant("processMcLiteXic0WithNTracksPV", TableKind.LITE, _XIC0, CentralityEstimator.NTRACKS_PV,
                   description="Process MC and produce lite table version for Xic0 with NTracksPV"),
    ProcessVariant("processMcLiteOmegac0", TableKind.LITE, _OMEGAC0,
                   description="Process MC and produce lite table version for omegac0"),
)  # fmt: skip

_SWITCH_TO_VARIANT: dict[str, ProcessVariant] = {v.switch: v for v in PROCESS_VARIANTS}

_TABLE_COLUMNS: dict[TableKind, tuple[Column, ...]] = {
    TableKind.FULL: FULL_COLUMNS,
    TableKind.LITE: LITE_COLUMNS,
}


@dataclass(frozen=True)
class PipelinePlan:
    """Resolved processing plan for one run."""

    variant: ProcessVariant
    z_pv_cut: float

    @property
    def table(self) -> TableKind:
        return self.variant.table

    @property
    def species(self) -> CharmBaryonSpecies | None:
        return self.variant.species

    @property
    def centrality(self) -> CentralityEstimator | None:
        return self.variant.centrality

    @property
    def reads_mc(self) -> bool:
        return self.variant.is_mc

    @property
    def applies_quality_gate(self) -> bool:
        """Only lite rows are gated on the selection status."""
        return self.variant.table is TableKind.LITE

    @property
    def columns(self) -> tuple[Column, ...]:
        return _TABLE_COLUMNS[self.variant.table]


def variant_from_switch(switch: str) -> ProcessVariant:
    """Resolve a process-switch name (e.g. `processDataLite`) into its variant."""
    try:
        return _SWITCH_TO_VARIANT[switch]
    except KeyError as exc:
        supported = ", ".join(_SWITCH_TO_VARIANT)
        raise ConfigurationError(
            f"Unknown process switch '{switch}'. Supported switches: {supported}"
        ) from exc


def check_species_conflict(variants: tuple[ProcessVariant, ...]) -> None:
    """Fail if simulation variants of both species target the same table kind."""
    for table in TableKind:
        species = {v.species.name for v in variants if v.table is table and v.species is not None}
        if len(species) > 1:
            msg = "Both Xic0 and Omegac0 MC processes enabled, please choose ONLY one!"
            logger.critical(msg)
            raise ConfigurationConflictError(msg)


def resolve_plan(config: RunConfiguration) -> PipelinePlan:
    """Validate the enabled switches and return the single plan they select."""
    for switch in config.process_switches:
        variant_from_switch(switch)
    enabled = tuple(variant_from_switch(name) for name in config.enabled_switches())
    check_species_conflict(enabled)
    if len(enabled) != 1:
        names = ", ".join(v.switch for v in enabled) or "none"
        raise ConfigurationError(
            f"Exactly one process switch must be enabled per run (enabled: {names})."
        )
    return PipelinePlan(variant=enabled[0], z_pv_cut=config.z_pv_cut)
