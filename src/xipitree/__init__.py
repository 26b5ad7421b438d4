"""Public package exports for the Xi-pi candidate tree creator."""

from .errors import (
    ConfigurationConflictError,
    ConfigurationError,
    SchemaError,
    UnresolvedReferenceError,
    XiPiTreeError,
)
from .extract import CENTRALITY_NOT_APPLICABLE, CandidateContext, candidate_row, event_row, normalized_ratio
from .io import load_batches_json, load_run_configuration_json, write_tables
from .models import (
    CandidateRecord,
    CentralityEstimator,
    CharmBaryonSpecies,
    EventRecord,
    InputBatch,
    McTruthAnnotation,
    RunConfiguration,
    TrackRecord,
)
from .producer import BatchSummary, TreeCreator
from .schema import EVENT_COLUMNS, FULL_COLUMNS, LITE_COLUMNS, Column
from .selection import passes_lite_quality_gate
from .species import make_omegac0, make_xic0, species_from_name
from .tables import ColumnTable
from .variants import PROCESS_VARIANTS, PipelinePlan, ProcessVariant, TableKind, resolve_plan

__all__ = [
    "TreeCreator",
    "BatchSummary",
    "RunConfiguration",
    "InputBatch",
    "EventRecord",
    "TrackRecord",
    "CandidateRecord",
    "McTruthAnnotation",
    "CharmBaryonSpecies",
    "CentralityEstimator",
    "ProcessVariant",
    "PipelinePlan",
    "TableKind",
    "PROCESS_VARIANTS",
    "resolve_plan",
    "Column",
    "EVENT_COLUMNS",
    "FULL_COLUMNS",
    "LITE_COLUMNS",
    "ColumnTable",
    "CandidateContext",
    "CENTRALITY_NOT_APPLICABLE",
    "candidate_row",
    "event_row",
    "normalized_ratio",
    "passes_lite_quality_gate",
    "make_xic0",
    "make_omegac0",
    "species_from_name",
    "XiPiTreeError",
    "ConfigurationError",
    "ConfigurationConflictError",
    "UnresolvedReferenceError",
    "SchemaError",
    "load_batches_json",
    "load_run_configuration_json",
    "write_tables",
]
