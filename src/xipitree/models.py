"""Core record models consumed and produced by the tree-creation pipeline.

This module defines:
- immutable upstream records (`EventRecord`, `TrackRecord`, `CandidateRecord`)
- optional simulation truth (`McTruthAnnotation`)
- the per-batch input container (`InputBatch`) with identifier lookups
- named charm-baryon species (`CharmBaryonSpecies`) and centrality sources
- the process-wide run configuration (`RunConfiguration`).

All physics quantities are produced by upstream reconstruction and selection;
nothing here recomputes them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class CentralityEstimator(str, Enum):
    """Centrality sources an event collection can be joined with."""

    FT0C = "FT0C"
    FT0M = "FT0M"
    NTRACKS_PV = "NTracksPV"


@dataclass(frozen=True)
class CharmBaryonSpecies:
    """Charm-baryon species targeted by a simulation variant."""

    name: str
    mass: float
    pdg_id: int


@dataclass(frozen=True)
class EventRecord:
    """One reconstructed collision with its vertex quality and centralities.

    `centralities` holds the values of whichever centrality estimators were
    joined upstream, keyed by `CentralityEstimator` value (e.g. `"FT0C"`).
    """

    event_id: str
    pos_z: float
    sel8: bool
    num_contrib: int
    chi2: float
    pos_x: float = 0.0
    pos_y: float = 0.0
    centralities: Mapping[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class TrackRecord:
    """Track-quality attributes of one daughter track."""

    track_id: str
    its_n_cls: int
    tpc_n_cls_crossed_rows: int
    is_global_track_wo_dca: bool = False


@dataclass(frozen=True)
class CandidateRecord:
    """One charm baryon -> Xi pi candidate joined with its selection status.

    Naming follows the decay chain Omegac0/Xic0 -> Xi pi, Xi -> Lambda pi,
    Lambda -> p pi. The "bachelor from charm baryon" is the pion emitted at the
    charm-baryon vertex and the "bachelor from cascade" is the pion emitted at
    the Xi vertex.
    """

    candidate_id: str
    event_id: str
    bachelor_from_charm_baryon_id: str
    bachelor_id: str
    pos_track_id: str
    neg_track_id: str
    # vertices
    x_pv: float
    y_pv: float
    z_pv: float
    x_decay_vtx_charm_baryon: float
    y_decay_vtx_charm_baryon: float
    z_decay_vtx_charm_baryon: float
    x_decay_vtx_cascade: float
    y_decay_vtx_cascade: float
    z_decay_vtx_cascade: float
    x_decay_vtx_v0: float
    y_decay_vtx_v0: float
    z_decay_vtx_v0: float
    sign_decay: int  # sign of pi <- xi
    cov_vtx_charm_baryon_xx: float
    cov_vtx_charm_baryon_yy: float
    cov_vtx_charm_baryon_zz: float
    # momenta
    px_charm_baryon: float
    py_charm_baryon: float
    pz_charm_baryon: float
    px_casc: float
    py_casc: float
    pz_casc: float
    px_bach_from_charm_baryon: float
    py_bach_from_charm_baryon: float
    pz_bach_from_charm_baryon: float
    px_lambda: float
    py_lambda: float
    pz_lambda: float
    px_bach_from_casc: float
    py_bach_from_casc: float
    pz_bach_from_casc: float
    px_pos_v0_dau: float
    py_pos_v0_dau: float
    pz_pos_v0_dau: float
    px_neg_v0_dau: float
    py_neg_v0_dau: float
    pz_neg_v0_dau: float
    # impact parameters
    impact_par_casc_xy: float
    impact_par_bach_from_charm_baryon_xy: float
    impact_par_casc_z: float
    impact_par_bach_from_charm_baryon_z: float
    err_impact_par_casc_xy: float
    err_impact_par_bach_from_charm_baryon_xy: float
    # masses, pointing angles, proper decay lengths
    inv_mass_lambda: float
    inv_mass_cascade: float
    inv_mass_charm_baryon: float
    cos_pa_v0: float
    cos_pa_charm_baryon: float
    cos_pa_casc: float
    cos_pa_xy_v0: float
    cos_pa_xy_charm_baryon: float
    cos_pa_xy_casc: float
    c_tau_omegac: float
    c_tau_cascade: float
    c_tau_v0: float
    c_tau_xic: float
    # pseudorapidities
    eta_v0_pos_dau: float
    eta_v0_neg_dau: float
    eta_bach_from_casc: float
    eta_bach_from_charm_baryon: float
    eta_charm_baryon: float
    eta_cascade: float
    eta_v0: float
    # distances of closest approach
    dca_xy_to_pv_v0_dau0: float
    dca_xy_to_pv_v0_dau1: float
    dca_xy_to_pv_casc_dau: float
    dca_z_to_pv_v0_dau0: float
    dca_z_to_pv_v0_dau1: float
    dca_z_to_pv_casc_dau: float
    dca_casc_dau: float
    dca_v0_dau: float
    dca_charm_baryon_dau: float
    # decay lengths
    dec_len_charm_baryon: float
    dec_len_cascade: float
    dec_len_v0: float
    error_decay_length_charm_baryon: float
    error_decay_length_xy_charm_baryon: float
    # selection status, joined from the candidate selector
    status_pid_lambda: bool = False
    status_pid_cascade: bool = False
    status_pid_charm_baryon: bool = False
    status_inv_mass_lambda: bool = False
    status_inv_mass_cascade: bool = False
    status_inv_mass_charm_baryon: bool = False
    result_selections: bool = False
    pid_tpc_info_stored: int = 0
    pid_tof_info_stored: int = 0
    tpc_n_sigma_pi_from_charm_baryon: float = -999.0
    tpc_n_sigma_pi_from_casc: float = -999.0
    tpc_n_sigma_pi_from_lambda: float = -999.0
    tpc_n_sigma_pr_from_lambda: float = -999.0
    tof_n_sigma_pi_from_charm_baryon: float = -999.0
    tof_n_sigma_pi_from_casc: float = -999.0
    tof_n_sigma_pi_from_lambda: float = -999.0
    tof_n_sigma_pr_from_lambda: float = -999.0


@dataclass(frozen=True)
class McTruthAnnotation:
    """Reconstruction-level truth matching for one candidate (simulation only)."""

    candidate_id: str
    flag_mc_match_rec: int
    debug_mc_rec: int
    origin_mc_rec: int
    collision_matched: bool


@dataclass(frozen=True)
class InputBatch:
    """One batch of linked upstream collections.

    Candidates reference events and tracks by identifier; the lookup helpers
    build the identifier maps used to resolve those references.
    """

    events: tuple[EventRecord, ...] = ()
    tracks: tuple[TrackRecord, ...] = ()
    candidates: tuple[CandidateRecord, ...] = ()
    mc_annotations: tuple[McTruthAnnotation, ...] = ()

    def event_lookup(self) -> dict[str, EventRecord]:
        """Map event id -> event record."""
        return {ev.event_id: ev for ev in self.events}

    def track_lookup(self) -> dict[str, TrackRecord]:
        """Map track id -> track record."""
        return {trk.track_id: trk for trk in self.tracks}

    def mc_lookup(self) -> dict[str, McTruthAnnotation]:
        """Map candidate id -> truth annotation."""
        return {mc.candidate_id: mc for mc in self.mc_annotations}


DEFAULT_Z_PV_CUT = 10.0
DEFAULT_PROCESS_SWITCHES: Mapping[str, bool] = MappingProxyType({"processDataFull": True})


@dataclass(frozen=True)
class RunConfiguration:
    """Process-wide settings fixed before the first batch is read.

    `process_switches` maps process names (e.g. `processDataLite`) to their
    enabled state; names left out are disabled.
    """

    z_pv_cut: float = DEFAULT_Z_PV_CUT
    process_switches: Mapping[str, bool] = field(default_factory=lambda: dict(DEFAULT_PROCESS_SWITCHES))

    def enabled_switches(self) -> tuple[str, ...]:
        """Return the names of enabled process switches, in declaration order."""
        return tuple(name for name, enabled in self.process_switches.items() if enabled)
