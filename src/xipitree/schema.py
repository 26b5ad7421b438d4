"""Declarative column schemas of the output tables.

Each output column is described by its name, its storage dtype and a getter
that reads the value from an extraction context (see `xipitree.extract`).
Column names and their order are the ones downstream consumers bind to and
must not be changed.

Getters only rely on the context interface:
- `ctx.candidate`, `ctx.event`: the candidate and its resolved event
- `ctx.track(ref)`: resolved daughter track for reference field `ref`
- `ctx.ratio(num, den)`: normalized ratio of two candidate fields
- `ctx.truth(attr, placeholder)`: truth field or its placeholder
- `ctx.centrality()`: centrality of the active estimator or the sentinel.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

from .errors import SchemaError

# Placeholders written when a variant carries no simulation truth.
MC_FLAG_PLACEHOLDER = -7
MC_DEBUG_PLACEHOLDER = -7
MC_ORIGIN_NONE = 0
MC_COLLISION_MATCHED_PLACEHOLDER = False


@dataclass(frozen=True)
class Column:
    """One output column: name, numpy storage dtype, and value getter."""

    name: str
    dtype: str
    getter: Callable[[Any], Any]


def _cand(name: str, attr: str, dtype: str = "float32") -> Column:
    return Column(name, dtype, lambda ctx: getattr(ctx.candidate, attr))


def _xyz(name: str, attr: str, dtype: str = "float32") -> tuple[Column, ...]:
    """Expand `{}`-templated names into x/y/z columns."""
    return tuple(_cand(name.format(c), attr.format(c), dtype) for c in "xyz")


def _event(name: str, attr: str, dtype: str) -> Column:
    return Column(name, dtype, lambda ctx: getattr(ctx.event, attr))


def _track(name: str, ref: str, attr: str, dtype: str) -> Column:
    return Column(name, dtype, lambda ctx: getattr(ctx.track(ref), attr))


def _ratio(name: str, num: str, den: str) -> Column:
    return Column(name, "float64", lambda ctx: ctx.ratio(num, den))


def _truth(name: str, attr: str, placeholder: Any, dtype: str) -> Column:
    return Column(name, dtype, lambda ctx: ctx.truth(attr, placeholder))


EVENT_COLUMNS: tuple[Column, ...] = (
    Column("isEventSel8", "bool", lambda ctx: bool(ctx.event.sel8)),
    Column("isEventSelZ", "bool", lambda ctx: abs(ctx.event.pos_z) < ctx.z_pv_cut),
)

FULL_COLUMNS: tuple[Column, ...] = (
    *_xyz("{}Pv", "{}_pv"),
    Column("centrality", "float32", lambda ctx: ctx.centrality()),
    _event("numContrib", "num_contrib", "uint16"),
    _event("chi2", "chi2", "float32"),
    *_xyz("{}DecayVtxCharmBaryon", "{}_decay_vtx_charm_baryon"),
    *_xyz("{}DecayVtxCascade", "{}_decay_vtx_cascade"),
    *_xyz("{}DecayVtxV0", "{}_decay_vtx_v0"),
    _cand("signDecay", "sign_decay", "int8"),
    _cand("covVtxCharmBaryonXX", "cov_vtx_charm_baryon_xx"),
    _cand("covVtxCharmBaryonYY", "cov_vtx_charm_baryon_yy"),
    _cand("covVtxCharmBaryonZZ", "cov_vtx_charm_baryon_zz"),
    *_xyz("p{}CharmBaryon", "p{}_charm_baryon"),
    *_xyz("p{}Casc", "p{}_casc"),
    *_xyz("p{}PiFromCharmBaryon", "p{}_bach_from_charm_baryon"),
    *_xyz("p{}Lambda", "p{}_lambda"),
    *_xyz("p{}PiFromCasc", "p{}_bach_from_casc"),
    *_xyz("p{}PosV0Dau", "p{}_pos_v0_dau"),
    *_xyz("p{}NegV0Dau", "p{}_neg_v0_dau"),
    _cand("impactParCascXY", "impact_par_casc_xy"),
    _cand("impactParPiFromCharmBaryonXY", "impact_par_bach_from_charm_baryon_xy"),
    _cand("impactParCascZ", "impact_par_casc_z"),
    _cand("impactParPiFromCharmBaryonZ", "impact_par_bach_from_charm_baryon_z"),
    _cand("errImpactParCascXY", "err_impact_par_casc_xy"),
    _cand("errImpactParPiFromCharmBaryonXY", "err_impact_par_bach_from_charm_baryon_xy"),
    _cand("invMassLambda", "inv_mass_lambda"),
    _cand("invMassCascade", "inv_mass_cascade"),
    _cand("invMassCharmBaryon", "inv_mass_charm_baryon"),
    _cand("cosPAV0", "cos_pa_v0"),
    _cand("cosPACharmBaryon", "cos_pa_charm_baryon"),
    _cand("cosPACasc", "cos_pa_casc"),
    _cand("cosPAXYV0", "cos_pa_xy_v0"),
    _cand("cosPAXYCharmBaryon", "cos_pa_xy_charm_baryon"),
    _cand("cosPAXYCasc", "cos_pa_xy_casc"),
    _cand("cTauOmegac", "c_tau_omegac"),
    _cand("cTauCascade", "c_tau_cascade"),
    _cand("cTauV0", "c_tau_v0"),
    _cand("cTauXic", "c_tau_xic"),
    _cand("etaV0PosDau", "eta_v0_pos_dau"),
    _cand("etaV0NegDau", "eta_v0_neg_dau"),
    _cand("etaPiFromCasc", "eta_bach_from_casc"),
    _cand("etaPiFromCharmBaryon", "eta_bach_from_charm_baryon"),
    _cand("etaCharmBaryon", "eta_charm_baryon"),
    _cand("etaCascade", "eta_cascade"),
    _cand("etaV0", "eta_v0"),
    _cand("dcaXYToPvV0Dau0", "dca_xy_to_pv_v0_dau0"),
    _cand("dcaXYToPvV0Dau1", "dca_xy_to_pv_v0_dau1"),
    _cand("dcaXYToPvCascDau", "dca_xy_to_pv_casc_dau"),
    _cand("dcaZToPvV0Dau0", "dca_z_to_pv_v0_dau0"),
    _cand("dcaZToPvV0Dau1", "dca_z_to_pv_v0_dau1"),
    _cand("dcaZToPvCascDau", "dca_z_to_pv_casc_dau"),
    _cand("dcaCascDau", "dca_casc_dau"),
    _cand("dcaV0Dau", "dca_v0_dau"),
    _cand("dcaCharmBaryonDau", "dca_charm_baryon_dau"),
    _cand("decLenCharmBaryon", "dec_len_charm_baryon"),
    _cand("decLenCascade", "dec_len_cascade"),
    _cand("decLenV0", "dec_len_v0"),
    _cand("errorDecayLengthCharmBaryon", "error_decay_length_charm_baryon"),
    _cand("errorDecayLengthXYCharmBaryon", "error_decay_length_xy_charm_baryon"),
    _ratio("normImpParCascade", "impact_par_casc_xy", "err_impact_par_casc_xy"),
    _ratio(
        "normImpParPiFromCharmBar",
        "impact_par_bach_from_charm_baryon_xy",
        "err_impact_par_bach_from_charm_baryon_xy",
    ),
    _ratio("normDecayLenCharmBar", "dec_len_charm_baryon", "error_decay_length_charm_baryon"),
    _track("isPionGlbTrkWoDca", "bachelor_from_charm_baryon_id", "is_global_track_wo_dca", "bool"),
    _track("pionItsNCls", "bachelor_from_charm_baryon_id", "its_n_cls", "uint8"),
    _track("nTpcRowsPion", "bachelor_from_charm_baryon_id", "tpc_n_cls_crossed_rows", "int16"),
    _track("nTpcRowsPiFromCasc", "bachelor_id", "tpc_n_cls_crossed_rows", "int16"),
    _track("nTpcRowsPosV0Dau", "pos_track_id", "tpc_n_cls_crossed_rows", "int16"),
    _track("nTpcRowsNegV0Dau", "neg_track_id", "tpc_n_cls_crossed_rows", "int16"),
    _cand("statusPidLambda", "status_pid_lambda", "bool"),
    _cand("statusPidCascade", "status_pid_cascade", "bool"),
    _cand("statusPidCharmBaryon", "status_pid_charm_baryon", "bool"),
    _cand("statusInvMassLambda", "status_inv_mass_lambda", "bool"),
    _cand("statusInvMassCascade", "status_inv_mass_cascade", "bool"),
    _cand("statusInvMassCharmBaryon", "status_inv_mass_charm_baryon", "bool"),
    _cand("resultSelections", "result_selections", "bool"),
    _cand("pidTpcInfoStored", "pid_tpc_info_stored", "int32"),
    _cand("pidTofInfoStored", "pid_tof_info_stored", "int32"),
    _cand("tpcNSigmaPiFromCharmBaryon", "tpc_n_sigma_pi_from_charm_baryon"),
    _cand("tpcNSigmaPiFromCasc", "tpc_n_sigma_pi_from_casc"),
    _cand("tpcNSigmaPiFromLambda", "tpc_n_sigma_pi_from_lambda"),
    _cand("tpcNSigmaPrFromLambda", "tpc_n_sigma_pr_from_lambda"),
    _cand("tofNSigmaPiFromCharmBaryon", "tof_n_sigma_pi_from_charm_baryon"),
    _cand("tofNSigmaPiFromCasc", "tof_n_sigma_pi_from_casc"),
    _cand("tofNSigmaPiFromLambda", "tof_n_sigma_pi_from_lambda"),
    _cand("tofNSigmaPrFromLambda", "tof_n_sigma_pr_from_lambda"),
    _truth("flagMcMatchRec", "flag_mc_match_rec", MC_FLAG_PLACEHOLDER, "int8"),
    _truth("debugMcRec", "debug_mc_rec", MC_DEBUG_PLACEHOLDER, "int8"),
    _truth("originMcRec", "origin_mc_rec", MC_ORIGIN_NONE, "int8"),
    _truth("collisionMatched", "collision_matched", MC_COLLISION_MATCHED_PLACEHOLDER, "bool"),
)

# Lite rows are pre-filtered by the quality gate, so the selection-status
# booleans, covariance, most pointing angles and decay lengths are dropped.
LITE_COLUMN_NAMES: tuple[str, ...] = (
    "xPv", "yPv", "zPv", "centrality", "numContrib", "chi2",
    "xDecayVtxCharmBaryon", "yDecayVtxCharmBaryon", "zDecayVtxCharmBaryon",
    "xDecayVtxCascade", "yDecayVtxCascade", "zDecayVtxCascade",
    "xDecayVtxV0", "yDecayVtxV0", "zDecayVtxV0",
    "signDecay",
    "pxCharmBaryon", "pyCharmBaryon", "pzCharmBaryon",
    "pxPiFromCharmBaryon", "pyPiFromCharmBaryon", "pzPiFromCharmBaryon",
    "pxPiFromCasc", "pyPiFromCasc", "pzPiFromCasc",
    "pxPosV0Dau", "pyPosV0Dau", "pzPosV0Dau",
    "pxNegV0Dau", "pyNegV0Dau", "pzNegV0Dau",
    "impactParCascXY", "impactParPiFromCharmBaryonXY",
    "errImpactParCascXY", "errImpactParPiFromCharmBaryonXY",
    "invMassLambda", "invMassCascade", "invMassCharmBaryon",
    "etaV0PosDau", "etaV0NegDau", "etaPiFromCasc", "etaPiFromCharmBaryon",
    "dcaXYToPvV0Dau0", "dcaXYToPvV0Dau1", "dcaXYToPvCascDau",
    "dcaCascDau", "dcaV0Dau", "dcaCharmBaryonDau",
    "errorDecayLengthCharmBaryon", "normImpParCascade", "normImpParPiFromCharmBar",
    "isPionGlbTrkWoDca", "pionItsNCls",
    "nTpcRowsPion", "nTpcRowsPiFromCasc", "nTpcRowsPosV0Dau", "nTpcRowsNegV0Dau",
    "pidTpcInfoStored", "pidTofInfoStored",
    "tpcNSigmaPiFromCharmBaryon", "tpcNSigmaPiFromCasc", "tpcNSigmaPiFromLambda", "tpcNSigmaPrFromLambda",
    "tofNSigmaPiFromCharmBaryon", "tofNSigmaPiFromCasc", "tofNSigmaPiFromLambda", "tofNSigmaPrFromLambda",
    "flagMcMatchRec", "originMcRec", "collisionMatched",
)  # fmt: skip


def select_columns(columns: Sequence[Column], names: Sequence[str]) -> tuple[Column, ...]:
    """Return the named subset of `columns`, requiring the same relative order."""
    index = {col.name: idx for idx, col in enumerate(columns)}
    missing = [name for name in names if name not in index]
    if missing:
        raise SchemaError(f"Unknown columns in subset: {', '.join(missing)}")
    positions = [index[name] for name in names]
    if positions != sorted(positions) or len(set(positions)) != len(positions):
        raise SchemaError("Column subset must preserve the order of the parent schema.")
    return tuple(columns[pos] for pos in positions)


LITE_COLUMNS: tuple[Column, ...] = select_columns(FULL_COLUMNS, LITE_COLUMN_NAMES)


def column_names(columns: Sequence[Column]) -> tuple[str, ...]:
    """Return the ordered names of a column sequence."""
    return tuple(col.name for col in columns)
