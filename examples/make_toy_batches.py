"""Generate a synthetic input file for the tree creator.

The values are random toys, not a physics simulation: each candidate gets
Gaussian-smeared masses around the nominal Lambda / Xi / charm-baryon masses
(signal) or a flat charm-baryon mass (background), and random selection flags.

Run from repository root:
    PYTHONPATH=src python3 examples/make_toy_batches.py --species omegac0
    PYTHONPATH=src python3 -m xipitree.cli --input examples/toy_batches.json \
        --config examples/config_lite_ft0c.json --out-dir examples/out
"""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict, fields
from pathlib import Path
from random import Random
from typing import Any

from xipitree import (
    CandidateRecord,
    CentralityEstimator,
    EventRecord,
    InputBatch,
    McTruthAnnotation,
    TrackRecord,
    species_from_name,
)

MASS_LAMBDA = 1.115683
MASS_XI = 1.32171


def parse_args() -> argparse.Namespace:
    """Parse CLI options for toy generation."""
    parser = argparse.ArgumentParser(description="Generate toy Xi-pi candidate batches.")
    parser.add_argument("--species", default="xic0", help="Signal species (xic0 or omegac0).")
    parser.add_argument("--n-batches", type=int, default=3)
    parser.add_argument("--events-per-batch", type=int, default=50)
    parser.add_argument("--candidates-per-event", type=int, default=4)
    parser.add_argument("--signal-fraction", type=float, default=0.3)
    parser.add_argument("--seed", type=int, default=12345, help="RNG seed for reproducibility.")
    parser.add_argument("--out", default="examples/toy_batches.json")
    return parser.parse_args()


def make_event(rng: Random, event_id: str) -> EventRecord:
    """One event with a smeared vertex and all three centralities joined."""
    return EventRecord(
        event_id=event_id,
        pos_x=rng.gauss(0.0, 0.01),
        pos_y=rng.gauss(0.0, 0.01),
        pos_z=rng.gauss(0.0, 6.0),
        sel8=rng.random() < 0.9,
        num_contrib=rng.randint(2, 80),
        chi2=rng.uniform(0.1, 5.0),
        centralities={e.value: rng.uniform(0.0, 100.0) for e in CentralityEstimator},
    )


def make_candidate(
    rng: Random, event: EventRecord, cand_id: str, signal_mass: float | None
) -> tuple[CandidateRecord, tuple[TrackRecord, ...]]:
    """One candidate plus its four daughter tracks."""
    track_ids = tuple(f"{cand_id}_t{i}" for i in range(4))
    tracks = tuple(
        TrackRecord(
            track_id=tid,
            its_n_cls=rng.randint(0, 7),
            tpc_n_cls_crossed_rows=rng.randint(50, 159),
            is_global_track_wo_dca=rng.random() < 0.8,
        )
        for tid in track_ids
    )
    values: dict[str, Any] = {
        "candidate_id": cand_id,
        "event_id": event.event_id,
        "bachelor_from_charm_baryon_id": track_ids[0],
        "bachelor_id": track_ids[1],
        "pos_track_id": track_ids[2],
        "neg_track_id": track_ids[3],
        "x_pv": event.pos_x,
        "y_pv": event.pos_y,
        "z_pv": event.pos_z,
        "sign_decay": rng.choice((-1, 1)),
    }
    for f in fields(CandidateRecord):
        if f.name in values or f.type != "float":
            continue
        if f.name.startswith(("err_", "error_", "cov_")):
            values[f.name] = abs(rng.gauss(0.0, 0.01))
        elif f.name.startswith("cos_pa"):
            values[f.name] = 1.0 - abs(rng.gauss(0.0, 0.01))
        else:
            values[f.name] = rng.gauss(0.0, 1.0)
    values["inv_mass_lambda"] = rng.gauss(MASS_LAMBDA, 0.002)
    values["inv_mass_cascade"] = rng.gauss(MASS_XI, 0.003)
    if signal_mass is not None:
        values["inv_mass_charm_baryon"] = rng.gauss(signal_mass, 0.01)
    else:
        values["inv_mass_charm_baryon"] = rng.uniform(2.2, 3.0)
    for flag in (
        "status_pid_lambda",
        "status_pid_cascade",
        "status_pid_charm_baryon",
        "status_inv_mass_lambda",
        "status_inv_mass_cascade",
        "status_inv_mass_charm_baryon",
        "result_selections",
    ):
        values[flag] = rng.random() < 0.85
    values["pid_tpc_info_stored"] = rng.randint(0, 15)
    values["pid_tof_info_stored"] = rng.randint(0, 15)
    return CandidateRecord(**values), tracks


def main() -> int:
    """Generate batches and write them as JSON."""
    args = parse_args()
    species = species_from_name(args.species)
    rng = Random(args.seed)
    batches: list[InputBatch] = []
    for ib in range(args.n_batches):
        events: list[EventRecord] = []
        tracks: list[TrackRecord] = []
        candidates: list[CandidateRecord] = []
        mc: list[McTruthAnnotation] = []
        for ie in range(args.events_per_batch):
            event = make_event(rng, f"b{ib}_ev{ie}")
            events.append(event)
            for ic in range(args.candidates_per_event):
                is_signal = rng.random() < args.signal_fraction
                cand, cand_tracks = make_candidate(
                    rng, event, f"{event.event_id}_c{ic}", species.mass if is_signal else None
                )
                candidates.append(cand)
                tracks.extend(cand_tracks)
                mc.append(
                    McTruthAnnotation(
                        candidate_id=cand.candidate_id,
                        flag_mc_match_rec=1 if is_signal else 0,
                        debug_mc_rec=0,
                        origin_mc_rec=1 if is_signal else 0,
                        collision_matched=is_signal,
                    )
                )
        batches.append(InputBatch(tuple(events), tuple(tracks), tuple(candidates), tuple(mc)))

    payload = {
        "batches": [
            {
                "events": [asdict(ev) for ev in b.events],
                "tracks": [asdict(t) for t in b.tracks],
                "candidates": [asdict(c) for c in b.candidates],
                "mc": [asdict(m) for m in b.mc_annotations],
            }
            for b in batches
        ]
    }
    out = Path(args.out)
    out.write_text(json.dumps(payload), encoding="utf-8")
    n_cand = sum(len(b.candidates) for b in batches)
    print(f"Wrote {len(batches)} batches ({n_cand} {species.name} toy candidates) to {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
