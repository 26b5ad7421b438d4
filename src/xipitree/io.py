"""Input/output helpers for JSON inputs and table export."""

from __future__ import annotations

import json
from dataclasses import MISSING, fields, replace
from pathlib import Path
from typing import Any, Mapping

from .models import (
    DEFAULT_PROCESS_SWITCHES,
    DEFAULT_Z_PV_CUT,
    CandidateRecord,
    CentralityEstimator,
    EventRecord,
    InputBatch,
    McTruthAnnotation,
    RunConfiguration,
    TrackRecord,
)
from .tables import ColumnTable

_ESTIMATOR_NAMES = tuple(e.value for e in CentralityEstimator)
_FORMAT_SUFFIX = {"parquet": ".parquet", "csv": ".csv", "pkl": ".pkl"}


def _to_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"must be true or false, got {value!r}")
    return value


def _to_int(value: Any) -> int:
    # JSON bools are ints in Python; integral floats such as 18.0 are accepted.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"must be an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"must be an integer, got {value!r}")
    return int(value)


def _to_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"must be a number, got {value!r}")
    return float(value)


_CONVERTERS = {"str": str, "float": _to_float, "int": _to_int, "bool": _to_bool}


def load_run_configuration_json(path: str | Path) -> RunConfiguration:
    """Load the run configuration from JSON.

    Expected shape (names follow the task configurables):
    {"zPvCut": 10.0, "processDataLite": true, ...}

    If no process switch is named, the default switch (`processDataFull`)
    stays enabled; otherwise only the switches set to true are enabled.
    """
    data = _load_json(path)
    return run_configuration_from_mapping(data)


def run_configuration_from_mapping(data: Mapping[str, Any]) -> RunConfiguration:
    """Build a `RunConfiguration` from an already-decoded JSON object."""
    unknown = [key for key in data if key != "zPvCut" and not key.startswith("process")]
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
    switches = {
        key: _config_value(_to_bool, key, value)
        for key, value in data.items()
        if key.startswith("process")
    }
    z_pv_cut = _config_value(_to_float, "zPvCut", data.get("zPvCut", DEFAULT_Z_PV_CUT))
    return RunConfiguration(
        z_pv_cut=z_pv_cut,
        process_switches=switches or dict(DEFAULT_PROCESS_SWITCHES),
    )


def load_batches_json(path: str | Path) -> list[InputBatch]:
    """Load input batches from JSON into `InputBatch` objects.

    Expected shape:
    {
      "batches": [
        {"events": [...], "tracks": [...], "candidates": [...], "mc": [...]},
        ...
      ]
    }
    A document with top-level `events`/`tracks`/`candidates` is read as a
    single batch.
    """
    data = _load_json(path)
    if "batches" in data:
        batches_data = data["batches"]
        if not isinstance(batches_data, list):
            raise ValueError("Input JSON key 'batches' must be a list.")
    else:
        batches_data = [data]
    return [
        _parse_batch(item, context=f"batch {idx} of {path}")
        for idx, item in enumerate(batches_data)
    ]


def write_tables(
    out_dir: str | Path,
    tables: Mapping[str, ColumnTable],
    prefix: str = "xipi",
    fmt: str = "parquet",
) -> list[Path]:
    """Write each table to `<out_dir>/<prefix>_<name>.<ext>` and return the paths."""
    try:
        suffix = _FORMAT_SUFFIX[fmt]
    except KeyError as exc:
        raise ValueError(
            f"Unsupported output format '{fmt}'. Use parquet, csv, or pkl"
        ) from exc
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    return [table.write(out / f"{prefix}_{name}{suffix}") for name, table in tables.items()]


def _parse_batch(item: Any, context: str) -> InputBatch:
    """Parse one batch object with its event, track, candidate and truth lists."""
    if not isinstance(item, dict):
        raise ValueError(f"Entry {context} must be an object.")
    events = _list_field(item, "events", context)
    tracks = _list_field(item, "tracks", context)
    candidates = _list_field(item, "candidates", context)
    mc = item.get("mc", [])
    if not isinstance(mc, list):
        raise ValueError(f"Key 'mc' in {context} must be a list.")
    return InputBatch(
        events=tuple(_parse_event_item(ev, idx, context) for idx, ev in enumerate(events)),
        tracks=tuple(_parse_record(TrackRecord, trk, idx, context) for idx, trk in enumerate(tracks)),
        candidates=tuple(
            _parse_record(CandidateRecord, cand, idx, context) for idx, cand in enumerate(candidates)
        ),
        mc_annotations=tuple(
            _parse_record(McTruthAnnotation, ann, idx, context) for idx, ann in enumerate(mc)
        ),
    )


def _parse_event_item(item: Any, idx: int, context: str) -> EventRecord:
    """Parse one event dictionary, including its joined centralities."""
    if not isinstance(item, dict):
        raise ValueError(f"Event entry at index {idx} in {context} must be an object.")
    cents = item.get("centralities", {})
    if not isinstance(cents, dict):
        raise ValueError(f"Event entry at index {idx} in {context}: 'centralities' must be an object.")
    bad = [name for name in cents if name not in _ESTIMATOR_NAMES]
    if bad:
        raise ValueError(
            f"Event entry at index {idx} in {context} has unknown centrality estimators "
            f"{bad}. Supported: {', '.join(_ESTIMATOR_NAMES)}"
        )
    payload = {key: value for key, value in item.items() if key != "centralities"}
    payload.setdefault("event_id", f"ev{idx}")
    event = _parse_record(EventRecord, payload, idx, context)
    centralities = {}
    for name, value in cents.items():
        try:
            centralities[name] = _to_float(value)
        except ValueError as exc:
            raise ValueError(
                f"Event entry at index {idx} in {context}: centrality '{name}' {exc}"
            ) from exc
    return replace(event, centralities=centralities)


def _parse_record(record_type: type, item: Any, idx: int, context: str):
    """Parse a flat record dictionary using the dataclass field types.

    Fields with a default are optional; unknown keys are ignored.
    """
    label = record_type.__name__
    if not isinstance(item, dict):
        raise ValueError(f"{label} entry at index {idx} in {context} must be an object.")
    kwargs: dict[str, Any] = {}
    for f in fields(record_type):
        convert = _CONVERTERS.get(f.type)
        if convert is None:
            continue
        if f.name in item:
            try:
                kwargs[f.name] = convert(item[f.name])
            except ValueError as exc:
                raise ValueError(
                    f"{label} entry at index {idx} in {context}: field '{f.name}' {exc}"
                ) from exc
        elif f.default is MISSING and f.default_factory is MISSING:
            raise ValueError(f"{label} entry at index {idx} in {context} is missing field '{f.name}'.")
    return record_type(**kwargs)


def _config_value(convert, key: str, value: Any):
    try:
        return convert(value)
    except ValueError as exc:
        raise ValueError(f"Configuration key '{key}' {exc}") from exc


def _list_field(item: dict[str, Any], key: str, context: str) -> list[Any]:
    value = item.get(key, [])
    if not isinstance(value, list):
        raise ValueError(f"Key '{key}' in {context} must be a list.")
    return value


def _load_json(path: str | Path) -> dict[str, Any]:
    """Read and validate a JSON object document from disk."""
    raw = Path(path).read_text(encoding="utf-8")
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"JSON document at {path} must be an object.")
    return data
