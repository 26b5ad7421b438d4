"""Utility script to inspect/plot tables written by the tree creator."""

from __future__ import annotations

import argparse
from pathlib import Path


def _require_pandas():
    """Import pandas with an actionable error if not installed."""
    try:
        import pandas as pd  # type: ignore
    except ModuleNotFoundError as exc:
        raise ModuleNotFoundError(
            "pandas is required. Install with: pip install pandas pyarrow"
        ) from exc
    return pd


def load_table(path: str):
    """Load table data from parquet/csv/pickle into a pandas DataFrame."""
    pd = _require_pandas()
    p = Path(path)
    suffix = p.suffix.lower()
    if suffix == ".parquet":
        return pd.read_parquet(p)
    if suffix == ".csv":
        return pd.read_csv(p)
    if suffix in (".pkl", ".pickle"):
        return pd.read_pickle(p)
    raise ValueError("Supported input formats: .parquet, .csv, .pkl")


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for quick inspection and an optional mass histogram."""
    parser = argparse.ArgumentParser(description="Inspect a candidate or event table.")
    parser.add_argument("--input", required=True, help="Path to .parquet/.csv/.pkl output.")
    parser.add_argument("--head", type=int, default=10, help="Rows to print.")
    parser.add_argument(
        "--plot",
        action="store_true",
        help="Histogram invMassCharmBaryon for |normImpParCascade| above --min-sig (png).",
    )
    parser.add_argument("--min-sig", type=float, default=0.0, help="Cut on |normImpParCascade|.")
    args = parser.parse_args(argv)

    df = load_table(args.input)
    print(df.head(args.head).to_string(index=False))
    print(f"\nRows={len(df)}  Columns={len(df.columns)}")

    if args.plot:
        if "invMassCharmBaryon" not in df.columns:
            print("No invMassCharmBaryon column (event table?); skipping plot.")
            return 0
        try:
            import matplotlib.pyplot as plt  # type: ignore
        except ModuleNotFoundError:
            print("matplotlib not installed; skipping plot.")
            return 0
        # inf significances from zero uncertainties pass any finite cut
        sel = df[df["normImpParCascade"].abs() > args.min_sig]
        out = Path(args.input).with_suffix(".png")
        ax = sel["invMassCharmBaryon"].plot.hist(bins=60, histtype="step")
        ax.set_xlabel("invMassCharmBaryon [GeV/c^2]")
        ax.set_title(f"{len(sel)} candidates")
        plt.tight_layout()
        plt.savefig(out, dpi=120)
        print(f"Saved plot: {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
