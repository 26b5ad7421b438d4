"""Unit tests for the declared output-table schemas."""

from __future__ import annotations

import unittest

from xipitree import EVENT_COLUMNS, FULL_COLUMNS, LITE_COLUMNS, SchemaError
from xipitree.schema import column_names, select_columns

FULL_LAYOUT = (
    "xPv", "yPv", "zPv", "centrality", "numContrib", "chi2",
    "xDecayVtxCharmBaryon", "yDecayVtxCharmBaryon", "zDecayVtxCharmBaryon",
    "xDecayVtxCascade", "yDecayVtxCascade", "zDecayVtxCascade",
    "xDecayVtxV0", "yDecayVtxV0", "zDecayVtxV0",
    "signDecay",
    "covVtxCharmBaryonXX", "covVtxCharmBaryonYY", "covVtxCharmBaryonZZ",
    "pxCharmBaryon", "pyCharmBaryon", "pzCharmBaryon",
    "pxCasc", "pyCasc", "pzCasc",
    "pxPiFromCharmBaryon", "pyPiFromCharmBaryon", "pzPiFromCharmBaryon",
    "pxLambda", "pyLambda", "pzLambda",
    "pxPiFromCasc", "pyPiFromCasc", "pzPiFromCasc",
    "pxPosV0Dau", "pyPosV0Dau", "pzPosV0Dau",
    "pxNegV0Dau", "pyNegV0Dau", "pzNegV0Dau",
    "impactParCascXY", "impactParPiFromCharmBaryonXY",
    "impactParCascZ", "impactParPiFromCharmBaryonZ",
    "errImpactParCascXY", "errImpactParPiFromCharmBaryonXY",
    "invMassLambda", "invMassCascade", "invMassCharmBaryon",
    "cosPAV0", "cosPACharmBaryon", "cosPACasc", "cosPAXYV0", "cosPAXYCharmBaryon", "cosPAXYCasc",
    "cTauOmegac", "cTauCascade", "cTauV0", "cTauXic",
    "etaV0PosDau", "etaV0NegDau", "etaPiFromCasc", "etaPiFromCharmBaryon",
    "etaCharmBaryon", "etaCascade", "etaV0",
    "dcaXYToPvV0Dau0", "dcaXYToPvV0Dau1", "dcaXYToPvCascDau",
    "dcaZToPvV0Dau0", "dcaZToPvV0Dau1", "dcaZToPvCascDau",
    "dcaCascDau", "dcaV0Dau", "dcaCharmBaryonDau",
    "decLenCharmBaryon", "decLenCascade", "decLenV0",
    "errorDecayLengthCharmBaryon", "errorDecayLengthXYCharmBaryon",
    "normImpParCascade", "normImpParPiFromCharmBar", "normDecayLenCharmBar",
    "isPionGlbTrkWoDca", "pionItsNCls",
    "nTpcRowsPion", "nTpcRowsPiFromCasc", "nTpcRowsPosV0Dau", "nTpcRowsNegV0Dau",
    "statusPidLambda", "statusPidCascade", "statusPidCharmBaryon",
    "statusInvMassLambda", "statusInvMassCascade", "statusInvMassCharmBaryon",
    "resultSelections", "pidTpcInfoStored", "pidTofInfoStored",
    "tpcNSigmaPiFromCharmBaryon", "tpcNSigmaPiFromCasc", "tpcNSigmaPiFromLambda", "tpcNSigmaPrFromLambda",
    "tofNSigmaPiFromCharmBaryon", "tofNSigmaPiFromCasc", "tofNSigmaPiFromLambda", "tofNSigmaPrFromLambda",
    "flagMcMatchRec", "debugMcRec", "originMcRec", "collisionMatched",
)  # fmt: skip

LITE_LAYOUT = (
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


class TestSchemas(unittest.TestCase):
    """Column counts, order and the lite-subset relationship are fixed."""

    def test_column_counts(self) -> None:
        """Event, full and lite tables have fixed widths."""
        self.assertEqual(len(EVENT_COLUMNS), 2)
        self.assertEqual(len(FULL_COLUMNS), 110)
        self.assertEqual(len(LITE_COLUMNS), 70)

    def test_names_are_unique(self) -> None:
        """No column name may appear twice in a table."""
        for columns in (EVENT_COLUMNS, FULL_COLUMNS, LITE_COLUMNS):
            names = column_names(columns)
            self.assertEqual(len(names), len(set(names)))

    def test_leading_and_trailing_columns(self) -> None:
        """Spot-check the start and end of the full and lite layouts."""
        full = column_names(FULL_COLUMNS)
        lite = column_names(LITE_COLUMNS)
        self.assertEqual(full[:6], ("xPv", "yPv", "zPv", "centrality", "numContrib", "chi2"))
        self.assertEqual(full[-4:], ("flagMcMatchRec", "debugMcRec", "originMcRec", "collisionMatched"))
        self.assertEqual(lite[-3:], ("flagMcMatchRec", "originMcRec", "collisionMatched"))
        self.assertEqual(full.index("normImpParCascade") + 2, full.index("normDecayLenCharmBar"))

    def test_full_and_lite_layouts_are_exact(self) -> None:
        """Every column name sits at its published position."""
        self.assertEqual(len(FULL_LAYOUT), 110)
        self.assertEqual(len(LITE_LAYOUT), 70)
        self.assertEqual(column_names(FULL_COLUMNS), FULL_LAYOUT)
        self.assertEqual(column_names(LITE_COLUMNS), LITE_LAYOUT)

    def test_lite_is_ordered_subset_of_full(self) -> None:
        """Lite columns appear in full-table order and share their declarations."""
        full = list(FULL_COLUMNS)
        positions = [full.index(col) for col in LITE_COLUMNS]
        self.assertEqual(positions, sorted(positions))

    def test_lite_omits_selection_status_and_covariance(self) -> None:
        """Lite rows are pre-gated, so status booleans are not stored."""
        lite = set(column_names(LITE_COLUMNS))
        for name in (
            "statusPidCharmBaryon",
            "resultSelections",
            "covVtxCharmBaryonXX",
            "cosPAV0",
            "etaCharmBaryon",
            "debugMcRec",
            "normDecayLenCharmBar",
        ):
            self.assertNotIn(name, lite)

    def test_dtypes(self) -> None:
        """Storage types follow the reference table declarations."""
        dtypes = {col.name: col.dtype for col in FULL_COLUMNS}
        self.assertEqual(dtypes["xPv"], "float32")
        self.assertEqual(dtypes["normImpParCascade"], "float64")
        self.assertEqual(dtypes["signDecay"], "int8")
        self.assertEqual(dtypes["pionItsNCls"], "uint8")
        self.assertEqual(dtypes["nTpcRowsPion"], "int16")
        self.assertEqual(dtypes["statusPidLambda"], "bool")

    def test_select_columns_rejects_unknown_and_reordered_names(self) -> None:
        """Subsets must name existing columns in parent order."""
        with self.assertRaises(SchemaError):
            select_columns(FULL_COLUMNS, ("xPv", "notAColumn"))
        with self.assertRaises(SchemaError):
            select_columns(FULL_COLUMNS, ("yPv", "xPv"))
        self.assertEqual(column_names(select_columns(FULL_COLUMNS, ("xPv", "zPv"))), ("xPv", "zPv"))


if __name__ == "__main__":
    unittest.main()
