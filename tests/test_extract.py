"""Unit tests for field extraction of event and candidate rows."""

from __future__ import annotations

import math
import unittest

import numpy as np

from xipi_test_utils import make_annotation, make_candidate, make_event, make_tracks

from xipitree import (
    CENTRALITY_NOT_APPLICABLE,
    FULL_COLUMNS,
    LITE_COLUMNS,
    CentralityEstimator,
    InputBatch,
    TreeCreator,
    UnresolvedReferenceError,
    candidate_row,
    event_row,
    normalized_ratio,
)
from xipitree.extract import resolve_context


class TestEventRow(unittest.TestCase):
    """Validate the two event-level selection columns."""

    def test_z_cut_is_strict_and_symmetric(self) -> None:
        """|z| equal to the cut must fail; both signs are treated alike."""
        self.assertTrue(event_row(make_event(pos_z=-9.99), 10.0)["isEventSelZ"])
        self.assertFalse(event_row(make_event(pos_z=10.0), 10.0)["isEventSelZ"])
        self.assertFalse(event_row(make_event(pos_z=-12.0), 10.0)["isEventSelZ"])

    def test_sel8_flag_is_forwarded(self) -> None:
        """Baseline selection flag should be copied as-is."""
        row = event_row(make_event(sel8=False), 10.0)
        self.assertEqual(list(row), ["isEventSel8", "isEventSelZ"])
        self.assertFalse(row["isEventSel8"])


class TestNormalizedRatio(unittest.TestCase):
    """Normalized significances divide the float32 operands without a guard."""

    def test_matches_float32_division(self) -> None:
        """Finite inputs give the float32 quotient widened to float64."""
        expected = np.float64(np.float32(0.3) / np.float32(0.7))
        self.assertEqual(normalized_ratio(0.3, 0.7), expected)
        self.assertNotEqual(normalized_ratio(0.1, 0.3), 0.1 / 0.3)

    def test_ratio_matches_stored_columns(self) -> None:
        """The stored significance equals the quotient of its stored operand columns."""
        creator = TreeCreator()
        cand = make_candidate(impact_par_casc_xy=0.1, err_impact_par_casc_xy=0.3)
        creator.process(InputBatch(events=(make_event(),), tracks=make_tracks(), candidates=(cand,)))
        table = creator.full_table
        value = table.column("impactParCascXY")[0]
        error = table.column("errImpactParCascXY")[0]
        self.assertEqual(table.column("normImpParCascade")[0], np.float64(value / error))

    def test_zero_denominator_propagates_non_finite_values(self) -> None:
        """Zero uncertainty must give inf/nan instead of raising or clamping."""
        self.assertEqual(normalized_ratio(2.0, 0.0), math.inf)
        self.assertEqual(normalized_ratio(-2.0, 0.0), -math.inf)
        self.assertTrue(math.isnan(normalized_ratio(0.0, 0.0)))


class TestCandidateRow(unittest.TestCase):
    """Validate candidate projection onto the full and lite schemas."""

    def setUp(self) -> None:
        self.events = {"ev0": make_event(num_contrib=31, chi2=2.25, centralities={"FT0C": 42.5})}
        self.tracks = {t.track_id: t for t in make_tracks()}

    def _context(self, candidate, **kwargs):
        return resolve_context(candidate, events=self.events, tracks=self.tracks, **kwargs)

    def test_row_follows_schema_order(self) -> None:
        """Row keys are exactly the schema column names in order."""
        ctx = self._context(make_candidate())
        self.assertEqual(list(candidate_row(FULL_COLUMNS, ctx)), [c.name for c in FULL_COLUMNS])
        self.assertEqual(list(candidate_row(LITE_COLUMNS, ctx)), [c.name for c in LITE_COLUMNS])

    def test_derived_significances(self) -> None:
        """Normalized impact parameters and decay length are value / uncertainty."""
        cand = make_candidate(
            impact_par_casc_xy=0.013,
            err_impact_par_casc_xy=0.0041,
            impact_par_bach_from_charm_baryon_xy=-0.02,
            err_impact_par_bach_from_charm_baryon_xy=0.003,
            dec_len_charm_baryon=0.05,
            error_decay_length_charm_baryon=0.0,
        )
        row = candidate_row(FULL_COLUMNS, self._context(cand))
        self.assertEqual(row["normImpParCascade"], np.float64(np.float32(0.013) / np.float32(0.0041)))
        self.assertEqual(row["normImpParPiFromCharmBar"], np.float64(np.float32(-0.02) / np.float32(0.003)))
        self.assertEqual(row["normDecayLenCharmBar"], math.inf)

    def test_event_and_track_fields_are_resolved(self) -> None:
        """Vertex-fit quality comes from the event, track quality from each daughter."""
        row = candidate_row(FULL_COLUMNS, self._context(make_candidate()))
        self.assertEqual(row["numContrib"], 31)
        self.assertEqual(row["chi2"], 2.25)
        self.assertTrue(row["isPionGlbTrkWoDca"])
        self.assertEqual(row["pionItsNCls"], 7)
        self.assertEqual(row["nTpcRowsPion"], 120)
        self.assertEqual(row["nTpcRowsPiFromCasc"], 110)
        self.assertEqual(row["nTpcRowsPosV0Dau"], 100)
        self.assertEqual(row["nTpcRowsNegV0Dau"], 90)

    def test_bachelor_columns_map_to_pion_names(self) -> None:
        """Bachelor momenta are written under the pion column names."""
        cand = make_candidate(px_bach_from_charm_baryon=0.7, eta_bach_from_casc=-0.4)
        row = candidate_row(LITE_COLUMNS, self._context(cand))
        self.assertEqual(row["pxPiFromCharmBaryon"], 0.7)
        self.assertEqual(row["etaPiFromCasc"], -0.4)

    def test_centrality_sentinel_without_estimator(self) -> None:
        """Variants without centrality write the not-applicable sentinel."""
        row = candidate_row(LITE_COLUMNS, self._context(make_candidate()))
        self.assertEqual(row["centrality"], -999.0)
        self.assertEqual(CENTRALITY_NOT_APPLICABLE, -999.0)

    def test_centrality_from_joined_estimator(self) -> None:
        """The active estimator's value is read from the candidate's event."""
        ctx = self._context(make_candidate(), centrality_estimator=CentralityEstimator.FT0C)
        self.assertEqual(candidate_row(LITE_COLUMNS, ctx)["centrality"], 42.5)

    def test_missing_centrality_is_unresolved(self) -> None:
        """An estimator not joined to the event is a resolution failure."""
        ctx = self._context(make_candidate(), centrality_estimator=CentralityEstimator.FT0M)
        with self.assertRaises(UnresolvedReferenceError):
            candidate_row(LITE_COLUMNS, ctx)

    def test_mc_placeholders_without_truth(self) -> None:
        """Data variants write the documented truth placeholders."""
        row = candidate_row(FULL_COLUMNS, self._context(make_candidate()))
        self.assertEqual(row["flagMcMatchRec"], -7)
        self.assertEqual(row["debugMcRec"], -7)
        self.assertEqual(row["originMcRec"], 0)
        self.assertFalse(row["collisionMatched"])

    def test_mc_truth_is_forwarded(self) -> None:
        """Simulation variants forward the joined annotation."""
        ann = make_annotation(flag_mc_match_rec=-1, debug_mc_rec=3, origin_mc_rec=2)
        ctx = self._context(make_candidate(), mc_annotations={"c0": ann})
        row = candidate_row(FULL_COLUMNS, ctx)
        self.assertEqual(row["flagMcMatchRec"], -1)
        self.assertEqual(row["debugMcRec"], 3)
        self.assertEqual(row["originMcRec"], 2)
        self.assertTrue(row["collisionMatched"])

    def test_unresolved_references_raise(self) -> None:
        """Missing event, truth annotation or daughter track are fatal."""
        with self.assertRaises(UnresolvedReferenceError):
            self._context(make_candidate(event_id="ev404"))
        with self.assertRaises(UnresolvedReferenceError):
            self._context(make_candidate(), mc_annotations={})
        ctx = self._context(make_candidate(neg_track_id="t_missing"))
        with self.assertRaises(UnresolvedReferenceError):
            candidate_row(FULL_COLUMNS, ctx)


if __name__ == "__main__":
    unittest.main()
