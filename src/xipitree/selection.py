"""Quality gate applied to candidates before they enter the lite table."""

from __future__ import annotations

from .models import CandidateRecord


def passes_lite_quality_gate(candidate: CandidateRecord) -> bool:
    """Return True if the candidate passed the selector and all mass windows.

    Required: overall selection result, charm-baryon PID status, and the
    Lambda, cascade and charm-baryon invariant-mass window statuses.
    """
    return bool(
        candidate.result_selections
        and candidate.status_pid_charm_baryon
        and candidate.status_inv_mass_lambda
        and candidate.status_inv_mass_cascade
        and candidate.status_inv_mass_charm_baryon
    )
