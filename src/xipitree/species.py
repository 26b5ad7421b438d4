"""Charm-baryon species targeted by the simulation process variants.

Masses are in GeV/c^2.
"""

from __future__ import annotations

from .models import CharmBaryonSpecies

_XIC0 = CharmBaryonSpecies(name="Xic0", mass=2.47044, pdg_id=4132)
_OMEGAC0 = CharmBaryonSpecies(name="Omegac0", mass=2.6952, pdg_id=4332)

_NAME_TO_SPECIES: dict[str, CharmBaryonSpecies] = {
    "xic0": _XIC0,
    "xic": _XIC0,
    "omegac0": _OMEGAC0,
    "omegac": _OMEGAC0,
}


def make_xic0() -> CharmBaryonSpecies:
    """Return the neutral Xi_c species."""
    return _XIC0


def make_omegac0() -> CharmBaryonSpecies:
    """Return the neutral Omega_c species."""
    return _OMEGAC0


def species_from_name(name: str) -> CharmBaryonSpecies:
    """Resolve a short species name (e.g. `xic0`, `Omegac0`) into a species."""
    key = name.strip().lower()
    try:
        return _NAME_TO_SPECIES[key]
    except KeyError as exc:
        supported = ", ".join(sorted(_NAME_TO_SPECIES))
        raise ValueError(
            f"Unknown charm-baryon species '{name}'. Supported names: {supported}"
        ) from exc
