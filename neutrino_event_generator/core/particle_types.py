"""
Particle type codes and their light-emission shape classification.

Codes follow the PDG numbering scheme; hadronic showers use the code
LeptonInjector assigns to its "Hadrons" final state.
"""

from __future__ import annotations

from enum import Enum, IntEnum


class ParticleType(IntEnum):
    E_MINUS = 11
    E_PLUS = -11
    NU_E = 12
    NU_E_BAR = -12
    MU_MINUS = 13
    MU_PLUS = -13
    NU_MU = 14
    NU_MU_BAR = -14
    TAU_MINUS = 15
    TAU_PLUS = -15
    NU_TAU = 16
    NU_TAU_BAR = -16
    GAMMA = 22
    HADRON_SHOWER = -2000001006


class ParticleShape(Enum):
    TRACK = "track"
    CASCADE = "cascade"
    UNKNOWN = "unknown"


_NEUTRINOS = frozenset({
    ParticleType.NU_E, ParticleType.NU_E_BAR,
    ParticleType.NU_MU, ParticleType.NU_MU_BAR,
    ParticleType.NU_TAU, ParticleType.NU_TAU_BAR,
})

_SHAPES = {
    ParticleType.MU_MINUS: ParticleShape.TRACK,
    ParticleType.MU_PLUS: ParticleShape.TRACK,
    ParticleType.E_MINUS: ParticleShape.CASCADE,
    ParticleType.E_PLUS: ParticleShape.CASCADE,
    ParticleType.TAU_MINUS: ParticleShape.CASCADE,
    ParticleType.TAU_PLUS: ParticleShape.CASCADE,
    ParticleType.GAMMA: ParticleShape.CASCADE,
    ParticleType.HADRON_SHOWER: ParticleShape.CASCADE,
}


def ptype_for_code(code: int) -> ParticleType:
    """Look up the ParticleType for an integer code; ValueError if unknown."""
    try:
        return ParticleType(int(code))
    except ValueError:
        raise ValueError(f"Unknown particle type code {code}") from None


def is_neutrino(code: int) -> bool:
    return int(code) in _NEUTRINOS


def particle_shape(code: int) -> ParticleShape:
    """Track for muons, cascade for showering particles, else UNKNOWN."""
    return _SHAPES.get(int(code), ParticleShape.UNKNOWN)
