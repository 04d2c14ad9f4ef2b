from dataclasses import dataclass
from enum import IntEnum
import math

import numba
import numpy as np

# Guard against spurious dE/dx values, assumes the density of liquid argon
DEDX_FLOOR = 1.0  # MeV/cm

# 1e-3 converts the deposited energy from MeV to GeV
MEV_TO_GEV = 1.0e-3

_MODBOX = 0
_BIRKS = 1


class RecombinationModelType(IntEnum):
    MODBOX = _MODBOX
    BIRKS = _BIRKS


@numba.njit(error_model="numpy")
def step_dedx(energy, step_length):
    """dE/dx [MeV/cm] of a step, floored at DEDX_FLOOR.

    Steps of zero length are degenerate and get the floor value.
    """
    if step_length == 0:
        return DEDX_FLOOR
    dedx = energy / step_length
    if dedx < DEDX_FLOOR:
        dedx = DEDX_FLOOR
    return dedx


@numba.njit(error_model="numpy")
def _recombination(model_type, a, b, dedx, field, step_length):
    if step_length == 0:
        return 0.0
    # Everything recombines without a drift field
    if field == 0:
        return 0.0
    if model_type == _MODBOX:
        xi = b * dedx / field
        return math.log(a + xi) / xi
    return a / (1.0 + dedx * b / field)


@numba.njit(error_model="numpy")
def _ionization_electrons(gev_to_electrons, energy, recomb):
    return gev_to_electrons * MEV_TO_GEV * energy * recomb


@numba.njit(error_model="numpy")
def _recombination_array(model_type, a, b, energy, step_length, field):
    n = len(energy)
    dedx = np.zeros(n, dtype=np.float64)
    recomb = np.zeros(n, dtype=np.float64)
    for i in range(n):
        dedx[i] = step_dedx(energy[i], step_length[i])
        recomb[i] = _recombination(model_type, a, b, dedx[i], field[i], step_length[i])
    return dedx, recomb


@numba.njit(error_model="numpy")
def _ionization_electrons_array(gev_to_electrons, energy, recomb):
    electrons = np.zeros(len(energy), dtype=np.float64)
    for i in range(len(energy)):
        electrons[i] = _ionization_electrons(gev_to_electrons, energy[i], recomb[i])
    return electrons


class _RecombinationBase:
    model_type: RecombinationModelType

    def _coefficients(self):
        raise NotImplementedError

    def recombination(self, dedx, field, step_length=1.0):
        """Fraction of ionization electrons escaping recombination."""
        a, b = self._coefficients()
        return _recombination(
            int(self.model_type), a, b, float(dedx), float(field), float(step_length)
        )

    def recombination_array(self, energy, step_length, field):
        """Return (dedx, recombination) for arrays of deposits."""
        a, b = self._coefficients()
        return _recombination_array(
            int(self.model_type),
            a,
            b,
            np.asarray(energy, dtype=np.float64),
            np.asarray(step_length, dtype=np.float64),
            np.asarray(field, dtype=np.float64),
        )


@dataclass(frozen=True)
class ModBoxRecombination(_RecombinationBase):
    """Modified box model, b is already divided by the argon density."""

    a: float
    b: float

    model_type = RecombinationModelType.MODBOX

    def _coefficients(self):
        return float(self.a), float(self.b)


@dataclass(frozen=True)
class BirksRecombination(_RecombinationBase):
    """Birks law, k is already divided by the argon density."""

    a: float
    k: float

    model_type = RecombinationModelType.BIRKS

    def _coefficients(self):
        return float(self.a), float(self.k)


def ionization_electrons(gev_to_electrons, energy, recomb):
    """Number of ionization electrons, not corrected for attachment during the
    drift."""
    return _ionization_electrons(float(gev_to_electrons), float(energy), float(recomb))


def ionization_electrons_array(gev_to_electrons, energy, recomb):
    return _ionization_electrons_array(
        float(gev_to_electrons),
        np.asarray(energy, dtype=np.float64),
        np.asarray(recomb, dtype=np.float64),
    )
