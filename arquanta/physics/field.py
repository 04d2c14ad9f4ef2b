import logging
import math

import numba
import numpy as np
from scipy.interpolate import RegularGridInterpolator

from .constants import ConfigurationError

log = logging.getLogger("arquanta.physics.field")

OFFSET_FORMULAS = ("legacy", "vector")
_LEGACY = 0
_VECTOR = 1


class ConstantOffsetMap:
    """Distortion map returning the same relative field offset (x, y, z)
    everywhere."""

    def __init__(self, x=0.0, y=0.0, z=0.0):
        self.offset = np.array([x, y, z], dtype=np.float64)

    def __call__(self, positions, **kwargs):
        return np.tile(self.offset, (len(positions), 1))

    def __repr__(self):
        return f"ConstantOffsetMap(x={self.offset[0]}, y={self.offset[1]}, z={self.offset[2]})"


class GridOffsetMap:
    """Relative field offsets (x, y, z) linearly interpolated on a regular
    grid.

    Args:
        x, y, z: grid coordinates [cm], each strictly ascending
        offsets: array of shape (len(x), len(y), len(z), 3)

    Positions outside of the grid are not distorted.
    """

    def __init__(self, x, y, z, offsets):
        offsets = np.asarray(offsets, dtype=np.float64)
        grid = tuple(np.asarray(axis, dtype=np.float64) for axis in (x, y, z))
        expected_shape = tuple(len(axis) for axis in grid) + (3,)
        if offsets.shape != expected_shape:
            raise ValueError(
                f"Offsets must have shape {expected_shape} for this grid, got {offsets.shape}"
            )
        self.interpolator = RegularGridInterpolator(
            grid, offsets, method="linear", bounds_error=False, fill_value=0.0
        )

    @classmethod
    def from_dict(cls, data):
        return cls(data["x"], data["y"], data["z"], data["offsets"])

    def __call__(self, positions, **kwargs):
        return self.interpolator(np.asarray(positions, dtype=np.float64).reshape(-1, 3))


def clip_field(field):
    """Non-finite and negative field values are set to 0."""
    field = float(field)
    if math.isfinite(field) and field > 0:
        return field
    return 0.0


def clip_field_array(fields):
    fields = np.asarray(fields, dtype=np.float64)
    return np.where(np.isfinite(fields) & (fields > 0), fields, 0.0)


@numba.njit(error_model="numpy")
def _perturbed_field(formula, efield, offset_x, offset_y, offset_z):
    x = efield + efield * offset_x
    if formula == _LEGACY:
        # y and z offsets enter twice
        y = efield * offset_y + efield * offset_y
        z = efield * offset_z + efield * offset_z
    else:
        y = efield * offset_y
        z = efield * offset_z
    return np.sqrt(x * x + y * y + z * z)


@numba.njit(error_model="numpy")
def _perturbed_field_array(formula, efield, offsets):
    result = np.zeros(len(offsets), dtype=np.float64)
    for i in range(len(offsets)):
        result[i] = _perturbed_field(
            formula, efield, offsets[i, 0], offsets[i, 1], offsets[i, 2]
        )
    return result


class FieldModel:
    """Effective drift field at a deposit position.

    With the distortion disabled the nominal field is returned unchanged.
    Otherwise the relative field offsets at the position are taken from
    offset_map, any callable mapping an (n, 3) position array to an (n, 3)
    offset array. Non-finite and negative fields are clipped to 0.
    """

    def __init__(self, offset_map=None, enabled=False, offset_formula="legacy"):
        if offset_formula not in OFFSET_FORMULAS:
            raise ConfigurationError(
                f"Unknown field offset formula {offset_formula!r}. "
                f"Available formulas: {OFFSET_FORMULAS}"
            )
        if enabled and offset_map is None:
            raise ConfigurationError("Field distortion is enabled but no offset map was given")

        self.offset_map = offset_map
        self.enabled = bool(enabled)
        self.offset_formula = offset_formula
        self._formula = _LEGACY if offset_formula == "legacy" else _VECTOR

        if self.enabled:
            log.debug(f"Field distortion enabled using {offset_map} ({offset_formula} formula)")

    def field_offsets(self, positions):
        positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
        offsets = np.asarray(self.offset_map(positions), dtype=np.float64)
        return offsets.reshape(-1, 3)

    def perturbed_field(self, nominal_field, position):
        if not self.enabled:
            return float(nominal_field)
        offset_x, offset_y, offset_z = self.field_offsets(position)[0]
        return _perturbed_field(
            self._formula, float(nominal_field), offset_x, offset_y, offset_z
        )

    def effective_field(self, nominal_field, position):
        return clip_field(self.perturbed_field(nominal_field, position))

    def perturbed_field_array(self, nominal_field, positions):
        """Field magnitudes before clipping, may contain NaN."""
        positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
        if not self.enabled:
            return np.full(len(positions), nominal_field, dtype=np.float64)
        if len(positions) == 0:
            return np.zeros(0, dtype=np.float64)
        return _perturbed_field_array(
            self._formula, float(nominal_field), self.field_offsets(positions)
        )

    def effective_field_array(self, nominal_field, positions):
        return clip_field_array(self.perturbed_field_array(nominal_field, positions))
