import strax
import numpy as np
import straxen

from ..dtypes import electric_fields
from ..common import deposit_positions
from ..physics import FieldModel
from ..physics.field import clip_field_array
from ..plugin import ArQuantaBasePlugin

export, __all__ = strax.exporter()


@export
class ElectricField(ArQuantaBasePlugin):
    """Plugin that calculates the effective electric field at the position of
    each energy deposit."""

    __version__ = "0.1.0"

    depends_on = "energy_deposits"
    provides = "electric_field_values"
    data_kind = "energy_deposits"

    save_when = strax.SaveWhen.TARGET

    dtype = electric_fields + strax.time_fields

    # Config options
    drift_field = straxen.URLConfig(
        default=0.5,
        type=(int, float),
        help="Nominal drift field [kV/cm]",
    )

    enable_efield_distortion = straxen.URLConfig(
        default=False,
        type=bool,
        help="Perturb the nominal drift field with the offsets of efield_offset_map",
    )

    efield_offset_map = straxen.URLConfig(
        default="constant_offset_map://?x=0&y=0&z=0",
        cache=True,
        help="Map of the relative electric field offsets (x, y, z) in the detector. "
        "Only used if enable_efield_distortion is True",
    )

    efield_offset_formula = straxen.URLConfig(
        default="legacy",
        type=str,
        help="How the offsets enter the field magnitude. 'legacy' counts the y and z "
        "offsets twice as in past productions, 'vector' uses the magnitude of the "
        "perturbed field vector",
    )

    def setup(self):
        super().setup()

        offset_map = self.efield_offset_map if self.enable_efield_distortion else None
        self.field_model = FieldModel(
            offset_map=offset_map,
            enabled=self.enable_efield_distortion,
            offset_formula=self.efield_offset_formula,
        )

    def compute(self, energy_deposits):
        if len(energy_deposits) == 0:
            return np.zeros(0, dtype=self.dtype)

        electric_field_array = np.zeros(len(energy_deposits), dtype=self.dtype)
        electric_field_array["time"] = energy_deposits["time"]
        electric_field_array["endtime"] = energy_deposits["endtime"]

        positions = deposit_positions(energy_deposits)
        fields = self.field_model.perturbed_field_array(self.drift_field, positions)

        n_negative_values = np.sum(fields < 0)
        if n_negative_values > 0:
            self.log.warning(
                f"Found {n_negative_values} negative electric field values. Clipping to 0."
            )
        n_non_finite_values = np.sum(~np.isfinite(fields))
        if n_non_finite_values > 0:
            self.log.warning(
                f"Found {n_non_finite_values} NaN or infinite electric field values. Clipping to 0."
            )

        electric_field_array["e_field"] = clip_field_array(fields)

        return electric_field_array
