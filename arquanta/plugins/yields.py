from typing import Tuple, Union, Dict

import numpy as np
import strax
import straxen

from ..dtypes import quanta_fields
from ..physics import DetectorConstants, IonizationScintillationCalculator
from ..plugin import ArQuantaBasePlugin

export, __all__ = strax.exporter()


@export
class SeparateYields(ArQuantaBasePlugin):
    """Plugin that calculates the number of ionization electrons and
    scintillation photons of each energy deposit.

    Ionization uses a recombination model (modified box or Birks law)
    evaluated at the effective electric field of the deposit, scintillation
    a constant or particle dependent light yield. The electron numbers are
    not corrected for attachment during the drift.
    """

    __version__ = "0.1.0"

    depends_on = ("energy_deposits", "electric_field_values")
    provides: Tuple[str, ...] = ("quanta",)
    data_kind: Union[str, Dict[str, str]] = "energy_deposits"

    dtype = quanta_fields + strax.time_fields

    save_when = strax.SaveWhen.TARGET

    # Config options
    drift_field = straxen.URLConfig(
        default=0.5,
        type=(int, float),
        help="Nominal drift field [kV/cm]",
    )

    lar_temperature = straxen.URLConfig(
        default=87.0,
        type=(int, float),
        help="Liquid argon temperature [K], used to compute the argon density",
    )

    recombination_model = straxen.URLConfig(
        default="modbox",
        type=str,
        help="Recombination model, 'modbox' (modified box) or 'birks'",
    )

    recomb_a = straxen.URLConfig(
        default=0.800,
        type=(int, float),
        help="Birks law A",
    )

    recomb_k = straxen.URLConfig(
        default=0.0486,
        type=(int, float),
        help="Birks law k [(g/(MeV cm^2)) (kV/cm)], divided by the argon density at setup",
    )

    modbox_a = straxen.URLConfig(
        default=0.930,
        type=(int, float),
        help="Modified box model A",
    )

    modbox_b = straxen.URLConfig(
        default=0.212,
        type=(int, float),
        help="Modified box model B [(g/(MeV cm^2)) (kV/cm)], divided by the argon density at setup",
    )

    gev_to_electrons = straxen.URLConfig(
        default=4.237e7,
        type=(int, float),
        help="Number of ionization electrons per GeV before recombination",
    )

    scint_yield = straxen.URLConfig(
        default=24000.0,
        type=(int, float),
        help="Scintillation yield [photons/MeV]",
    )

    scint_pre_scale = straxen.URLConfig(
        default=1.0,
        type=(int, float),
        help="Scale applied to all scintillation yields, e.g. a photon detection efficiency",
    )

    scint_yield_factor = straxen.URLConfig(
        default=1.0,
        type=(int, float),
        help="Additional scale of scint_yield, only used without particle dependent yields",
    )

    scint_by_particle_type = straxen.URLConfig(
        default=False,
        type=bool,
        help="Use particle dependent scintillation yields",
    )

    proton_scint_yield = straxen.URLConfig(
        default=19200.0,
        type=(int, float),
        help="Scintillation yield of protons [photons/MeV], see scint_by_particle_type",
    )

    muon_scint_yield = straxen.URLConfig(
        default=24000.0,
        type=(int, float),
        help="Scintillation yield of muons [photons/MeV], see scint_by_particle_type",
    )

    pion_scint_yield = straxen.URLConfig(
        default=24000.0,
        type=(int, float),
        help="Scintillation yield of charged pions [photons/MeV], see scint_by_particle_type",
    )

    kaon_scint_yield = straxen.URLConfig(
        default=24000.0,
        type=(int, float),
        help="Scintillation yield of charged kaons [photons/MeV], see scint_by_particle_type",
    )

    alpha_scint_yield = straxen.URLConfig(
        default=16800.0,
        type=(int, float),
        help="Scintillation yield of alphas [photons/MeV], see scint_by_particle_type",
    )

    electron_scint_yield = straxen.URLConfig(
        default=20000.0,
        type=(int, float),
        help="Scintillation yield of electrons, positrons and gammas [photons/MeV]. "
        "Also used for all other particles, see scint_by_particle_type",
    )

    def setup(self):
        super().setup()

        self.detector_constants = self.build_detector_constants()
        # The field is computed by ElectricField, so no distortion here
        self.calculator = IonizationScintillationCalculator.from_detector_constants(
            self.detector_constants
        )
        self.log.debug(f"Using {self.calculator.constants}")

    def build_detector_constants(self):
        return DetectorConstants(
            efield=float(self.drift_field),
            temperature=float(self.lar_temperature),
            recombination_model=self.recombination_model,
            recomb_a=float(self.recomb_a),
            recomb_k=float(self.recomb_k),
            modbox_a=float(self.modbox_a),
            modbox_b=float(self.modbox_b),
            gev_to_electrons=float(self.gev_to_electrons),
            scint_yield=float(self.scint_yield),
            scint_pre_scale=float(self.scint_pre_scale),
            scint_yield_factor=float(self.scint_yield_factor),
            scint_by_particle_type=self.scint_by_particle_type,
            proton_scint_yield=float(self.proton_scint_yield),
            muon_scint_yield=float(self.muon_scint_yield),
            pion_scint_yield=float(self.pion_scint_yield),
            kaon_scint_yield=float(self.kaon_scint_yield),
            alpha_scint_yield=float(self.alpha_scint_yield),
            electron_scint_yield=float(self.electron_scint_yield),
        )

    def compute(self, energy_deposits):
        if len(energy_deposits) == 0:
            return np.zeros(0, dtype=self.dtype)

        result = np.zeros(len(energy_deposits), dtype=self.dtype)
        result["time"] = energy_deposits["time"]
        result["endtime"] = energy_deposits["endtime"]

        quanta = self.calculator.compute_arrays(
            energy=energy_deposits["energy"],
            step_length=energy_deposits["step_length"],
            pdg=energy_deposits["pdg"],
            field=energy_deposits["e_field"],
        )
        for key, values in quanta.items():
            result[key] = values

        n_zero_length = np.sum(energy_deposits["step_length"] == 0)
        if n_zero_length > 0:
            self.log.debug(f"{n_zero_length} deposits with zero step length produce no electrons")

        return result
