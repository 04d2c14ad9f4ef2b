from typing import NamedTuple
import logging

import numpy as np

from .constants import PhysicalConstants
from .field import FieldModel
from .recombination import step_dedx, ionization_electrons, ionization_electrons_array
from .scintillation import scintillation_photons, scintillation_photons_array

log = logging.getLogger("arquanta.physics.calculator")


class EnergyDepositStep(NamedTuple):
    """Energy deposited by a particle during a single simulation step."""

    energy: float  # MeV
    step_length: float  # cm
    x: float  # cm
    y: float  # cm
    z: float  # cm
    pdg: int

    @property
    def position(self):
        return (self.x, self.y, self.z)


class YieldResult(NamedTuple):
    # Not corrected for electron attachment during the drift
    electrons: float
    photons: float
    energy: float


class IonizationScintillationCalculator:
    """Computes ionization electrons and scintillation photons of energy
    deposits in liquid argon, using separate models for the two.

    The calculator only keeps the read-only constants and the field model.
    Every computation returns its result, so a single instance can serve any
    number of deposits in any order.
    """

    def __init__(self, constants, field_model=None):
        self.constants = constants
        self.field_model = field_model if field_model is not None else FieldModel()

    @classmethod
    def from_detector_constants(cls, detector_constants, offset_map=None, offset_formula="legacy"):
        constants = PhysicalConstants.from_detector_constants(detector_constants)
        field_model = FieldModel(
            offset_map=offset_map,
            enabled=detector_constants.enable_efield_distortion,
            offset_formula=offset_formula,
        )
        return cls(constants, field_model)

    def reset(self):
        """Nothing to reset, there is no state kept between deposits."""

    def effective_field(self, position):
        return self.field_model.effective_field(self.constants.efield, position)

    def effective_field_at_step(self, step):
        return self.effective_field(step.position)

    def compute_ionization(self, energy, step_length, position):
        dedx = step_dedx(float(energy), float(step_length))
        field = self.effective_field(position)
        recomb = self.constants.recombination.recombination(dedx, field, step_length)

        electrons = ionization_electrons(self.constants.gev_to_electrons, energy, recomb)
        if log.isEnabledFor(logging.DEBUG):
            log.debug(
                f"Electrons produced for {energy} MeV deposited with "
                f"{recomb} recombination: {electrons}"
            )
        return electrons

    def compute_ionization_step(self, step):
        return self.compute_ionization(step.energy, step.step_length, step.position)

    def compute_scintillation(self, energy, pdg):
        return scintillation_photons(float(energy), pdg, self.constants)

    def compute_scintillation_step(self, step):
        return self.compute_scintillation(step.energy, step.pdg)

    def compute_ionization_and_scintillation(self, step):
        energy = float(step.energy)
        return YieldResult(
            electrons=self.compute_ionization_step(step),
            photons=self.compute_scintillation_step(step),
            energy=energy,
        )

    def compute_arrays(self, energy, step_length, pdg, field):
        """Vectorized version of compute_ionization_and_scintillation.

        The field at each deposit is passed in, see
        FieldModel.effective_field_array.

        Returns:
            dict with electrons, photons, dedx and recombination arrays
        """
        energy = np.asarray(energy, dtype=np.float64)
        dedx, recomb = self.constants.recombination.recombination_array(
            energy, step_length, field
        )
        electrons = ionization_electrons_array(self.constants.gev_to_electrons, energy, recomb)
        photons = scintillation_photons_array(energy, pdg, self.constants)
        return dict(electrons=electrons, photons=photons, dedx=dedx, recombination=recomb)
