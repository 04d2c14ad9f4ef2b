from dataclasses import dataclass, field
import logging

from immutabledict import immutabledict

from .recombination import (
    RecombinationModelType,
    ModBoxRecombination,
    BirksRecombination,
)
from .scintillation import ScintillationBucket

log = logging.getLogger("arquanta.physics.constants")


class ConfigurationError(ValueError):
    """Raised when the detector constants cannot describe a valid yield
    model."""


def lar_density(temperature):
    """Liquid argon density [g/cm^3] at a temperature [K].

    Linear parametrization valid around the boiling point.
    """
    return -0.00615 * temperature + 1.928


@dataclass(frozen=True)
class DetectorConstants:
    """Raw calibration constants as delivered by a detector properties
    provider.

    Recombination coefficients are given in their tabulated units, i.e. the
    Birks k and the modified box B are still per unit density. They are
    normalized once in PhysicalConstants.from_detector_constants.
    """

    efield: float = 0.5  # kV/cm
    temperature: float = 87.0  # K
    recombination_model: str = "modbox"
    recomb_a: float = 0.800
    recomb_k: float = 0.0486  # (g/(MeV cm^2)) (kV/cm)
    modbox_a: float = 0.930
    modbox_b: float = 0.212  # (g/(MeV cm^2)) (kV/cm)
    gev_to_electrons: float = 4.237e7
    scint_yield: float = 24000.0  # photons/MeV
    scint_pre_scale: float = 1.0
    scint_yield_factor: float = 1.0
    scint_by_particle_type: bool = False
    proton_scint_yield: float = 19200.0
    muon_scint_yield: float = 24000.0
    pion_scint_yield: float = 24000.0
    kaon_scint_yield: float = 24000.0
    alpha_scint_yield: float = 16800.0
    electron_scint_yield: float = 20000.0
    enable_efield_distortion: bool = False

    def density(self):
        return lar_density(self.temperature)

    def species_scint_yields(self):
        return {
            ScintillationBucket.PROTON: self.proton_scint_yield,
            ScintillationBucket.MUON: self.muon_scint_yield,
            ScintillationBucket.PION: self.pion_scint_yield,
            ScintillationBucket.KAON: self.kaon_scint_yield,
            ScintillationBucket.ALPHA: self.alpha_scint_yield,
            ScintillationBucket.ELECTRON: self.electron_scint_yield,
        }


def parse_recombination_model(selector):
    """Map a model selector (name or RecombinationModelType) to the model
    type."""
    if isinstance(selector, RecombinationModelType):
        return selector
    if isinstance(selector, str):
        try:
            return RecombinationModelType[selector.strip().upper()]
        except KeyError:
            pass
    raise ConfigurationError(
        f"Unknown recombination model {selector!r}. "
        f"Available models: {[m.name.lower() for m in RecombinationModelType]}"
    )


@dataclass(frozen=True)
class PhysicalConstants:
    """Constants used per deposit.

    All density normalizations are already applied, nothing in here is
    recomputed while deposits are processed.
    """

    recombination: object
    gev_to_electrons: float
    efield: float
    scint_yield: float
    scint_yield_factor: float = 1.0
    scint_by_particle_type: bool = False
    species_yields: immutabledict = field(default_factory=immutabledict)

    def __post_init__(self):
        if not isinstance(self.recombination, (ModBoxRecombination, BirksRecombination)):
            raise ConfigurationError(
                f"No valid recombination model selected, got {self.recombination!r}"
            )
        if not self.efield > 0:
            raise ConfigurationError(f"Drift field must be positive, got {self.efield} kV/cm")

    @classmethod
    def from_detector_constants(cls, detector_constants):
        model_type = parse_recombination_model(detector_constants.recombination_model)

        density = detector_constants.density()
        if density <= 0:
            raise ConfigurationError(
                f"Non-physical argon density {density} g/cm^3 "
                f"at {detector_constants.temperature} K"
            )
        log.debug(
            f"Argon density at {detector_constants.temperature} K: {density} g/cm^3"
        )

        # The coefficients are tabulated in g/(MeV cm^2) but dE/dx
        # is evaluated in MeV/cm
        if model_type == RecombinationModelType.MODBOX:
            recombination = ModBoxRecombination(
                a=float(detector_constants.modbox_a),
                b=float(detector_constants.modbox_b) / density,
            )
        else:
            recombination = BirksRecombination(
                a=float(detector_constants.recomb_a),
                k=float(detector_constants.recomb_k) / density,
            )
        log.debug(f"Using recombination model {recombination}")

        pre_scale = float(detector_constants.scint_pre_scale)
        species_yields = immutabledict(
            {
                bucket: float(value) * pre_scale
                for bucket, value in detector_constants.species_scint_yields().items()
            }
        )

        return cls(
            recombination=recombination,
            gev_to_electrons=float(detector_constants.gev_to_electrons),
            efield=float(detector_constants.efield),
            scint_yield=float(detector_constants.scint_yield) * pre_scale,
            scint_yield_factor=float(detector_constants.scint_yield_factor),
            scint_by_particle_type=bool(detector_constants.scint_by_particle_type),
            species_yields=species_yields,
        )
