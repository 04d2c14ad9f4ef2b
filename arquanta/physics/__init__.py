from . import recombination
from .recombination import (
    DEDX_FLOOR,
    RecombinationModelType,
    ModBoxRecombination,
    BirksRecombination,
    step_dedx,
    ionization_electrons,
)

from . import scintillation
from .scintillation import (
    ScintillationBucket,
    SPECIES_BUCKETS,
    DEFAULT_BUCKET,
    classify_species,
    scintillation_photons,
)

from . import constants
from .constants import (
    ConfigurationError,
    DetectorConstants,
    PhysicalConstants,
    lar_density,
)

from . import field
from .field import FieldModel, ConstantOffsetMap, GridOffsetMap

from . import calculator
from .calculator import EnergyDepositStep, YieldResult, IonizationScintillationCalculator

__all__ = [
    "RecombinationModelType",
    "ModBoxRecombination",
    "BirksRecombination",
    "ScintillationBucket",
    "ConfigurationError",
    "DetectorConstants",
    "PhysicalConstants",
    "FieldModel",
    "ConstantOffsetMap",
    "GridOffsetMap",
    "EnergyDepositStep",
    "YieldResult",
    "IonizationScintillationCalculator",
]
