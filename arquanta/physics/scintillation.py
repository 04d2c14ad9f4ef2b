from enum import Enum

from immutabledict import immutabledict
import numpy as np


class ScintillationBucket(Enum):
    PROTON = "proton"
    MUON = "muon"
    PION = "pion"
    KAON = "kaon"
    ALPHA = "alpha"
    ELECTRON = "electron"


# PDG code of the 4He nucleus
ALPHA_PDG = 1000020040

SPECIES_BUCKETS = immutabledict(
    {
        2212: ScintillationBucket.PROTON,
        13: ScintillationBucket.MUON,
        -13: ScintillationBucket.MUON,
        211: ScintillationBucket.PION,
        -211: ScintillationBucket.PION,
        321: ScintillationBucket.KAON,
        -321: ScintillationBucket.KAON,
        ALPHA_PDG: ScintillationBucket.ALPHA,
        11: ScintillationBucket.ELECTRON,
        -11: ScintillationBucket.ELECTRON,
        22: ScintillationBucket.ELECTRON,
    }
)

# Everything not listed above scintillates like an electron
DEFAULT_BUCKET = ScintillationBucket.ELECTRON


def classify_species(pdg):
    return SPECIES_BUCKETS.get(int(pdg), DEFAULT_BUCKET)


def species_yield(pdg, species_yields):
    return species_yields[classify_species(pdg)]


def scintillation_photons(energy, pdg, constants):
    """Number of scintillation photons for a deposit of energy [MeV] by a
    particle with PDG code pdg."""
    if constants.scint_by_particle_type:
        return species_yield(pdg, constants.species_yields) * energy
    return constants.scint_yield_factor * constants.scint_yield * energy


def scintillation_photons_array(energy, pdg, constants):
    energy = np.asarray(energy, dtype=np.float64)
    if not constants.scint_by_particle_type:
        return constants.scint_yield_factor * constants.scint_yield * energy

    pdg = np.asarray(pdg)
    if len(pdg) == 0:
        return np.zeros(0, dtype=np.float64)

    # Classify each distinct code only once
    unique_pdg, inverse = np.unique(pdg, return_inverse=True)
    unique_yields = np.array(
        [species_yield(code, constants.species_yields) for code in unique_pdg],
        dtype=np.float64,
    )
    return unique_yields[inverse.reshape(-1)] * energy
