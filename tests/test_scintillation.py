import unittest

import numpy as np

from arquanta.physics import (
    DetectorConstants,
    PhysicalConstants,
    ScintillationBucket,
    DEFAULT_BUCKET,
    classify_species,
    scintillation_photons,
)
from arquanta.physics.scintillation import scintillation_photons_array
from _utils import pdg_codes_for_tests


class TestClassifySpecies(unittest.TestCase):
    def test_known_species(self):
        self.assertEqual(classify_species(2212), ScintillationBucket.PROTON)
        self.assertEqual(classify_species(-13), ScintillationBucket.MUON)
        self.assertEqual(classify_species(211), ScintillationBucket.PION)
        self.assertEqual(classify_species(-321), ScintillationBucket.KAON)
        self.assertEqual(classify_species(1000020040), ScintillationBucket.ALPHA)
        self.assertEqual(classify_species(22), ScintillationBucket.ELECTRON)

    def test_unknown_species(self):
        self.assertEqual(DEFAULT_BUCKET, ScintillationBucket.ELECTRON)
        for pdg in [2112, -2212, 111, 0, 1000180400]:
            self.assertEqual(classify_species(pdg), DEFAULT_BUCKET)

    def test_numpy_integer(self):
        self.assertEqual(classify_species(np.int32(2212)), ScintillationBucket.PROTON)


class TestScintillationByParticleType(unittest.TestCase):
    def setUp(self):
        self.constants = PhysicalConstants.from_detector_constants(
            DetectorConstants(scint_by_particle_type=True)
        )

    def test_proton(self):
        proton_yield = self.constants.species_yields[ScintillationBucket.PROTON]
        self.assertEqual(proton_yield, 19200.0)
        self.assertEqual(scintillation_photons(5.0, 2212, self.constants), proton_yield * 5.0)

    def test_electron_and_gamma_agree(self):
        self.assertEqual(
            scintillation_photons(1.3, 11, self.constants),
            scintillation_photons(1.3, 22, self.constants),
        )

    def test_unknown_species_scintillate_like_electrons(self):
        self.assertEqual(
            scintillation_photons(0.7, 2112, self.constants),
            scintillation_photons(0.7, -11, self.constants),
        )

    def test_array_matches_scalar(self):
        energy = np.linspace(0.1, 3, len(pdg_codes_for_tests))
        pdg = np.array(pdg_codes_for_tests, dtype=np.int32)

        photons = scintillation_photons_array(energy, pdg, self.constants)

        for i in range(len(energy)):
            self.assertEqual(photons[i], scintillation_photons(energy[i], pdg[i], self.constants))

    def test_empty_array(self):
        photons = scintillation_photons_array(np.zeros(0), np.zeros(0, dtype=np.int32), self.constants)
        self.assertEqual(len(photons), 0)


class TestScintillationConstantYield(unittest.TestCase):
    def test_global_yield(self):
        constants = PhysicalConstants.from_detector_constants(
            DetectorConstants(scint_yield=24000.0, scint_yield_factor=0.5)
        )
        for pdg in [2212, 13, 11, 1000020040]:
            self.assertEqual(scintillation_photons(2.0, pdg, constants), 0.5 * 24000.0 * 2.0)

    def test_pre_scale(self):
        constants = PhysicalConstants.from_detector_constants(
            DetectorConstants(scint_pre_scale=0.03, scint_by_particle_type=True)
        )
        self.assertEqual(
            constants.species_yields[ScintillationBucket.ALPHA], 16800.0 * 0.03
        )
        self.assertEqual(constants.scint_yield, 24000.0 * 0.03)


if __name__ == "__main__":
    unittest.main()
