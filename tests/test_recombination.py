import math
import unittest

import numpy as np

import arquanta
from arquanta.physics import (
    ModBoxRecombination,
    BirksRecombination,
    DEDX_FLOOR,
    step_dedx,
    lar_density,
)


class TestStepDedx(unittest.TestCase):
    def test_dedx(self):
        self.assertEqual(step_dedx(2.0, 0.5), 4.0)

    def test_small_dedx_is_floored(self):
        self.assertEqual(step_dedx(0.1, 1.0), DEDX_FLOOR)
        self.assertEqual(step_dedx(-1.0, 1.0), DEDX_FLOOR)

    def test_zero_step_length(self):
        self.assertEqual(step_dedx(3.0, 0.0), DEDX_FLOOR)


class TestModBoxRecombination(unittest.TestCase):
    def setUp(self):
        self.model = ModBoxRecombination(a=0.930, b=0.212 / lar_density(87.0))

    def test_formula(self):
        dedx, field = 6.0, 0.5
        xi = self.model.b * dedx / field
        self.assertAlmostEqual(
            self.model.recombination(dedx, field), math.log(0.930 + xi) / xi, places=14
        )

    def test_zero_step_length(self):
        self.assertEqual(self.model.recombination(5.0, 0.5, step_length=0.0), 0.0)

    def test_zero_field(self):
        self.assertEqual(self.model.recombination(5.0, 0.0), 0.0)

    def test_recombined_fraction_decreases_with_field(self):
        fields = np.linspace(0.1, 0.5, 20)
        for dedx in [2.1, 5.0, 20.0, 100.0]:
            surviving = np.array([self.model.recombination(dedx, field) for field in fields])
            self.assertTrue(np.all(np.diff(1 - surviving) < 0))

    def test_fraction_in_unit_interval(self):
        dedx = np.logspace(0, 2, 30)
        fields = np.linspace(0.1, 1.0, 30)
        for d in dedx:
            for field in fields:
                recomb = self.model.recombination(d, field)
                self.assertGreaterEqual(recomb, 0.0)
                self.assertLessEqual(recomb, 1.0)

    def test_array_matches_scalar(self):
        energy = np.array([2.0, 0.05, 1.0, 3.0])
        step_length = np.array([0.3, 0.2, 0.0, 1.5])
        field = np.array([0.5, 0.5, 0.5, 0.2])

        dedx, recomb = self.model.recombination_array(energy, step_length, field)

        for i in range(len(energy)):
            scalar_dedx = step_dedx(energy[i], step_length[i])
            self.assertEqual(dedx[i], scalar_dedx)
            self.assertEqual(
                recomb[i], self.model.recombination(scalar_dedx, field[i], step_length[i])
            )


class TestBirksRecombination(unittest.TestCase):
    def setUp(self):
        self.model = BirksRecombination(a=0.800, k=0.0486 / lar_density(87.0))

    def test_formula(self):
        dedx, field = 6.0, 0.5
        self.assertEqual(
            self.model.recombination(dedx, field), 0.800 / (1.0 + dedx * self.model.k / field)
        )

    def test_zero_step_length(self):
        self.assertEqual(self.model.recombination(5.0, 0.5, step_length=0.0), 0.0)

    def test_fraction_in_unit_interval(self):
        dedx = np.logspace(0, 2, 30)
        fields = np.linspace(0.1, 1.0, 30)
        for d in dedx:
            for field in fields:
                recomb = self.model.recombination(d, field)
                self.assertGreaterEqual(recomb, 0.0)
                self.assertLessEqual(recomb, 1.0)

    def test_model_type(self):
        self.assertEqual(self.model.model_type, arquanta.RecombinationModelType.BIRKS)
        self.assertEqual(
            ModBoxRecombination(a=1, b=1).model_type, arquanta.RecombinationModelType.MODBOX
        )


if __name__ == "__main__":
    unittest.main()
