import math
import unittest

import numpy as np

from convkin.constants import R_KJ
from convkin.errors import InvalidArgumentError, NumericFaultError
from convkin.examples import FAS_CONCENTRATIONS, fas_reductase_reaction
from convkin.models import SideTerm
from convkin.thermo import (
    FixedEquilibrium,
    GibbsEquilibrium,
    equilibrium_constant,
    flux_ratio,
    haldane_equilibrium_constant,
    haldane_kcat_minus,
    reaction_gibbs_energy,
    reaction_quotient,
    standard_gibbs_energy,
)


class TestEquilibriumConstant(unittest.TestCase):
    def test_zero_gibbs_energy(self):
        self.assertEqual(equilibrium_constant(0.0, 310.0), 1.0)

    def test_fas_value(self):
        keq = equilibrium_constant(-16.8, 298.15)
        self.assertAlmostEqual(keq, math.exp(16.8 / (R_KJ * 298.15)))
        self.assertGreater(keq, 800.0)
        self.assertLess(keq, 950.0)

    def test_round_trip_with_gibbs_energy(self):
        keq = equilibrium_constant(-7.3, 300.0)
        self.assertAlmostEqual(standard_gibbs_energy(keq, 300.0), -7.3)

    def test_joule_units(self):
        keq = equilibrium_constant(-16800.0, 298.15, gas_constant=R_KJ * 1e3)
        self.assertAlmostEqual(keq, equilibrium_constant(-16.8, 298.15))

    def test_out_of_range(self):
        with self.assertRaises(NumericFaultError):
            equilibrium_constant(-5000.0, 298.15)
        with self.assertRaises(NumericFaultError):
            equilibrium_constant(5000.0, 298.15)

    def test_invalid_inputs(self):
        with self.assertRaises(InvalidArgumentError):
            equilibrium_constant(-16.8, 0.0)
        with self.assertRaises(InvalidArgumentError):
            equilibrium_constant(-16.8, -10.0)
        with self.assertRaises(InvalidArgumentError):
            equilibrium_constant(float("nan"), 298.15)

    def test_models(self):
        self.assertAlmostEqual(
            GibbsEquilibrium(-16.8).equilibrium_constant(298.15), equilibrium_constant(-16.8, 298.15)
        )
        self.assertFalse(GibbsEquilibrium(-16.8).is_override)
        fixed = FixedEquilibrium(270.0)
        self.assertEqual(fixed.equilibrium_constant(310.0), 270.0)
        self.assertTrue(fixed.is_override)
        with self.assertRaises(InvalidArgumentError):
            FixedEquilibrium(0.0)
        with self.assertRaises(InvalidArgumentError):
            fixed.equilibrium_constant(0.0)


class TestHaldane(unittest.TestCase):
    def setUp(self):
        self.left = [SideTerm(1.0, 2, 0.3), SideTerm(1.0, 1, 0.05)]
        self.right = [SideTerm(1.0, 3, 1.7)]

    def test_identity_holds(self):
        for keq in (1e-6, 0.5, 1.0, 877.0, 1e9):
            for kcat_plus in (0.01, 1.0, 250.0):
                kcat_minus = haldane_kcat_minus(kcat_plus, keq, self.left, self.right)
                recovered = haldane_equilibrium_constant(kcat_plus, kcat_minus, self.left, self.right)
                self.assertTrue(math.isclose(recovered, keq, rel_tol=1e-12))

    def test_explicit_value(self):
        # 10 * 1.7**3 / (2 * 0.3**2 * 0.05)
        expected = 10.0 * 1.7**3 / (2.0 * 0.3**2 * 0.05)
        self.assertAlmostEqual(haldane_kcat_minus(10.0, 2.0, self.left, self.right), expected)

    def test_invalid(self):
        with self.assertRaises(InvalidArgumentError):
            haldane_kcat_minus(0.0, 1.0, self.left, self.right)
        with self.assertRaises(InvalidArgumentError):
            haldane_kcat_minus(1.0, -1.0, self.left, self.right)


class TestReactionQuotient(unittest.TestCase):
    def test_fas_quotient_excludes_protons(self):
        reaction = fas_reductase_reaction()
        quotient = reaction_quotient(FAS_CONCENTRATIONS, reaction, exclude=("H",))
        self.assertAlmostEqual(quotient, (0.1 * 0.2) / (1.0 * 0.5))

    def test_zero_substrate(self):
        reaction = fas_reductase_reaction()
        concentrations = dict(FAS_CONCENTRATIONS, AcacCoA=0.0)
        with self.assertRaises(NumericFaultError):
            reaction_quotient(concentrations, reaction)

    def test_missing_species(self):
        with self.assertRaises(InvalidArgumentError):
            reaction_quotient({"AcacCoA": 1.0}, fas_reductase_reaction())

    def test_reaction_gibbs_energy(self):
        self.assertAlmostEqual(reaction_gibbs_energy(-16.8, 1.0, 298.15), -16.8)
        dg = reaction_gibbs_energy(-16.8, 0.04, 298.15)
        self.assertAlmostEqual(dg, -16.8 + R_KJ * 298.15 * math.log(0.04))


class TestFluxRatio(unittest.TestCase):
    def test_equilibrium_and_direction(self):
        self.assertAlmostEqual(float(flux_ratio(0.0, 298.0)), 1.0)
        ratios = flux_ratio(np.array([-10.0, 0.0, 10.0]), 298.0)
        self.assertGreater(ratios[0], 1.0)
        self.assertLess(ratios[2], 1.0)
        self.assertAlmostEqual(ratios[0] * ratios[2], 1.0)


if __name__ == '__main__':
    unittest.main()
