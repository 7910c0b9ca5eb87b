import unittest

import sympy as sp

from convkin.errors import InvalidArgumentError, NumericFaultError
from convkin.kinetics import (
    ConvenienceKinetics,
    activation_factor,
    build_rate,
    convenience_rate,
    inhibition_factor,
    saturation_polynomial,
)
from convkin.models import Participant, Reaction, SideTerm


class TestConvenienceRate(unittest.TestCase):
    def test_stoichiometry_scaling(self):
        # 2A + B <=> 3C: (4 - 0) / ((1 + 2 + 4) * (1 + 1) - 1) = 4/13
        rate = build_rate(
            [2.0, 1.0], [0.0], [2, 1], [3], [1.0, 1.0], [1.0], 1.0, 1.0, 1.0
        )
        self.assertAlmostEqual(rate, 4.0 / 13.0)

    def test_exact_rational_with_sympy_numbers(self):
        one = sp.Integer(1)
        rate = build_rate(
            [sp.Integer(2), one], [sp.Integer(0)], [2, 1], [3], [one, one], [one], one, one, one
        )
        self.assertEqual(rate, sp.Rational(4, 13))

    def test_sum_form_stoichiometry(self):
        rate = build_rate(
            [2.0, 1.0], [0.0], [2, 1], [3], [1.0, 1.0], [1.0], 1.0, 1.0, 1.0, denominator="sum"
        )
        # 7 * 2 + 1 - 1 = 14
        self.assertAlmostEqual(rate, 4.0 / 14.0)

    def test_zero_at_equilibrium(self):
        kcat_plus, kcat_minus = 2.0, 3.0
        km_a, km_b, km_c = 0.5, 2.0, 1.5
        a, b = 1.0, 1.0
        forward = (a / km_a) ** 2 * (b / km_b)
        c = km_c * (kcat_plus * forward / kcat_minus) ** (1.0 / 3.0)

        left = [SideTerm(a, 2, km_a), SideTerm(b, 1, km_b)]
        right = [SideTerm(c, 3, km_c)]
        for form in ("product", "sum"):
            rate = convenience_rate(left, right, kcat_plus, kcat_minus, 0.7, denominator=form)
            self.assertAlmostEqual(rate, 0.0, places=12)

    def test_sign_follows_displacement_from_equilibrium(self):
        left = [SideTerm(1.0, 1, 1.0)]
        self.assertGreater(convenience_rate(left, [SideTerm(0.1, 1, 1.0)], 1.0, 1.0, 1.0), 0.0)
        self.assertLess(convenience_rate(left, [SideTerm(10.0, 1, 1.0)], 1.0, 1.0, 1.0), 0.0)

    def test_single_substrate_reduction_in_sum_form(self):
        S, P = sp.symbols("S P", nonnegative=True)
        Ks, Kp, kp, km, E = sp.symbols("K_S K_P k_p k_m E_tot", positive=True)
        rate = convenience_rate([SideTerm(S, 1, Ks)], [SideTerm(P, 1, Kp)], kp, km, E, denominator="sum")
        classical = E * (kp * S / Ks - km * P / Kp) / (1 + S / Ks + P / Kp)
        self.assertEqual(sp.cancel(rate - classical), 0)

    def test_single_substrate_product_form(self):
        S, P = sp.symbols("S P", nonnegative=True)
        Ks, Kp, kp, km, E = sp.symbols("K_S K_P k_p k_m E_tot", positive=True)
        rate = convenience_rate([SideTerm(S, 1, Ks)], [SideTerm(P, 1, Kp)], kp, km, E)
        x, y = S / Ks, P / Kp
        expected = E * (kp * x - km * y) / (x + y + x * y)
        self.assertEqual(sp.cancel(rate - expected), 0)

    def test_symbolic_and_numeric_agree(self):
        A, B, C = sp.symbols("A B C", nonnegative=True)
        Ka, Kb, Kc = sp.symbols("K_A K_B K_C", positive=True)
        kp, km, E = sp.symbols("k_p k_m E", positive=True)
        expr = build_rate([A, B], [C], [2, 1], [3], [Ka, Kb], [Kc], kp, km, E)
        values = {A: 1.3, B: 0.4, C: 2.2, Ka: 0.5, Kb: 1.1, Kc: 0.9, kp: 3.0, km: 0.2, E: 0.01}
        numeric = build_rate([1.3, 0.4], [2.2], [2, 1], [3], [0.5, 1.1], [0.9], 3.0, 0.2, 0.01)
        self.assertAlmostEqual(float(expr.subs(values)), numeric, places=12)

    def test_deterministic(self):
        args = ([1.3, 0.4], [2.2], [2, 1], [3], [0.5, 1.1], [0.9], 3.0, 0.2, 0.01)
        self.assertEqual(build_rate(*args), build_rate(*args))

    def test_zero_stoichiometry_species_is_neutral(self):
        with_spectator = build_rate([2.0, 5.0], [1.0], [1, 0], [1], [1.0, 3.0], [1.0], 1.0, 1.0, 1.0)
        without = build_rate([2.0], [1.0], [1], [1], [1.0], [1.0], 1.0, 1.0, 1.0)
        self.assertAlmostEqual(with_spectator, without)

    def test_mismatched_lengths(self):
        with self.assertRaises(InvalidArgumentError):
            build_rate([1.0, 2.0], [1.0], [1], [1], [1.0, 1.0], [1.0], 1.0, 1.0, 1.0)
        with self.assertRaises(InvalidArgumentError):
            build_rate([1.0], [1.0], [1], [1], [1.0], [1.0, 2.0], 1.0, 1.0, 1.0)

    def test_degenerate_side(self):
        with self.assertRaises(InvalidArgumentError):
            build_rate([1.0], [1.0], [0], [1], [1.0], [1.0], 1.0, 1.0, 1.0)
        with self.assertRaises(InvalidArgumentError):
            build_rate([], [1.0], [], [1], [], [1.0], 1.0, 1.0, 1.0)

    def test_invalid_parameters(self):
        for kwargs in (
            {"kcat_plus": 0.0},
            {"kcat_minus": -1.0},
            {"enzyme_total": 0.0},
        ):
            params = {"kcat_plus": 1.0, "kcat_minus": 1.0, "enzyme_total": 1.0, **kwargs}
            with self.assertRaises(InvalidArgumentError):
                convenience_rate([SideTerm(1.0, 1, 1.0)], [SideTerm(1.0, 1, 1.0)], **params)
        with self.assertRaises(InvalidArgumentError):
            SideTerm(1.0, 1, 0.0)
        with self.assertRaises(InvalidArgumentError):
            SideTerm(1.0, -1, 1.0)
        with self.assertRaises(InvalidArgumentError):
            SideTerm(1.0, 1.5, 1.0)
        with self.assertRaises(InvalidArgumentError):
            convenience_rate([SideTerm(1.0, 1, 1.0)], [SideTerm(1.0, 1, 1.0)], 1.0, 1.0, 1.0, "mixed")

    def test_negative_symbolic_parameter_rejected(self):
        k = sp.Symbol("k", negative=True)
        with self.assertRaises(InvalidArgumentError):
            convenience_rate([SideTerm(1.0, 1, 1.0)], [SideTerm(1.0, 1, 1.0)], k, 1.0, 1.0)

    def test_zero_denominator(self):
        # product form: (1 + 0) * (1 + 0) - 1 = 0
        with self.assertRaises(NumericFaultError):
            convenience_rate([SideTerm(0.0, 1, 1.0)], [SideTerm(0.0, 1, 1.0)], 1.0, 1.0, 1.0)
        rate = convenience_rate([SideTerm(0.0, 1, 1.0)], [SideTerm(0.0, 1, 1.0)], 1.0, 1.0, 1.0, "sum")
        self.assertEqual(rate, 0.0)

    def test_nearly_depleted_substrate(self):
        # A <=> B with B = 0: v = x / x = 1 for any x > 0
        for a in (1e-9, 1e-12, 1e-17):
            rate = build_rate([a], [0.0], [1], [1], [1.0], [1.0], 1.0, 1.0, 1.0)
            self.assertAlmostEqual(rate, 1.0, places=10)

    def test_nearly_depleted_both_sides(self):
        # x + y + x*y with x = y = 1e-15
        rate = build_rate([2e-15], [1e-15], [1], [1], [1.0], [1.0], 1.0, 1.0, 1.0)
        self.assertAlmostEqual(rate, 1e-15 / (3e-15 + 2e-30), places=10)

    def test_saturation_polynomial(self):
        self.assertEqual(saturation_polynomial(2, 0), 1)
        self.assertEqual(saturation_polynomial(2, 3), 15)
        x = sp.Symbol("x")
        self.assertEqual(sp.expand(saturation_polynomial(x, 2)), 1 + x + x**2)


class TestModulators(unittest.TestCase):
    def test_unity_without_effector(self):
        self.assertEqual(activation_factor(0.0, 2.0), 1.0)
        self.assertEqual(inhibition_factor(0.0, 2.0), 1.0)

    def test_monotonicity(self):
        effectors = [0.0, 0.1, 1.0, 10.0, 1e3]
        activation = [activation_factor(d, 0.5) for d in effectors]
        inhibition = [inhibition_factor(d, 0.5) for d in effectors]
        self.assertTrue(all(a < b for a, b in zip(activation, activation[1:])))
        self.assertTrue(all(a > b for a, b in zip(inhibition, inhibition[1:])))
        self.assertLess(inhibition_factor(1e12, 0.5), 1e-9)

    def test_invalid_constants(self):
        with self.assertRaises(InvalidArgumentError):
            activation_factor(1.0, 0.0)
        with self.assertRaises(InvalidArgumentError):
            inhibition_factor(1.0, -2.0)


class TestConvenienceKinetics(unittest.TestCase):
    def setUp(self):
        self.reaction = Reaction(
            "A<=>B", (Participant("A", 1, 1.0),), (Participant("B", 1, 1.0),)
        )

    def test_rate_matches_builder(self):
        kinetics = ConvenienceKinetics(self.reaction, kcat_plus=2.0, kcat_minus=1.0, enzyme_total=0.5)
        expected = convenience_rate([SideTerm(1.0, 1, 1.0)], [SideTerm(0.5, 1, 1.0)], 2.0, 1.0, 0.5)
        self.assertAlmostEqual(kinetics.rate({"A": 1.0, "B": 0.5}), expected)

    def test_modulated_rate(self):
        base = ConvenienceKinetics(self.reaction, 2.0, 1.0, 0.5)
        modulated = ConvenienceKinetics(
            self.reaction, 2.0, 1.0, 0.5, activators={"X": 1.0}, inhibitors={"Y": 2.0}
        )
        conc = {"A": 1.0, "B": 0.5, "X": 1.0, "Y": 2.0}
        # activation 1 + 1/1 = 2, inhibition 2 / (2 + 2) = 0.5
        self.assertAlmostEqual(modulated.rate(conc), base.rate(conc))

    def test_missing_concentrations(self):
        kinetics = ConvenienceKinetics(self.reaction, 2.0, 1.0, 0.5, activators={"X": 1.0})
        with self.assertRaises(InvalidArgumentError):
            kinetics.rate({"A": 1.0, "B": 0.5})
        with self.assertRaises(InvalidArgumentError):
            kinetics.rate({"A": 1.0, "X": 0.5})


if __name__ == '__main__':
    unittest.main()
