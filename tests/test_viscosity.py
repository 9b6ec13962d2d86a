import math
import unittest

import numpy as np

from fluidtransport.constants import AIR_MU_REF, AIR_SUTHERLAND_S, AIR_T_REF
from fluidtransport.verification import central_difference
from fluidtransport.viscosity import ConstantViscosity, SutherlandViscosity


class TestConstantViscosity(unittest.TestCase):
    def test_value_and_derivatives(self):
        model = ConstantViscosity(1.8e-5)
        for T, rho in [(100.0, 0.1), (300.0, 1.2), (2500.0, 80.0)]:
            state = model.evaluate(T, rho)
            self.assertEqual(state.mu, 1.8e-5)
            self.assertEqual(state.dmudrho_T, 0.0)
            self.assertEqual(state.dmudT_rho, 0.0)
            self.assertTrue(state.ok)

    def test_default_is_zero(self):
        model = ConstantViscosity()
        self.assertEqual(model.viscosity(300.0, 1.0), 0.0)

    def test_broadcasts_over_arrays(self):
        model = ConstantViscosity(2.0)
        mu = model.viscosity(np.array([200.0, 300.0, 400.0]), 1.0)
        np.testing.assert_array_equal(mu, [2.0, 2.0, 2.0])


class TestSutherlandViscosity(unittest.TestCase):
    def setUp(self):
        self.model = SutherlandViscosity(mu_ref=AIR_MU_REF, t_ref=AIR_T_REF, s=AIR_SUTHERLAND_S)

    def test_air_at_300_k(self):
        mu = self.model.viscosity(300.0, 1.17)
        self.assertAlmostEqual(mu, 1.846e-5, delta=1.846e-5 * 1e-3)

    def test_reference_temperature_returns_reference_viscosity(self):
        self.assertAlmostEqual(self.model.viscosity(AIR_T_REF, 1.0), AIR_MU_REF, places=15)

    def test_no_density_dependence(self):
        for rho in [0.01, 1.0, 500.0]:
            dmudrho, _ = self.model.viscosity_derivatives(300.0, rho)
            self.assertEqual(dmudrho, 0.0)
        self.assertEqual(self.model.viscosity(300.0, 0.01), self.model.viscosity(300.0, 500.0))

    def test_derivative_matches_closed_form(self):
        mu_ref, t_ref, s = AIR_MU_REF, AIR_T_REF, AIR_SUTHERLAND_S
        T = 450.0
        expected = mu_ref * (
            1.5 * (T / t_ref) ** 0.5 * ((t_ref + s) / (T + s))
            - (T / t_ref) ** 1.5 * (t_ref + s) / (T + s) / (T + s)
        )
        _, dmudT = self.model.viscosity_derivatives(T, 1.0)
        self.assertAlmostEqual(dmudT, expected, delta=abs(expected) * 1e-14)

    def test_derivative_exact_for_unit_reference_temperature(self):
        model = SutherlandViscosity(mu_ref=AIR_MU_REF, t_ref=1.0, s=AIR_SUTHERLAND_S)
        self.assertTrue(model.exact_derivatives)
        for T in [150.0, 200.0, 300.0, 500.0, 1000.0, 2000.0]:
            _, analytic = model.viscosity_derivatives(T, 1.0)
            numeric = central_difference(lambda t: model.viscosity(t, 1.0), T, 1e-4)
            self.assertLess(abs(analytic - numeric) / abs(analytic), 1e-6, msg=f"T = {T}")

    def test_closed_form_first_term_lacks_reference_temperature_factor(self):
        mu_ref, t_ref, s = AIR_MU_REF, AIR_T_REF, AIR_SUTHERLAND_S
        self.assertFalse(self.model.exact_derivatives)
        for T in [150.0, 300.0, 1000.0]:
            _, analytic = self.model.viscosity_derivatives(T, 1.0)
            numeric = central_difference(lambda t: self.model.viscosity(t, 1.0), T, 1e-4)
            first = 1.5 * mu_ref * (T / t_ref) ** 0.5 * (t_ref + s) / (T + s)
            # true slope has first / t_ref in place of first
            self.assertAlmostEqual(
                analytic - numeric, first * (1.0 - 1.0 / t_ref), delta=abs(first) * 1e-6, msg=f"T = {T}"
            )

    def test_array_evaluation_matches_scalar(self):
        temperatures = np.array([250.0, 300.0, 350.0])
        state = self.model.evaluate(temperatures, 1.0)
        for i, T in enumerate(temperatures):
            self.assertAlmostEqual(state.mu[i], self.model.viscosity(T, 1.0), places=18)
            self.assertEqual(state.dmudrho_T[i], 0.0)

    def test_singular_inputs_give_ieee_values(self):
        state = SutherlandViscosity(mu_ref=1.0, t_ref=100.0, s=-100.0).evaluate(100.0, 1.0)
        self.assertTrue(math.isnan(state.mu) or math.isinf(state.mu))
        self.assertFalse(math.isfinite(state.dmudT_rho))

    def test_default_parameters_do_not_raise(self):
        state = SutherlandViscosity().evaluate(300.0, 1.0)
        self.assertFalse(math.isfinite(state.mu))


if __name__ == '__main__':
    unittest.main()
