import json
import tempfile
import unittest
from pathlib import Path

from typer.testing import CliRunner

from fluidtransport.cli import app

AIR = {
    "viscosity": {"type": "sutherland", "mu_ref": 1.716e-5, "t_ref": 273.15, "s": 110.4},
    "conductivity": {"type": "constant_prandtl", "prandtl": 0.72},
}


class TestCli(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self.tmp = tempfile.TemporaryDirectory()
        self.config = Path(self.tmp.name) / "air.json"
        self.config.write_text(json.dumps(AIR))

    def tearDown(self):
        self.tmp.cleanup()

    def test_evaluate(self):
        result = self.runner.invoke(
            app, ["evaluate", str(self.config), "--temperature", "300", "--density", "1.17"]
        )
        self.assertEqual(result.exit_code, 0, result.output)
        payload = json.loads(result.output)
        self.assertAlmostEqual(payload["viscosity"]["mu"], 1.846e-5, delta=1e-8)
        self.assertEqual(payload["viscosity"]["dmudrho_T"], 0.0)
        self.assertAlmostEqual(payload["Pr"], 0.72, places=10)

    def test_sweep_writes_output(self):
        output = Path(self.tmp.name) / "sweep.json"
        result = self.runner.invoke(
            app,
            ["sweep", str(self.config), "--t-min", "250", "--t-max", "350", "--points", "5", "--output", str(output)],
        )
        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(output.read_text())
        self.assertEqual(len(data["T"]), 5)
        self.assertEqual(data["T"][0], 250.0)
        self.assertTrue(all(a < b for a, b in zip(data["mu"], data["mu"][1:])))

    def test_sweep_plot(self):
        plot = Path(self.tmp.name) / "sweep.png"
        result = self.runner.invoke(app, ["sweep", str(self.config), "--points", "10", "--plot", str(plot)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(plot.exists())

    def test_check_derivatives_reports_sutherland_closed_form(self):
        result = self.runner.invoke(app, ["check-derivatives", str(self.config), "--temperature", "400"])
        self.assertEqual(result.exit_code, 0, result.output)
        lines = {line.split()[0]: line for line in result.output.splitlines() if line.strip()}
        self.assertTrue(lines["dmudT_rho"].endswith("closed-form"))
        self.assertTrue(lines["dktdT_rho"].endswith("closed-form"))
        self.assertTrue(lines["dmudrho_T"].endswith("ok"))
        self.assertNotIn("FAIL", result.output)

    def test_check_derivatives_constant_models(self):
        self.config.write_text(
            json.dumps({"viscosity": {"type": "constant", "value": 1e-3}, "conductivity": {"type": "constant", "value": 0.6}})
        )
        result = self.runner.invoke(app, ["check-derivatives", str(self.config)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.count(" ok"), 4)

    def test_check_derivatives_unit_reference_temperature_is_enforced(self):
        self.config.write_text(
            json.dumps({"viscosity": {"type": "sutherland", "mu_ref": 1.716e-5, "t_ref": 1.0, "s": 110.4}})
        )
        result = self.runner.invoke(app, ["check-derivatives", str(self.config), "--temperature", "400"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertNotIn("closed-form", result.output)

    def test_evaluate_writes_null_for_non_finite_values(self):
        self.config.write_text(json.dumps({"viscosity": {"type": "constant", "value": 1e-3}, "conductivity": {"type": "constant", "value": 0.0}}))
        result = self.runner.invoke(app, ["evaluate", str(self.config), "--temperature", "300"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertNotIn("Infinity", result.output)
        self.assertIsNone(json.loads(result.output)["Pr"])

    def test_bad_configuration_files_fail_cleanly(self):
        cases = {
            "not json": "{viscosity",
            "non-numeric": json.dumps({"viscosity": {"type": "constant", "value": "abc"}}),
        }
        for label, text in cases.items():
            self.config.write_text(text)
            result = self.runner.invoke(app, ["evaluate", str(self.config), "--temperature", "300"])
            self.assertEqual(result.exit_code, 2, label)
            self.assertNotIsInstance(result.exception, (ValueError, OSError), label)

        missing = Path(self.tmp.name) / "missing.json"
        result = self.runner.invoke(app, ["evaluate", str(missing), "--temperature", "300"])
        self.assertEqual(result.exit_code, 2)

    def test_unknown_model_type_fails(self):
        self.config.write_text(json.dumps({"viscosity": {"type": "bogus"}}))
        result = self.runner.invoke(app, ["evaluate", str(self.config), "--temperature", "300"])
        self.assertEqual(result.exit_code, 2)


if __name__ == '__main__':
    unittest.main()
