import os
import runpy
import unittest
import gpreg.num as gnp

EXAMPLES_DIR = os.path.join(os.path.dirname(__file__), "..", "examples")


def _load(name):
    return runpy.run_path(os.path.join(EXAMPLES_DIR, name + ".py"))


class TestExamples(unittest.TestCase):
    def test_01(self):
        model_1d, model_2d = _load("gpreg_example01_1d_regression")["main"]()

        params = gnp.concatenate(
            (model_1d.kernel.get_parameters(), gnp.array([model_1d.noise]))
        )
        self.assertTrue(gnp.all(gnp.isfinite(params)))
        self.assertLess(abs(model_1d.noise), 10.0)
        self.assertTrue(gnp.isfinite(model_1d.likelihood()))
        pred = model_1d.predict_several([[1.0], [2.0], [3.0]])
        self.assertTrue(gnp.all(gnp.abs(pred) < 20.0))
        # the model still follows the data instead of the prior constant
        self.assertFalse(gnp.allclose(pred, model_1d.prior.c, atol=1e-2))
        self.assertGreater(model_1d.predict([1.0]), 2.0)

        mean = model_2d.predict([1.0, 0.4])
        self.assertTrue(2.0 < mean < 4.5)


if __name__ == "__main__":
    unittest.main()
