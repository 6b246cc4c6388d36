"""
Fit a GP on a 1d dataset, optimize its parameters, update it with new
samples and draw posterior samples. Then fit a GP on a 2d dataset.

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import numpy as np
import gpreg as gp


def example_1d(rng):
    xi = [[0.8], [1.2], [3.8], [4.2]]
    zi = [3.0, 4.0, -2.0, -2.0]
    model = gp.GaussianProcess.default(xi, zi)

    # mean and variance at a single point
    x = [1.0]
    print(f"prediction: {model.predict(x)} ± {np.sqrt(model.predict_variance(x))}")
    print(f"likelihood of the current model: {model.likelihood()}")

    try:
        model.optimize_parameters(1000, 0.01, verbose=True)
    except gp.ConvergenceError as exc:
        print(f"optimization stopped at iteration {exc.iteration}: {exc}")

    # update the model
    xi_new = [[0.0], [1.0], [2.0], [5.0]]
    zi_new = [2.0, 3.0, -1.0, -2.0]
    try:
        model.add_samples_fit(xi_new, zi_new, fit_prior=True, fit_kernel=True)
    except gp.ConvergenceError as exc:
        print(f"refit stopped at iteration {exc.iteration}: {exc}")
    except gp.FactorizationError as exc:
        print(f"cannot factorize the covariance of the extended dataset: {exc}")
        return model

    xt = [[1.0], [2.0], [3.0]]
    print(f"predictions: {model.predict_several(xt)}")

    # 1.0 and 2.0 are training rows: the posterior covariance is nearly
    # singular there, the svd square root handles it
    sampler = model.sample_at_several([[1.0], [2.0]], method="svd")
    for i in range(1, 6):
        print(f"sample {i}: {sampler.sample(rng)}")
    return model


def example_2d():
    xi = [[0.8, 0.1], [1.2, 0.2], [3.8, 0.3], [4.2, 0.5]]
    zi = [3.0, 4.0, -2.0, -2.0]
    model = gp.GaussianProcess.default(xi, zi)

    x = [1.0, 0.4]
    print(f"prediction: {model.predict(x)} ± {np.sqrt(model.predict_variance(x))}")
    return model


def main():
    rng = np.random.default_rng(1234)
    model_1d = example_1d(rng)
    model_2d = example_2d()
    return model_1d, model_2d


if __name__ == "__main__":
    gp.config.set_log_level("INFO")
    main()
