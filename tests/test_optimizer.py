import logging
import numpy as np
import pytest
import gpreg.num as gnp
from gpreg import ConvergenceError, FactorizationError, GaussianProcess
from gpreg.config import get_config
from gpreg.core.optimizer import gradient_ascent, pack_parameters
from gpreg.kernel import ConstantPrior, Gaussian, ZeroPrior


def _sine_model(noise=0.1):
    xi = gnp.arange(8).reshape(-1, 1) * (5.0 / 7.0)
    zi = np.sin(xi[:, 0])
    return GaussianProcess(ZeroPrior(), Gaussian(1.0, 1.0), noise, xi, zi)


class NaNGradientKernel(Gaussian):
    def gradient(self, x, y):
        return gnp.full(gnp.sqdist(x, y).shape + (2,), np.nan)


class NaNGradientPrior(ConstantPrior):
    def gradient(self, x):
        return gnp.full((x.shape[0], 1), np.nan)


def _run(fit, *args, **kwargs):
    # optimization history, whether the ascent completed or stopped
    try:
        return fit(*args, **kwargs)
    except ConvergenceError as exc:
        return exc.info


def _assert_non_decreasing(history, tol):
    for a, b in zip(history[:-1], history[1:]):
        assert b >= a - tol * (1.0 + abs(a))


def test_likelihood_increases_with_a_small_rate():
    model = _sine_model()
    ll0 = model.likelihood()
    info = gradient_ascent(model, 20, 1e-5)
    history = info["history_likelihood"]
    assert len(history) == 21
    assert history[0] == pytest.approx(ll0)
    for a, b in zip(history[:-1], history[1:]):
        assert b >= a - 1e-9
    assert history[-1] > history[0]
    assert model.likelihood() == pytest.approx(history[-1])


def test_info_dict():
    model = _sine_model()
    p0 = pack_parameters(model, False, True)
    info = model.optimize_parameters(5, 1e-5)
    assert info["iterations"] == 5
    assert info["total_time"] >= 0.0
    assert len(info["history_params"]) == 6
    assert gnp.allclose(info["initial_params"], p0)
    assert gnp.allclose(info["final_params"], pack_parameters(model, False, True))
    assert gnp.allclose(info["history_params"][-1], info["final_params"])
    assert not gnp.allclose(info["final_params"], p0)


def test_cache_matches_final_parameters():
    model = _sine_model()
    model.optimize_parameters(10, 1e-5)
    C = model.cholesky.copy()
    alpha = model.alpha.copy()
    model.refresh()
    assert gnp.allclose(model.cholesky, C)
    assert gnp.allclose(model.alpha, alpha)


def test_prior_gradient_ascent_moves_the_constant_towards_the_data():
    xi = gnp.arange(6).reshape(-1, 1)
    zi = 5.0 + 0.1 * np.cos(xi[:, 0])
    model = GaussianProcess(ConstantPrior(0.0), Gaussian(1.0, 1.0), 0.5, xi, zi)
    info = model.optimize_parameters(10, 0.1, fit_prior=True, fit_kernel=False)
    assert 0.0 < model.prior.c < 5.5
    assert model.prior.c > 3.0
    assert info["history_likelihood"][-1] > info["history_likelihood"][0]
    assert model.kernel.get_parameters().tolist() == [1.0, 1.0]
    assert model.noise == 0.5


def test_divergence_restores_last_valid_parameters():
    xi = [[0.0], [3.0], [6.0]]
    zi = [0.001, -0.001, 0.002]
    model = GaussianProcess(ZeroPrior(), Gaussian(1.0, 1.0), 0.1, xi, zi)
    with pytest.raises(ConvergenceError) as excinfo:
        model.optimize_parameters(10, 10.0)
    err = excinfo.value
    assert err.iteration == 1
    assert isinstance(err.__cause__, FactorizationError)
    assert model.kernel.get_parameters().tolist() == [1.0, 1.0]
    assert model.noise == 0.1
    ll = model.likelihood()
    assert gnp.isfinite(ll)
    assert ll == pytest.approx(err.info["history_likelihood"][0])
    # the model is still usable
    assert gnp.isfinite(model.predict([1.0]))


def test_non_finite_gradient_is_reported():
    model = GaussianProcess(ZeroPrior(), NaNGradientKernel(), 0.1, [[0.0], [1.0]], [0.0, 1.0])
    with pytest.raises(ConvergenceError) as excinfo:
        model.optimize_parameters(3, 0.01)
    assert excinfo.value.iteration == 0
    assert excinfo.value.info["history_likelihood"] == []
    assert model.kernel.get_parameters().tolist() == [1.0, 1.0]


def test_invalid_starting_point():
    model = GaussianProcess(ZeroPrior(), Gaussian(), 0.1, [[1.0], [1.0]], [0.0, 1.0])
    model.noise = 0.0
    with pytest.raises(FactorizationError):
        model.optimize_parameters(3, 0.01)


@pytest.mark.parametrize("iterations, rate", [(0, 0.01), (-1, 0.01), (2.5, 0.01), (3, 0.0), (3, -1.0)])
def test_invalid_arguments(iterations, rate):
    model = _sine_model()
    with pytest.raises(ValueError):
        model.optimize_parameters(iterations, rate)


def test_nothing_to_optimize():
    model = GaussianProcess(ZeroPrior(), Gaussian(), 0.1, [[0.0], [1.0]], [0.0, 1.0])
    info = model.optimize_parameters(3, 0.01, fit_prior=True, fit_kernel=False)
    assert info["iterations"] == 0
    assert info["history_likelihood"] == []


def test_verbose_logs_at_info_level(caplog):
    model = _sine_model()
    with caplog.at_level(logging.INFO, logger="gpreg"):
        model.optimize_parameters(3, 1e-5, verbose=True)
    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
    assert any("iteration 0" in m for m in messages)
    assert any("final log-likelihood" in m for m in messages)


def test_non_finite_prior_gradient_is_reported():
    model = GaussianProcess(NaNGradientPrior(0.5), Gaussian(), 0.1, [[0.0], [1.0]], [0.0, 1.0])
    with pytest.raises(ConvergenceError) as excinfo:
        model.optimize_parameters(3, 0.01, fit_prior=True, fit_kernel=False)
    assert excinfo.value.iteration == 0
    assert model.prior.c == 0.5


def test_likelihood_drop_stops_the_ascent():
    xi = gnp.arange(6).reshape(-1, 1)
    zi = 5.0 + 0.1 * np.cos(xi[:, 0])
    model = GaussianProcess(ConstantPrior(0.0), Gaussian(1.0, 1.0), 0.5, xi, zi)
    ll0 = model.likelihood()
    # the first step overshoots the constant far beyond the data
    with pytest.raises(ConvergenceError) as excinfo:
        model.optimize_parameters(10, 10.0, fit_prior=True, fit_kernel=False)
    err = excinfo.value
    assert err.iteration == 1
    assert err.__cause__ is None
    assert "decreased" in str(err)
    assert model.prior.c == 0.0
    assert model.likelihood() == pytest.approx(ll0)
    assert gnp.allclose(err.info["final_params"], gnp.array([0.0]))


def test_refit_after_adding_samples_keeps_a_sane_model():
    tol = get_config().decrease_tolerance
    model = GaussianProcess.default([[0.8], [1.2], [3.8], [4.2]], [3.0, 4.0, -2.0, -2.0])
    info = _run(model.optimize_parameters, 1000, 0.01)
    _assert_non_decreasing(info["history_likelihood"], tol)

    info = _run(
        model.add_samples_fit,
        [[0.0], [1.0], [2.0], [5.0]],
        [2.0, 3.0, -1.0, -2.0],
        fit_prior=True,
        fit_kernel=True,
    )
    history = info["history_likelihood"]
    _assert_non_decreasing(history, tol)
    assert model.nb_samples == 8
    assert model.prior.c == pytest.approx(0.625)
    assert model.likelihood() == pytest.approx(history[-1])
    assert model.likelihood() >= history[0] - tol * (1.0 + abs(history[0]))

    params = gnp.concatenate((model.kernel.get_parameters(), gnp.array([model.noise])))
    assert gnp.all(gnp.isfinite(params))
    assert abs(model.noise) < 10.0
    assert model.kernel.ampl > 0.0
    pred = model.predict_several([[1.0], [2.0], [3.0]])
    assert gnp.all(gnp.abs(pred) < 20.0)
    # predictions follow the data, not the prior constant
    assert not gnp.allclose(pred, 0.625, atol=1e-2)
    assert model.predict([1.0]) > 2.0
