import pytest
from scipy.stats import multivariate_normal
import gpreg.num as gnp
from gpreg.core import GaussianProcess
from gpreg.core.covariance import cross_covariance
from gpreg.core.likelihood import log_likelihood, negative_log_likelihood
from gpreg.core.optimizer import (
    log_likelihood_and_gradient,
    pack_parameters,
    unpack_parameters,
)
from gpreg.kernel import ConstantPrior, Gaussian, LinearPrior, Matern2


def _model(prior=None, kernel=None, noise=0.3):
    xi = gnp.arange(8).reshape(-1, 1) * (5.0 / 7.0)
    return GaussianProcess(
        prior if prior is not None else LinearPrior([0.2], 0.1),
        kernel if kernel is not None else Matern2(ampl=1.5, ls=1.2),
        noise,
        xi,
        _outputs(xi),
    )


def _outputs(xi):
    return gnp.exp(-((xi[:, 0] - 2.0) ** 2)) + 0.1 * xi[:, 0]


def test_log_likelihood_is_a_gaussian_log_density():
    model = _model()
    K = cross_covariance(model.xi, model.xi, model.kernel) + model.noise**2 * gnp.eye(8)
    expected = multivariate_normal.logpdf(
        model.zi, mean=model.prior.mean(model.xi), cov=K
    )
    assert model.likelihood() == pytest.approx(expected, rel=1e-10)
    assert negative_log_likelihood(
        model.zi_centered(), model.alpha, model.cholesky
    ) == pytest.approx(-expected, rel=1e-10)


def test_log_likelihood_of_centered_data():
    model = _model(prior=ConstantPrior(0.4))
    ll = log_likelihood(model.zi_centered(), model.alpha, model.cholesky)
    assert ll == pytest.approx(model.likelihood())


@pytest.mark.parametrize(
    "fit_prior, fit_kernel", [(True, False), (False, True), (True, True)]
)
def test_gradient_matches_finite_differences(fit_prior, fit_kernel):
    model = _model()
    ll, grad = log_likelihood_and_gradient(model, fit_prior, fit_kernel)
    p0 = pack_parameters(model, fit_prior, fit_kernel)
    assert grad.shape == p0.shape

    for p in range(p0.shape[0]):

        def ll_of(theta):
            param = p0.copy()
            param[p] = theta
            unpack_parameters(model, param, fit_prior, fit_kernel)
            model.refresh()
            return model.likelihood()

        fd = gnp.derivative_finite_diff(ll_of, p0[p], 1e-5)
        assert grad[p] == pytest.approx(fd, rel=1e-5, abs=1e-6)

    unpack_parameters(model, p0, fit_prior, fit_kernel)
    model.refresh()
    assert model.likelihood() == pytest.approx(ll)


def test_pack_parameters_order():
    model = _model(prior=LinearPrior([0.2], 0.1), kernel=Gaussian(2.0, 3.0), noise=0.5)
    assert gnp.allclose(
        pack_parameters(model, True, True), gnp.array([0.2, 0.1, 2.0, 3.0, 0.5])
    )
    assert gnp.allclose(pack_parameters(model, False, True), gnp.array([2.0, 3.0, 0.5]))
    assert gnp.allclose(pack_parameters(model, True, False), gnp.array([0.2, 0.1]))
    assert pack_parameters(model, False, False).shape == (0,)


def test_unpack_parameters_rejects_wrong_length():
    model = _model()
    with pytest.raises(ValueError):
        unpack_parameters(model, gnp.array([1.0, 2.0, 3.0, 4.0]), False, True)
