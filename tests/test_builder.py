import numpy as np
import pytest
import gpreg
from gpreg import GaussianProcess, GaussianProcessBuilder
from gpreg.config import get_config
from gpreg.kernel import ConstantPrior, Gaussian, LinearPrior, Matern2

XI = [[0.8], [1.2], [3.8], [4.2]]
ZI = [3.0, 4.0, -2.0, -2.0]


@pytest.fixture
def short_fit():
    config = get_config()
    saved = (config.iterations, config.learning_rate)
    config.update(iterations=20, learning_rate=1e-5)
    yield config
    config.update(iterations=saved[0], learning_rate=saved[1])


def test_defaults():
    builder = GaussianProcessBuilder(XI, ZI)
    assert isinstance(builder.prior, ConstantPrior) and builder.prior.c == 0.0
    assert isinstance(builder.kernel, Gaussian)
    assert builder.noise == 1e-7
    assert not builder.should_fit_prior and not builder.should_fit_kernel
    gp = builder.train()
    default = GaussianProcess.default(XI, ZI)
    assert gp.predict([1.0]) == pytest.approx(default.predict([1.0]))
    assert gp.likelihood() == pytest.approx(default.likelihood())


def test_setters_chain():
    builder = GaussianProcessBuilder(XI, ZI)
    kernel = Matern2(ampl=2.0)
    prior = LinearPrior.default(1)
    assert builder.set_kernel(kernel) is builder
    assert builder.set_prior(prior) is builder
    assert builder.set_noise(0.1) is builder
    assert builder.fit_prior() is builder
    assert builder.fit_kernel() is builder
    assert builder.kernel is kernel and builder.prior is prior
    assert builder.noise == 0.1
    assert builder.should_fit_prior and builder.should_fit_kernel
    assert "Matern2" in repr(builder)


def test_negative_noise():
    with pytest.raises(ValueError):
        GaussianProcessBuilder(XI, ZI).set_noise(-1.0)


def test_invalid_data():
    with pytest.raises(ValueError):
        GaussianProcessBuilder([[0.0], [1.0]], [1.0, 2.0, 3.0])


def test_train_fits_prior():
    gp = GaussianProcessBuilder(XI, ZI).set_noise(0.1).fit_prior().train()
    assert gp.prior.c == pytest.approx(0.75)
    assert gp.kernel.get_parameters().tolist() == [1.0, 1.0]


def test_train_fits_kernel(short_fit):
    xi = np.linspace(0.0, 5.0, 8).reshape(-1, 1)
    zi = np.sin(xi[:, 0])
    untrained = (
        GaussianProcessBuilder(xi, zi).set_kernel(Matern2()).set_noise(0.1).train()
    )
    trained = (
        GaussianProcessBuilder(xi, zi)
        .set_kernel(Matern2())
        .set_noise(0.1)
        .fit_kernel()
        .train()
    )
    assert trained.kernel.get_parameters().tolist() != [1.0, 1.0]
    assert trained.likelihood() > untrained.likelihood()


def test_config_rejects_unknown_entries():
    with pytest.raises(AttributeError):
        get_config().update(learning_rates=0.1)
    assert "learning_rate" in str(gpreg.config.get_config())
    assert gpreg.config.get_backend() == "numpy"
