import numpy as np
import pytest
from ellinest.priors import UniformPrior, NormalPrior, JointPrior
from utils import get_rstate


def test_uniform_prior():
    prior = UniformPrior([-5, 0], [5, 2])
    assert prior.ndim == 2
    assert np.allclose(prior([0.5, 0.5]), [0, 1])
    assert np.allclose(prior.transform([0., 1.]), [-5, 2])
    assert np.allclose(prior.inverse_transform([2.5, 0.5]), [0.75, 0.25])
    assert np.isclose(prior.density([0, 1]), 1. / 20)
    assert np.isclose(prior.logpdf([0, 1]), -np.log(20))
    assert prior.density([6, 1]) == 0


def test_normal_prior():
    prior = NormalPrior([0, 1], [1, 2])
    assert np.allclose(prior([0.5, 0.5]), [0, 1])
    assert np.isclose(prior.logpdf([0, 1]),
                      -np.log(2 * np.pi) - np.log(2))
    assert prior.density([100, 1]) == 0


def test_round_trip():
    rstate = get_rstate()
    prior = JointPrior([UniformPrior([-1], [3]), NormalPrior([0, 0], [1, 3])])
    assert prior.ndim == 3
    u = rstate.uniform(size=(100, 3))
    for cur in u:
        v = prior(cur)
        assert np.allclose(prior.inverse_transform(v), cur)


def test_joint_density():
    prior = JointPrior([UniformPrior([0, 0], [2, 2]), NormalPrior([0], [1])])
    v = np.array([1., 1., 0.])
    assert np.isclose(prior.logpdf(v), -np.log(4) - 0.5 * np.log(2 * np.pi))
    assert np.isclose(prior.density(v), np.exp(prior.logpdf(v)))
    assert prior.density(np.array([3., 1., 0.])) == 0


@pytest.mark.parametrize("args", [
    ([0, 0], [1]),
    ([0, 1], [1, 1]),
])
def test_uniform_invalid(args):
    with pytest.raises(ValueError):
        UniformPrior(*args)


def test_normal_invalid():
    with pytest.raises(ValueError):
        NormalPrior([0, 0], [1, 0])
    with pytest.raises(ValueError):
        JointPrior([])
