import numpy as np
import pytest
from ellinest.results import Results
from utils import get_rstate


def make_results(samples, prob):
    samples = np.asarray(samples, dtype=float)
    if samples.ndim == 1:
        samples = samples[:, None]
    prob = np.asarray(prob, dtype=float)
    logwt = np.log(prob)
    n = len(prob)
    return Results(
        dict(nlive=n,
             niter=n,
             ncall=2 * n,
             eff=50.,
             samples=samples,
             samples_u=samples / 10.,
             logl=np.arange(n, dtype=float),
             logvol=-np.arange(1, n + 1, dtype=float),
             logwt=logwt,
             logz=np.logaddexp.accumulate(logwt),
             logzerr=np.zeros(n) + 0.1,
             information=np.zeros(n) + 1.5))


def test_posterior_probability():
    res = make_results([1, 2, 3, 4], [0.1, 0.2, 0.3, 0.4])
    assert np.allclose(res.posterior_probability(), [0.1, 0.2, 0.3, 0.4])
    assert np.isclose(res.posterior_probability().sum(), 1)


def test_parameter_estimation():
    res = make_results([1, 2, 3, 4], [0.1, 0.2, 0.3, 0.4])
    est = res.parameter_estimation()
    assert est.shape == (1, 5)
    mean, median, mode, lower, upper = est[0]
    assert np.isclose(mean, 3.)
    assert median == 3
    assert mode == 4
    # [3, 4] holds 70% of the probability
    assert lower == 1
    assert upper == 0
    # the whole range is needed for 95%
    est = res.parameter_estimation(credible_level=95.)
    assert est[0, 3] == 3


def test_interval_grows_towards_larger_neighbour():
    res = make_results([0, 1, 2, 3, 4], [0.05, 0.3, 0.4, 0.15, 0.1])
    mean, median, mode, lower, upper = res.parameter_estimation()[0]
    assert mode == 2
    # 0.4 + 0.3 = 0.7 > 0.6827
    assert lower == 1
    assert upper == 0


def test_duplicate_values_are_merged():
    res = make_results([2, 1, 1], [0.4, 0.3, 0.3])
    mean, median, mode, lower, upper = res.parameter_estimation()[0]
    assert mode == 1
    assert median == 1
    assert np.isclose(mean, 1.4)


def test_invalid_credible_level():
    res = make_results([1, 2], [0.5, 0.5])
    with pytest.raises(ValueError):
        res.parameter_estimation(credible_level=100.)


def test_immutable():
    res = make_results([1, 2], [0.5, 0.5])
    with pytest.raises(RuntimeError):
        res.logl = np.zeros(2)
    assert 'logl' in res
    assert np.allclose(res['logl'], [0, 1])
    with pytest.raises(KeyError):
        res['blob']
    res2 = res.copy()
    assert np.allclose(res2.samples, res.samples)
    with pytest.raises(ValueError):
        Results(dict(logl=np.zeros(2)))


def test_samples_equal():
    rstate = get_rstate()
    res = make_results([1, 2, 3, 4], [0.1, 0.2, 0.3, 0.4])
    eq = res.samples_equal(rstate=rstate)
    assert eq.shape == (4, 1)
    assert set(eq[:, 0]) <= {1., 2., 3., 4.}


def test_summary(capsys):
    res = make_results([1, 2], [0.5, 0.5])
    res.summary()
    out = capsys.readouterr().out
    assert 'logz' in out
    assert 'nlive: 2' in out


def test_writers(tmp_path):
    res = make_results(np.array([[1, 10], [2, 20], [3, 30], [4, 40]]),
                       [0.1, 0.2, 0.3, 0.4])
    prefix = str(tmp_path / 'par')
    res.write_parameters(prefix)
    assert np.allclose(np.loadtxt(prefix + '000.txt'), [1, 2, 3, 4])
    assert np.allclose(np.loadtxt(prefix + '001.txt'), [10, 20, 30, 40])

    path = str(tmp_path / 'logl.txt')
    res.write_loglikelihood(path)
    assert np.allclose(np.loadtxt(path), [0, 1, 2, 3])

    path = str(tmp_path / 'evidence.txt')
    res.write_evidence_information(path)
    assert np.allclose(np.loadtxt(path), [0, 0.1, 1.5])

    path = str(tmp_path / 'prob.txt')
    res.write_posterior_probability(path)
    assert np.allclose(np.loadtxt(path), [0.1, 0.2, 0.3, 0.4])

    path = str(tmp_path / 'summary.txt')
    res.write_parameter_summary(path)
    summary = np.loadtxt(path)
    assert summary.shape == (2, 5)
    assert np.allclose(summary, res.parameter_estimation())
    with open(path) as fp:
        assert 'Credible level: 68.27 %' in fp.read()


def test_marginal_writer(tmp_path):
    res = make_results(np.array([[2, 10], [1, 10], [1, 30]]),
                       [0.4, 0.3, 0.3])
    path = str(tmp_path / 'summary.txt')
    res.write_parameter_summary(path, write_marginal=True)
    assert np.loadtxt(path).shape == (2, 5)
    marg0 = np.loadtxt(str(tmp_path / 'summary_marginal000.txt'))
    marg1 = np.loadtxt(str(tmp_path / 'summary_marginal001.txt'))
    # identical values are merged and sorted
    assert np.allclose(marg0, [[1, 0.6], [2, 0.4]])
    assert np.allclose(marg1, [[10, 0.7], [30, 0.3]])

    # nothing extra without the option
    path = str(tmp_path / 'other.txt')
    res.write_parameter_summary(path)
    assert not (tmp_path / 'other_marginal000.txt').exists()
