import math
import pytest
from ellinest.reducers import (SamplerStatistics, Reducer, FerozReducer,
                               ExponentialReducer)


def snapshot(**kwargs):
    d = dict(it=1000,
             nlive=400,
             nlive_init=400,
             min_nlive=400,
             logz=0.,
             logzvar=0.01,
             h=2.,
             logvol=-5.,
             loglstar=-2.,
             logl_max=-1.,
             termination_factor=0.01)
    d.update(kwargs)
    return SamplerStatistics(**d)


def test_feroz_terminate():
    # ln(Z_rem / Z) = -1 - 5 - 0 = -6 < ln(0.01) = -4.6
    assert FerozReducer(0.01).should_terminate(snapshot())
    # ln(Z_rem / Z) = -1 - 2 = -3 > -4.6
    assert not FerozReducer(0.01).should_terminate(snapshot(logvol=-2.))


def test_feroz_default_tolerance():
    red = FerozReducer()
    assert red.should_terminate(snapshot())
    # with a tolerance of 1e-3 the remaining evidence is still too large
    assert not red.should_terminate(snapshot(termination_factor=1e-3))
    assert not FerozReducer(1e-3).should_terminate(snapshot())
    with pytest.raises(ValueError):
        red.should_terminate(snapshot(termination_factor=None))
    with pytest.raises(ValueError):
        FerozReducer(0.)


def test_feroz_start_of_run():
    # before the first dead point the evidence is ~0
    stats = snapshot(logz=-1e300, logvol=0.)
    assert not FerozReducer(0.01).should_terminate(stats)


def test_feroz_next_nlive():
    red = FerozReducer(0.01)
    # constant population
    assert red.next_nlive(snapshot(logvol=-2.)) == 400
    # ratio above one: no reduction
    stats = snapshot(min_nlive=100, logvol=-0.5, logl_max=1.)
    assert red.next_nlive(stats) == 400
    # half way (in log) to the tolerance
    stats = snapshot(min_nlive=100,
                     logvol=0.5 * math.log(0.01),
                     logl_max=0.)
    assert red.next_nlive(stats) == 250
    # at the tolerance
    stats = snapshot(min_nlive=100, logvol=-10.)
    assert red.next_nlive(stats) == 100
    # never increases
    stats = snapshot(nlive=200, min_nlive=100, logvol=-0.5, logl_max=1.)
    assert red.next_nlive(stats) == 200


def test_exponential_reducer():
    red = ExponentialReducer(0.01)
    assert red.should_terminate(snapshot(logvol=-5.))
    assert not red.should_terminate(snapshot(logvol=-4.))
    # the likelihood values do not matter
    assert not red.should_terminate(snapshot(logvol=-4., logl_max=-100.))
    assert ExponentialReducer().should_terminate(snapshot(logvol=-5.))

    # 100 + 301 * 0.5 rounded up
    stats = snapshot(nlive=401,
                     nlive_init=401,
                     min_nlive=100,
                     logvol=math.log(0.5))
    assert red.next_nlive(stats) == 251
    assert ExponentialReducer(0.01, exponent=2.).next_nlive(stats) == 176
    assert red.next_nlive(snapshot(logvol=math.log(0.5))) == 400


@pytest.mark.parametrize("kwargs", [
    dict(termination_factor=0.),
    dict(termination_factor=1.5),
    dict(exponent=-1.),
])
def test_exponential_invalid(kwargs):
    with pytest.raises(ValueError):
        ExponentialReducer(**kwargs)


def test_base_reducer():
    with pytest.raises(NotImplementedError):
        Reducer().should_terminate(snapshot())
    assert Reducer().next_nlive(snapshot(nlive=123)) == 123
