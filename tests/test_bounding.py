import itertools
import numpy as np
import scipy.stats
import pytest
import ellinest.bounding as eb
from utils import get_rstate

FAILURE_THRESHOLD = 1 / 1000.
# the uniformity tests are two sided
PVAL = FAILURE_THRESHOLD / 2.


def test_contains_center_and_far_point():
    ndim = 3
    ell = eb.Ellipsoid(np.zeros(ndim) + .5, np.eye(ndim) * 0.01)
    assert ell.contains(ell.ctr)
    assert not ell.contains(ell.ctr + 10)
    # on the first axis, just inside and just outside
    x = ell.ctr.copy()
    x[0] += 0.0999
    assert ell.contains(x)
    x[0] += 0.0002
    assert not ell.contains(x)


def test_volume():
    ell = eb.Ellipsoid(np.zeros(2), np.diag([4., 1.]))
    assert np.isclose(ell.volume(), 2 * np.pi)
    assert np.allclose(sorted(ell.axlens), [1, 2])
    ell3 = eb.Ellipsoid(np.zeros(3), np.eye(3))
    assert np.isclose(ell3.logvol, np.log(4. / 3 * np.pi))
    assert np.isclose(eb.logvol_prefactor(2), np.log(np.pi))


def test_enlarge():
    # axes are multiplied by 1 + enlarge
    ell = eb.Ellipsoid(np.zeros(2), np.eye(2), enlarge=1.)
    assert np.isclose(ell.volume(), 4 * np.pi)
    assert np.allclose(ell.axlens, 2)
    with pytest.raises(ValueError):
        eb.Ellipsoid(np.zeros(2), np.eye(2), enlarge=-0.1)


@pytest.mark.parametrize("ndim", [2, 5])
def test_sample_uniform(ndim):
    # the fraction of the volume within radius r is r^ndim, so r^ndim
    # should be uniform in [0, 1]
    rstate = get_rstate()
    cen = np.zeros(ndim) + .5
    ell = eb.Ellipsoid(cen, np.eye(ndim) * 0.04)
    nsamp = 20000
    X = ell.samples(nsamp, rstate=rstate)
    assert all(ell.contains(_) for _ in X)
    R = np.sqrt(((X - cen[None, :])**2).sum(axis=1)) / 0.2
    nbins = 20
    counts = np.histogram(R**ndim, bins=nbins, range=(0, 1))[0]
    pval = scipy.stats.chisquare(counts)[1]
    assert pval > PVAL


def test_sample_elongated():
    rstate = get_rstate()
    ndim = 2
    cov = np.array([[1., 0.9], [0.9, 1.]])
    ell = eb.Ellipsoid(np.zeros(ndim), cov)
    X = ell.samples(20000, rstate=rstate)
    dist = np.array([ell.distance(x) for x in X])
    assert dist.max() <= 1
    pval = scipy.stats.kstest(dist**ndim, scipy.stats.uniform().cdf)[1]
    assert (pval > PVAL) and (pval < 1 - PVAL)


def test_overlap_acceptance():
    # every point of two identical ellipsoids lies within both of them
    # so only half of the proposals are accepted
    rstate = get_rstate()
    ell = eb.Ellipsoid(np.zeros(2), np.eye(2))
    mu = eb.MultiEllipsoid([ell, eb.Ellipsoid(np.zeros(2), np.eye(2))])
    nprop = 20000
    nacc = 0
    for i in range(nprop):
        x, idx, q = mu.propose(rstate=rstate)
        assert q == 2
        nacc += mu.accept_overlap(q, rstate=rstate)
    assert np.abs(nacc / nprop - 0.5) < 5 * np.sqrt(0.25 / nprop)


@pytest.mark.parametrize("ndim", [2, 4])
def test_union_uniform(ndim):
    # two overlapping unit spheres, the union is symmetric around the
    # middle of the two centers
    rstate = get_rstate()
    shift = 0.75
    cen1 = np.zeros(ndim)
    cen2 = np.zeros(ndim)
    cen2[0] = shift
    ells = [eb.Ellipsoid(cen1, np.eye(ndim)), eb.Ellipsoid(cen2, np.eye(ndim))]
    mu = eb.MultiEllipsoid(ells)
    nsim = 20000
    R = mu.samples(nsim, rstate=rstate)
    assert all(mu.contains(_) for _ in R)
    nhalf = (R[:, 0] > shift / 2.).sum()
    assert np.abs(nhalf - 0.5 * nsim) < 5 * np.sqrt(0.25 * nsim)


def test_multi_helpers():
    ells = [
        eb.Ellipsoid(np.zeros(2), np.eye(2) * 0.01),
        eb.Ellipsoid(np.ones(2), np.eye(2) * 0.04)
    ]
    mu = eb.MultiEllipsoid(ells)
    assert np.isclose(mu.volume_shares().sum(), 1)
    assert np.allclose(mu.volume_shares(), [0.2, 0.8])
    assert mu.nearest(np.array([0.9, 0.9])) == 1
    assert mu.nearest(np.array([0.1, 0.0])) == 0
    assert list(mu.within(np.array([0., 0.]))) == [0]
    assert mu.overlap(np.array([0.5, 0.5])) == 0
    with pytest.raises(ValueError):
        eb.MultiEllipsoid([])


def test_unit_cube():
    rstate = get_rstate()
    cube = eb.UnitCube(3)
    x, idx, q = cube.propose(rstate=rstate)
    assert idx == -1 and q == 1
    assert cube.contains(x)
    assert cube.accept_overlap(q, rstate=rstate)
    assert not cube.contains(np.array([0.5, 0.5, 1.5]))
    assert cube.volume() == 1


@pytest.mark.parametrize("ndim,enlarge",
                         list(itertools.product([2, 6], [0., 0.5])))
def test_bounding_ellipsoid(ndim, enlarge):
    rstate = get_rstate()
    pts = rstate.normal(size=(200, ndim)) * 0.05 + 0.5
    ell = eb.bounding_ellipsoid(pts, enlarge=enlarge)
    assert all(ell.contains(p) for p in pts)
    assert np.allclose(ell.ctr, pts.mean(axis=0))
    if enlarge == 0:
        # the outermost point sits on the boundary
        assert np.isclose(max(ell.distance(p) for p in pts),
                          np.sqrt(1 - eb.ROUND_DELTA))


def test_degenerate():
    # points along a line cannot constrain a 2d ellipsoid
    t = np.linspace(0, 1, 20)
    pts = np.array([0.1 + 0.5 * t, 0.2 + 0.3 * t]).T
    with pytest.raises(eb.DegenerateEllipsoidError):
        eb.bounding_ellipsoid(pts)
    with pytest.raises(eb.DegenerateEllipsoidError):
        eb.bounding_ellipsoid(pts[:2])
    ell = eb.regularized_ellipsoid(pts, scale=np.ones(2) * 0.01)
    assert np.all(np.isfinite(ell.axlens))
    assert np.all(ell.axlens > 0)
    assert all(ell.contains(p) for p in pts)


def test_regularized_single_point():
    pt = np.array([[0.3, 0.4, 0.5]])
    ell = eb.regularized_ellipsoid(pt, scale=np.ones(3) * 0.01)
    assert ell.contains(pt[0])
    assert np.isfinite(ell.logvol)
