import numpy as np
import pytest
from ellinest.clustering import KmeansClusterer
from ellinest.metric import ManhattanMetric
from utils import get_rstate


def two_blobs(rstate, npoints=400, sig=0.02):
    ctrs = np.array([[0.25, 0.5], [0.75, 0.5]])
    truth = np.arange(npoints) % 2
    pts = ctrs[truth] + rstate.normal(size=(npoints, 2)) * sig
    return pts, truth


def same_partition(labels, truth):
    return (np.array_equal(labels, truth)
            or np.array_equal(labels, 1 - truth))


@pytest.mark.parametrize("metric", [None, ManhattanMetric()])
def test_two_blobs(metric):
    rstate = get_rstate()
    pts, truth = two_blobs(rstate)
    labels, nclusters = KmeansClusterer(metric=metric).cluster(pts, rstate)
    assert nclusters == 2
    assert same_partition(labels, truth)


def test_one_blob():
    rstate = get_rstate()
    pts = rstate.normal(size=(300, 2)) * 0.05 + 0.5
    labels, nclusters = KmeansClusterer().cluster(pts, rstate)
    assert nclusters == 1
    assert np.all(labels == 0)


def test_three_blobs():
    rstate = get_rstate()
    ctrs = np.array([[0.2, 0.2, 0.2], [0.8, 0.2, 0.5], [0.5, 0.8, 0.8]])
    truth = np.arange(300) % 3
    pts = ctrs[truth] + rstate.normal(size=(300, 3)) * 0.03
    labels, nclusters = KmeansClusterer().cluster(pts, rstate)
    assert nclusters == 3
    # every true cluster maps to a single label
    for k in range(3):
        assert len(np.unique(labels[truth == k])) == 1


def test_fallback_single_cluster():
    # no candidate number of clusters can be tried with so few points
    rstate = get_rstate()
    pts = rstate.uniform(size=(4, 2))
    clusterer = KmeansClusterer(min_nclusters=3, max_nclusters=4)
    labels, nclusters = clusterer.cluster(pts, rstate)
    assert nclusters == 1
    assert np.all(labels == 0)


def test_bic_prefers_truth():
    rstate = get_rstate()
    pts, truth = two_blobs(rstate)
    clusterer = KmeansClusterer()
    ctrs = np.array([pts[truth == k].mean(axis=0) for k in range(2)])
    bic_truth = clusterer.bic(pts, truth, ctrs)
    one = np.zeros(len(pts), dtype=int)
    bic_one = clusterer.bic(pts, one, pts.mean(axis=0)[None, :])
    assert bic_truth < bic_one


@pytest.mark.parametrize("kwargs", [
    dict(min_nclusters=0),
    dict(min_nclusters=3, max_nclusters=2),
    dict(ntrials=0),
    dict(rel_tolerance=-1),
])
def test_invalid_configuration(kwargs):
    with pytest.raises(ValueError):
        KmeansClusterer(**kwargs)
