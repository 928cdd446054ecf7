#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Partitioning of the live points into clusters. The number of clusters is
not known in advance: every candidate number is tried several times and
the partitions are compared through their Bayesian information criterion.

    KmeansClusterer:
        k-means with k-means++ seeding under a user-provided `Metric`.

"""

import math
import numpy as np
from .metric import EuclideanMetric

__all__ = ["KmeansClusterer"]


class KmeansClusterer:
    """
    k-means clusterer selecting the number of clusters automatically.

    Parameters
    ----------
    metric : :class:`~ellinest.metric.Metric`, optional
        Distance used to assign points to cluster centers. Default is
        :class:`~ellinest.metric.EuclideanMetric`.

    min_nclusters : int, optional
        Smallest number of clusters tried. Default is `1`.

    max_nclusters : int, optional
        Largest number of clusters tried. Default is `6`.

    ntrials : int, optional
        Number of independent k-means runs (different random seeding) for
        each number of clusters. The best run is kept. Default is `10`.

    rel_tolerance : float, optional
        Going from `K` to `K + 1` clusters is only worth it if the
        information criterion improves by more than this fraction of its
        absolute value. Default is `0.01`.

    maxiter : int, optional
        Maximum number of reassignment passes of a single k-means run. Runs
        that do not settle within `maxiter` passes are discarded.
        Default is `100`.

    """

    def __init__(self,
                 metric=None,
                 min_nclusters=1,
                 max_nclusters=6,
                 ntrials=10,
                 rel_tolerance=0.01,
                 maxiter=100):
        if min_nclusters < 1:
            raise ValueError("min_nclusters must be >= 1")
        if max_nclusters < min_nclusters:
            raise ValueError("max_nclusters must be >= min_nclusters")
        if ntrials < 1:
            raise ValueError("ntrials must be >= 1")
        if rel_tolerance < 0:
            raise ValueError("rel_tolerance must be >= 0")
        self.metric = metric or EuclideanMetric()
        self.min_nclusters = min_nclusters
        self.max_nclusters = max_nclusters
        self.ntrials = ntrials
        self.rel_tolerance = rel_tolerance
        self.maxiter = maxiter

    def cluster(self, points, rstate):
        """
        Partition `points` into clusters.

        Parameters
        ----------
        points : `~numpy.ndarray` with shape (npoints, ndim)
            The points to cluster.

        rstate : `~numpy.random.Generator`
            `~numpy.random.Generator` instance used for the seeding.

        Returns
        -------
        labels : `~numpy.ndarray` of int with shape (npoints,)
            Cluster index `0 <= label < nclusters` of every point.

        nclusters : int
            The selected number of clusters. A single cluster is returned
            if none of the trials converged.

        """

        points = np.atleast_2d(np.asarray(points, dtype=float))
        npoints = points.shape[0]

        chosen, best = None, None  # best is (bic, labels)
        # Walk up in the number of clusters as long as adding one more
        # cluster pays off.
        for k in range(self.min_nclusters, self.max_nclusters + 1):
            if npoints < 2 * k:
                break
            cur = None
            for trial in range(self.ntrials):
                labels, ctrs, converged = self._kmeans(points, k, rstate)
                if not converged:
                    continue
                if np.bincount(labels, minlength=k).min() < 2:
                    continue
                bic = self.bic(points, labels, ctrs)
                if not np.isfinite(bic):
                    continue
                if cur is None or bic < cur[0]:
                    cur = (bic, labels)
                if k == 1:
                    # every trial gives the same partition
                    break
            if cur is None:
                continue
            if chosen is None or cur[0] < best[0] - self.rel_tolerance * abs(
                    best[0]):
                chosen, best = k, cur
            else:
                break

        if chosen is None:
            return np.zeros(npoints, dtype=int), 1

        return best[1], chosen

    def _seed(self, points, k, rstate):
        """k-means++ choice of the initial cluster centers."""

        npoints = points.shape[0]
        ctrs = [points[rstate.integers(npoints)]]
        for i in range(1, k):
            d2 = self.metric.distances(points, np.array(ctrs)).min(axis=1)**2
            tot = d2.sum()
            if tot > 0:
                idx = rstate.choice(npoints, p=d2 / tot)
            else:
                idx = rstate.integers(npoints)
            ctrs.append(points[idx])
        return np.array(ctrs)

    def _kmeans(self, points, k, rstate):
        """
        A single k-means run. Returns the labels, the centers and whether
        the assignment settled before `maxiter` passes with no empty
        cluster.
        """

        ctrs = self._seed(points, k, rstate)
        labels = None
        for i in range(self.maxiter):
            new_labels = np.argmin(self.metric.distances(points, ctrs), axis=1)
            if labels is not None and np.array_equal(new_labels, labels):
                return labels, ctrs, True
            labels = new_labels
            if np.bincount(labels, minlength=k).min() == 0:
                return labels, ctrs, False
            ctrs = np.array(
                [points[labels == j].mean(axis=0) for j in range(k)])
        return labels, ctrs, False

    def bic(self, points, labels, ctrs):
        """
        Bayesian information criterion of a hard partition, modelling each
        cluster as a spherical Gaussian with its own variance and weight
        (X-means, Pelleg & Moore 2000). Lower is better.
        """

        npoints, ndim = points.shape
        k = len(ctrs)
        logl = 0.
        for j in range(k):
            sel = labels == j
            nj = sel.sum()
            d2 = self.metric.distances(points[sel], ctrs[j][None, :])[:, 0]**2
            var = d2.sum() / (ndim * nj)
            if var <= 0:
                return np.inf
            logl += (nj * math.log(nj / npoints) - 0.5 * nj * ndim *
                     math.log(2 * math.pi * var) - 0.5 * nj * ndim)
        # centers, one variance per cluster and the mixture weights
        nparam = k * (ndim + 1) + (k - 1)
        return -2. * logl + nparam * math.log(npoints)
