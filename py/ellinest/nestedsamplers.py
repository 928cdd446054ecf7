#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Nested samplers drawing new live points from bounding distributions.
Includes:

    MultiEllipsoidSampler:
        Clusters the live points and draws new points uniformly from the
        union of one enlarged ellipsoid per cluster.

"""

import math
import warnings
import numpy as np
from .sampler import Sampler, DrawAttemptsExhaustedError
from .clustering import KmeansClusterer
from .bounding import (UnitCube, MultiEllipsoid, DegenerateEllipsoidError,
                       bounding_ellipsoid, regularized_ellipsoid)
from .utils import unitcheck

__all__ = ["MultiEllipsoidSampler"]

_VOLUME_POLICIES = ('global', 'cluster')


class MultiEllipsoidSampler(Sampler):
    """
    Nested sampler bounding the live points with multiple ellipsoids
    (Feroz, Hobson & Bridges 2009).

    Every `niter_same_clustering` iterations (see :meth:`run`) the live
    points are partitioned by `clusterer`; at every iteration each cluster
    is bounded by an ellipsoid whose axes are enlarged by the fraction
    `enlarge_init * X**shrinking_rate`, with `X` the remaining prior mass.
    New points are drawn uniformly from the union of the ellipsoids, or
    from the whole unit cube when the union is larger than it.

    Parameters
    ----------
    loglikelihood : function
        Function returning ln(likelihood) given parameters as a 1-d `~numpy`
        array of length `ndim`.

    prior_transform : function
        Function transforming a sample from the a unit cube to the parameter
        space of interest according to the prior.

    ndim : int
        Number of parameters accepted by `prior_transform`.

    clusterer : :class:`~ellinest.clustering.KmeansClusterer`, optional
        Clusterer partitioning the live points. Default is a
        :class:`~ellinest.clustering.KmeansClusterer` with its default
        settings.

    nlive_init : int, optional
        Number of live points at the start of the run. Default is `400`.

    min_nlive : int, optional
        Smallest number of live points. Default is `nlive_init`.

    enlarge_init : float, optional
        Enlargement fraction of the ellipsoid axes at the start of the run.
        Default is `2.5`.

    shrinking_rate : float, optional
        Exponent of the decrease of the enlargement with the remaining
        prior mass. Default is `0.6`.

    volume_policy : {`'global'`, `'cluster'`}, optional
        How the remaining prior mass shrinks when a point is removed.
        `'global'` uses `X_i = X_{i-1} exp(-1/nlive)`. `'cluster'` only
        shrinks the share of the cluster of the removed point,
        `X_i = X_{i-1} (1 - w_k (1 - exp(-1/n_k)))`, with `w_k` the volume
        share of its ellipsoid and `n_k` its number of points.
        Default is `'global'`.

    rstate : `~numpy.random.Generator` or int, optional
        `~numpy.random.Generator` instance or a seed.

    """

    def __init__(self,
                 loglikelihood,
                 prior_transform,
                 ndim,
                 clusterer=None,
                 nlive_init=400,
                 min_nlive=None,
                 enlarge_init=2.5,
                 shrinking_rate=0.6,
                 volume_policy='global',
                 rstate=None):
        if enlarge_init < 0:
            raise ValueError("enlarge_init must be >= 0")
        if shrinking_rate < 0:
            raise ValueError("shrinking_rate must be >= 0")
        if volume_policy not in _VOLUME_POLICIES:
            raise ValueError("Unknown volume_policy {0}; use one of "
                             "{1}".format(volume_policy, _VOLUME_POLICIES))
        self.clusterer = clusterer or KmeansClusterer()
        self.enlarge_init = enlarge_init
        self.shrinking_rate = shrinking_rate
        self.volume_policy = volume_policy

        self.ells = None  # union of the cluster ellipsoids
        self.proposal = UnitCube(ndim)  # where new points are drawn from

        super().__init__(loglikelihood,
                         prior_transform,
                         ndim,
                         nlive_init=nlive_init,
                         min_nlive=min_nlive,
                         rstate=rstate)

    @property
    def enlarge(self):
        """Current enlargement fraction of the ellipsoid axes."""
        return self.enlarge_init * math.exp(self.shrinking_rate * self.logvol)

    def _merge_small_clusters(self, labels):
        """
        Clusters with fewer than `ndim + 1` points cannot constrain an
        ellipsoid; they are merged into the cluster with the nearest
        center.
        """

        labels = labels.copy()
        minsize = self.ndim + 1
        while True:
            counts = np.bincount(labels)
            present = np.nonzero(counts)[0]
            small = present[counts[present] < minsize]
            if len(small) == 0 or len(present) == 1:
                break
            j = small[np.argmin(counts[small])]
            others = present[present != j]
            ctr = self.live_u[labels == j].mean(axis=0)
            ctrs = np.array(
                [self.live_u[labels == k].mean(axis=0) for k in others])
            dists = self.clusterer.metric.distances(ctr[None, :], ctrs)[0]
            labels[labels == j] = others[np.argmin(dists)]
        return labels

    def update_bound(self, recluster=False):
        """
        Refit one ellipsoid per cluster of live points, reclustering the
        live points first if `recluster` is set.
        """

        if recluster:
            labels, _ = self.clusterer.cluster(self.live_u, self.rstate)
            self.live_label = self._merge_small_clusters(labels)

        # labels are made consecutive
        uniq, self.live_label = np.unique(self.live_label,
                                          return_inverse=True)
        self.live_label = self.live_label.reshape(-1)
        self.nclusters = len(uniq)

        enlarge = self.enlarge
        scale = np.diag(np.atleast_2d(np.cov(self.live_u, rowvar=False)))
        ells = []
        for k in range(self.nclusters):
            pts = self.live_u[self.live_label == k]
            try:
                ell = bounding_ellipsoid(pts, enlarge=enlarge)
            except DegenerateEllipsoidError:
                warnings.warn("The ellipsoid bounding {0} live points is "
                              "degenerate and has been "
                              "regularized.".format(len(pts)))
                ell = regularized_ellipsoid(pts, enlarge=enlarge, scale=scale)
            ells.append(ell)
        self.ells = MultiEllipsoid(ells)

        # the union is larger than the prior support
        if self.ells.logvol_tot >= 0:
            self.proposal = UnitCube(self.ndim)
        else:
            self.proposal = self.ells

    def _log_shrinkage(self, worst):
        if self.volume_policy == 'global' or self.ells is None:
            return super()._log_shrinkage(worst)
        k = self.live_label[worst]
        nk = np.sum(self.live_label == k)
        wk = self.ells.volume_shares()[k]
        # ln(X_{i-1} / X_i) = -ln(1 - w_k (1 - exp(-1/n_k)))
        dlogvol = -math.log1p(wk * math.expm1(-1. / nk))
        # a vanishing share still has to shrink X
        return max(dlogvol, np.spacing(abs(self.logvol)))

    def _new_point(self, loglstar, max_ndraw_attempts):
        """Propose points until a new point that satisfies the log-likelihood
        constraint `loglstar` is found."""

        ndraw = 0
        nc = 0
        while ndraw < max_ndraw_attempts:
            u, idx, q = self.proposal.propose(rstate=self.rstate)
            ndraw += 1
            # points inside several ellipsoids are over-represented
            if not self.proposal.accept_overlap(q, rstate=self.rstate):
                continue
            if not unitcheck(u):
                continue
            v = np.asarray(self.prior_transform(u))
            if not self.in_prior_support(v):
                continue
            logl = self.loglikelihood(v)
            nc += 1
            if logl > loglstar:
                if idx >= 0:
                    label = idx
                elif self.ells is not None:
                    label = self.ells.nearest(u)
                else:
                    label = 0
                return u, v, logl, nc, ndraw, idx, label

        raise DrawAttemptsExhaustedError(self.it, ndraw, loglstar)
