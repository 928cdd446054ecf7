#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Distance measures between points in parameter space, used by the
clustering step. Includes:

    EuclideanMetric:
        The standard L2 distance (default).

    ManhattanMetric:
        The L1 (city block) distance.

"""

import numpy as np
from scipy.spatial import distance as spdist

__all__ = ["Metric", "EuclideanMetric", "ManhattanMetric"]


class Metric:
    """
    Base class of a distance between two points. Subclasses implement
    `distance` and may override `distances` with a vectorised version.
    A metric must be symmetric, non-negative and zero only for identical
    points.
    """

    def distance(self, a, b):
        """Distance between the points `a` and `b`."""
        raise NotImplementedError

    def distances(self, points, centers):
        """
        Distances between every point and every center.

        Parameters
        ----------
        points : `~numpy.ndarray` with shape (npoints, ndim)

        centers : `~numpy.ndarray` with shape (ncenters, ndim)

        Returns
        -------
        dist : `~numpy.ndarray` with shape (npoints, ncenters)

        """
        points = np.atleast_2d(points)
        centers = np.atleast_2d(centers)
        return np.array([[self.distance(p, c) for c in centers]
                         for p in points])


class EuclideanMetric(Metric):
    """The Euclidean (L2) distance."""

    def distance(self, a, b):
        d = np.asarray(a, dtype=float) - np.asarray(b, dtype=float)
        return float(np.sqrt(np.dot(d, d)))

    def distances(self, points, centers):
        return spdist.cdist(np.atleast_2d(points), np.atleast_2d(centers),
                            'euclidean')


class ManhattanMetric(Metric):
    """The Manhattan (L1) distance."""

    def distance(self, a, b):
        return float(
            np.abs(np.asarray(a, dtype=float) -
                   np.asarray(b, dtype=float)).sum())

    def distances(self, points, centers):
        return spdist.cdist(np.atleast_2d(points), np.atleast_2d(centers),
                            'cityblock')
