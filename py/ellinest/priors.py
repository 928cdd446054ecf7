#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Prior distributions. A prior maps a point of the unit cube to the parameter
space (through the inverse of its cumulative distribution) and evaluates
its probability density. Includes:

    UniformPrior:
        Independent flat priors between given minima and maxima.

    NormalPrior:
        Independent Gaussian priors.

    JointPrior:
        Concatenation of priors over consecutive blocks of parameters.

A prior object can be passed directly as the `prior_transform` of a sampler.

"""

import numpy as np
import scipy.stats

__all__ = ["Prior", "UniformPrior", "NormalPrior", "JointPrior"]


class Prior:
    """
    Base class of independent one-dimensional priors described by a frozen
    `scipy.stats` distribution (vectorised over the parameters).
    """

    def __init__(self, distribution, ndim):
        self.distribution = distribution
        self.ndim = ndim

    def __call__(self, u):
        return self.transform(u)

    def transform(self, u):
        """Go from coordinates in the unit cube to parameter values."""

        return self.distribution.ppf(np.asarray(u, dtype=float))

    def inverse_transform(self, v):
        """Go from parameter values back to unit cube coordinates."""

        return self.distribution.cdf(np.asarray(v, dtype=float))

    def logpdf(self, v):
        """ln(prior density) at the parameter vector `v`."""

        return float(np.sum(self.distribution.logpdf(np.asarray(v,
                                                                dtype=float))))

    def density(self, v):
        """Prior density at the parameter vector `v`."""

        return float(np.exp(self.logpdf(v)))


class UniformPrior(Prior):
    """
    Flat prior on the box `minima <= v <= maxima`.

    Parameters
    ----------
    minima : array-like with shape (ndim,)

    maxima : array-like with shape (ndim,)

    """

    def __init__(self, minima, maxima):
        minima = np.atleast_1d(np.asarray(minima, dtype=float))
        maxima = np.atleast_1d(np.asarray(maxima, dtype=float))
        if minima.shape != maxima.shape:
            raise ValueError("minima and maxima must have the same length")
        if np.any(maxima <= minima):
            raise ValueError("maxima must be larger than minima")
        self.minima = minima
        self.maxima = maxima
        super().__init__(scipy.stats.uniform(loc=minima, scale=maxima - minima),
                         len(minima))


class NormalPrior(Prior):
    """
    Gaussian prior with independent components.

    Parameters
    ----------
    mean : array-like with shape (ndim,)

    sigma : array-like with shape (ndim,)

    """

    def __init__(self, mean, sigma):
        mean = np.atleast_1d(np.asarray(mean, dtype=float))
        sigma = np.atleast_1d(np.asarray(sigma, dtype=float))
        if mean.shape != sigma.shape:
            raise ValueError("mean and sigma must have the same length")
        if np.any(sigma <= 0):
            raise ValueError("sigma must be positive")
        self.mean = mean
        self.sigma = sigma
        super().__init__(scipy.stats.norm(loc=mean, scale=sigma), len(mean))


class JointPrior:
    """
    A prior made of independent blocks, e.g. a flat prior on the first
    parameters and a Gaussian prior on the others. The blocks are applied
    to consecutive slices of the parameter vector in the given order.

    Parameters
    ----------
    priors : list of :class:`Prior`

    """

    def __init__(self, priors):
        if len(priors) == 0:
            raise ValueError("At least one prior is required.")
        self.priors = list(priors)
        bounds = np.cumsum([0] + [p.ndim for p in self.priors])
        self.slices = [slice(a, b) for a, b in zip(bounds[:-1], bounds[1:])]
        self.ndim = int(bounds[-1])

    def __call__(self, u):
        return self.transform(u)

    def transform(self, u):
        u = np.asarray(u, dtype=float)
        return np.concatenate(
            [p.transform(u[s]) for p, s in zip(self.priors, self.slices)])

    def inverse_transform(self, v):
        v = np.asarray(v, dtype=float)
        return np.concatenate([
            p.inverse_transform(v[s]) for p, s in zip(self.priors, self.slices)
        ])

    def logpdf(self, v):
        v = np.asarray(v, dtype=float)
        return sum(p.logpdf(v[s]) for p, s in zip(self.priors, self.slices))

    def density(self, v):
        return float(np.exp(self.logpdf(v)))
