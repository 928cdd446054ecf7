#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
A collection of useful functions.

"""

import math
import warnings
from collections import namedtuple
from functools import partial
import numpy as np
import tqdm

from .results import print_fn

__all__ = [
    "InvalidParametersError", "LogLikelihood", "RunRecord", "unitcheck",
    "get_random_generator", "get_print_func", "get_neff_from_logwt",
    "progress_integration", "resample_equal"
]

SQRTEPS = math.sqrt(float(np.finfo(np.float64).eps))

# stand-in for ln(0) in the running sums, finite so that products with
# zero weights stay zero
_LOWL_VAL = -1.e300

IteratorResult = namedtuple('IteratorResult', [
    'worst', 'ustar', 'vstar', 'loglstar', 'logvol', 'logwt', 'logz',
    'logzvar', 'h', 'nc', 'ndraw', 'worst_it', 'boundidx', 'nclusters',
    'nlive', 'eff', 'delta_logz'
])


class InvalidParametersError(ValueError):
    """
    Raised by a log-likelihood function for parameters outside of its
    support. The sampler treats it as ln(likelihood) = -inf.
    """
    pass


class LogLikelihood:
    """ Class that calls the likelihood function and keeps
    track of the number of evaluations.
    """

    def __init__(self, loglikelihood):
        """ Initialize the object.

        Parameters:
        loglikelihood: function
        """
        self.loglikelihood = loglikelihood
        self.ncall = 0

    def map(self, pars):
        """ Evaluate the likelihood f-n on the list of vectors """
        return np.array([self(x) for x in pars])

    def __call__(self, x):
        """
        Evaluate the likelihood f-n once. Parameters rejected with
        `InvalidParametersError` get ln(likelihood) = -inf.
        """
        self.ncall += 1
        try:
            ret = float(self.loglikelihood(x))
        except InvalidParametersError:
            return -np.inf
        if np.isnan(ret) or ret == np.inf:
            raise ValueError("The log-likelihood ({0}) at v={1} is "
                             "invalid.".format(ret, x))
        return ret


class RunRecord:
    """
    This is the class that saves the results of the nested
    run so it is basically a collection of various lists of
    quantities. Entries are only ever appended.
    """

    _KEYS = [
        'u',  # unit cube samples
        'v',  # transformed variable samples
        'logl',  # loglikelihoods of samples
        'logvol',  # expected ln(volume)
        'logwt',  # ln(weights)
        'logz',  # cumulative ln(evidence)
        'logzvar',  # cumulative variance of ln(evidence)
        'h',  # cumulative information
        'nc',  # number of likelihood calls at each iteration
        'boundidx',  # index of the ellipsoid the dead point was drawn from
        'it',  # iteration the live (now dead) point was proposed
        'n',  # number of live points when the point was removed
        'nclusters'  # number of clusters at each iteration
    ]

    def __init__(self):
        self.D = dict((k, []) for k in self._KEYS)

    def append(self, newD):
        """
        append new information to the RunRecord in the form a dictionary
        i.e. run.append(dict(logl=3., logvol=-1.))
        """
        for k in newD.keys():
            self.D[k].append(newD[k])

    def __getitem__(self, k):
        return self.D[k]

    def __len__(self):
        return len(self.D['logl'])


def get_random_generator(seed=None):
    """
    Return a random generator (using the seed provided if available)
    """
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.Generator(np.random.PCG64(seed))


def get_print_func(print_func, print_progress):
    pbar = None
    if print_func is None:
        if print_progress:
            pbar = tqdm.tqdm()
        print_func = partial(print_fn, pbar=pbar)
    return pbar, print_func


def get_neff_from_logwt(logwt):
    """
    Compute the number of effective samples from an array of unnormalized
    log-weights. We use Kish Effective Sample Size (ESS)  formula.

    Parameters:
    logwt: numpy array
        Array of unnormalized weights

    Returns:
    neff: int
        The effective number of samples
    """

    # If weights are normalized to the sum of 1,
    # the estimate is  N = 1/\sum(w_i^2)
    # if the weights are not normalized
    # N = (\sum w_i)^2 / \sum(w_i^2)
    W = np.exp(logwt - logwt.max())
    return W.sum()**2 / (W**2).sum()


def unitcheck(u):
    """Check whether `u` is inside the unit cube."""

    return np.min(u) > 0 and np.max(u) < 1


def progress_integration(loglstar, logz, logzvar, h, logvol, dlogvol,
                         logdvol=None):
    """
    Add one dead point to the running evidence, information and variance.

    The dead point with ln(likelihood) `loglstar` carries the prior mass
    `X_{i-1} - X_i` where `logvol = ln X_i` and `dlogvol = ln X_{i-1} -
    ln X_i > 0`. Everything is kept in log space. The prior mass of the
    point can instead be given explicitly as `logdvol`.

    Return logwt, logz, logzvar, h
    """
    if logdvol is None:
        # ln(X_{i-1} - X_i) = ln X_i + ln(exp(dlogvol) - 1)
        logdvol = logvol + math.log(math.expm1(dlogvol))
    logwt = loglstar + logdvol
    logz_new = np.logaddexp(logz, logwt)  # ln(evidence)
    h_new = (math.exp(logwt - logz_new) * loglstar +
             math.exp(logz - logz_new) * (h + logz) - logz_new)  # information
    dh = h_new - h

    # var[ln(evidence)] estimate; reduces to H / nlive for a fixed nlive
    logzvar_new = logzvar + dh * dlogvol
    return logwt, logz_new, logzvar_new, h_new


def resample_equal(samples, weights, rstate=None):
    """
    Resample a new set of points from the weighted set of inputs
    such that they all have equal weight.

    Parameters
    ----------
    samples : `~numpy.ndarray` with shape (nsamples,)
        Set of unequally weighted samples.

    weights : `~numpy.ndarray` with shape (nsamples,)
        Corresponding weight of each sample.

    rstate : `~numpy.random.Generator`, optional
        `~numpy.random.Generator` instance.

    Returns
    -------
    equal_weight_samples : `~numpy.ndarray` with shape (nsamples,)
        New set of samples with equal weights.

    Notes
    -----
    Systematic resampling (Hol, Schon and Gustafsson 2006).
   """

    if rstate is None:
        rstate = get_random_generator()

    cumulative_sum = np.cumsum(weights)
    if abs(cumulative_sum[-1] - 1.) > SQRTEPS:
        warnings.warn("Weights do not sum to 1 and have been renormalized.")
    cumulative_sum /= cumulative_sum[-1]

    nsamples = len(weights)
    positions = (rstate.random() + np.arange(nsamples)) / nsamples
    idx = np.minimum(np.searchsorted(cumulative_sum, positions, side='right'),
                     nsamples - 1)

    return samples[idx]
