#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Reducers decide, at every iteration of the sampler, whether the run has
converged and how many live points to keep for the next iteration.
Includes:

    FerozReducer:
        Stops when the evidence that can still be contained in the live
        points is a small fraction of the accumulated evidence.

    ExponentialReducer:
        Stops when the remaining prior mass falls below a fixed fraction,
        regardless of the likelihood values of the live points.

A reducer only reads a :class:`SamplerStatistics` snapshot and never
modifies the sampler.

"""

import math
from collections import namedtuple

__all__ = [
    "SamplerStatistics", "Reducer", "FerozReducer", "ExponentialReducer"
]

SamplerStatistics = namedtuple('SamplerStatistics', [
    'it',  # current iteration
    'nlive',  # current number of live points
    'nlive_init',  # number of live points at the start of the run
    'min_nlive',  # smallest allowed number of live points
    'logz',  # ln(evidence) accumulated so far
    'logzvar',  # var[ln(evidence)]
    'h',  # information
    'logvol',  # ln(remaining prior mass)
    'loglstar',  # current ln(likelihood) threshold
    'logl_max',  # largest ln(likelihood) among the live points
    'termination_factor'  # termination factor requested from `run()`
])


class Reducer:
    """
    Base class of the termination strategies. The default keeps the
    number of live points constant.
    """

    def should_terminate(self, stats):
        """Return `True` once the run has converged."""
        raise NotImplementedError

    def next_nlive(self, stats):
        """Number of live points to use for the next iteration."""
        return stats.nlive

    @staticmethod
    def _clip_nlive(target, stats):
        """Never grow the population and never go below the floor."""
        target = int(math.ceil(target))
        return max(stats.min_nlive, min(stats.nlive, target))


class FerozReducer(Reducer):
    """
    Evidence based stopping rule (Feroz, Hobson & Bridges 2009). The
    evidence still contained in the live points is estimated as
    `Z_rem = L_max * X` and the run stops once
    `Z_rem < tolerance_on_evidence * Z`.

    When the sampler allows fewer live points than it started with, the
    population is reduced linearly in `ln(Z_rem / Z)` from `nlive_init`
    (ratio of one and above) down to `min_nlive` (ratio at the tolerance).

    Parameters
    ----------
    tolerance_on_evidence : float, optional
        Fractional tolerance on the remaining evidence. Defaults to the
        `termination_factor` given to the sampler's `run()`.

    """

    def __init__(self, tolerance_on_evidence=None):
        if tolerance_on_evidence is not None and tolerance_on_evidence <= 0:
            raise ValueError("tolerance_on_evidence must be positive")
        self.tolerance_on_evidence = tolerance_on_evidence

    def _log_tolerance(self, stats):
        tol = self.tolerance_on_evidence
        if tol is None:
            tol = stats.termination_factor
        if tol is None or tol <= 0:
            raise ValueError("No valid tolerance on the evidence was "
                             "provided.")
        return math.log(tol)

    @staticmethod
    def log_remaining_ratio(stats):
        """ln(Z_rem / Z) for the snapshot `stats`."""
        return stats.logl_max + stats.logvol - stats.logz

    def should_terminate(self, stats):
        return self.log_remaining_ratio(stats) < self._log_tolerance(stats)

    def next_nlive(self, stats):
        if stats.min_nlive >= stats.nlive:
            return stats.nlive
        logtol = self._log_tolerance(stats)
        logr = self.log_remaining_ratio(stats)
        if logr >= 0 or logtol >= 0:
            frac = 0.
        else:
            frac = min(logr / logtol, 1.)
        target = stats.nlive_init - frac * (stats.nlive_init - stats.min_nlive)
        return self._clip_nlive(target, stats)


class ExponentialReducer(Reducer):
    """
    Stopping rule based on the remaining prior mass only: the run stops
    once `X < termination_factor`. The population decays as
    `min_nlive + (nlive_init - min_nlive) * X**exponent`.

    Parameters
    ----------
    termination_factor : float, optional
        Prior mass at which to stop. Defaults to the `termination_factor`
        given to the sampler's `run()`.

    exponent : float, optional
        Exponent of the decay of the number of live points with the
        remaining prior mass. Default is `1`.

    """

    def __init__(self, termination_factor=None, exponent=1.):
        if termination_factor is not None and not (0 < termination_factor <
                                                   1):
            raise ValueError("termination_factor must be in (0, 1)")
        if exponent < 0:
            raise ValueError("exponent must be >= 0")
        self.termination_factor = termination_factor
        self.exponent = exponent

    def _log_termination(self, stats):
        tf = self.termination_factor
        if tf is None:
            tf = stats.termination_factor
        if tf is None or tf <= 0:
            raise ValueError("No valid termination factor was provided.")
        return math.log(tf)

    def should_terminate(self, stats):
        return stats.logvol < self._log_termination(stats)

    def next_nlive(self, stats):
        if stats.min_nlive >= stats.nlive:
            return stats.nlive
        target = stats.min_nlive + (stats.nlive_init - stats.min_nlive
                                    ) * math.exp(self.exponent * stats.logvol)
        return self._clip_nlive(target, stats)
