#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
The base `Sampler` class containing the nested sampling loop and its
bookkeeping. Samplers that know how to draw new live points inherit this
class.

"""

import sys
import math
import warnings
from enum import Enum
import numpy as np
from .results import Results
from .reducers import SamplerStatistics
from .utils import (LogLikelihood, IteratorResult, RunRecord,
                    get_print_func, get_random_generator, get_neff_from_logwt,
                    progress_integration, _LOWL_VAL)

__all__ = ["Sampler", "SamplerState", "DrawAttemptsExhaustedError"]


class SamplerState(Enum):
    INITIALIZING = 1
    SAMPLING = 2
    CLUSTERING = 3
    REDUCING = 4
    TERMINATED = 5


class DrawAttemptsExhaustedError(RuntimeError):
    """
    Raised when no point satisfying the likelihood constraint could be
    drawn within the allowed number of attempts. The sampler is left in the
    `TERMINATED` state and the points removed so far stay available.
    """

    def __init__(self, iteration, ndraw, loglstar):
        self.iteration = iteration
        self.ndraw = ndraw
        self.loglstar = loglstar
        super().__init__(
            "Could not draw a new live point with ln(likelihood) > {0} "
            "after {1} attempts at iteration {2}.".format(
                loglstar, ndraw, iteration))


def _initialize_live_points(prior_transform,
                            loglikelihood,
                            nlive,
                            ndim,
                            rstate,
                            in_support=None,
                            n_attempts=1000):
    """
    Draw the first set of live points uniformly from the unit cube.

    Points with ln(likelihood) = -inf or outside of the prior support are
    discarded and more batches are drawn until `nlive` points with finite
    values are found. The prior mass
    inside the region where the likelihood is non-zero is then estimated
    from the fraction of finite values.

    Parameters
    ----------
    prior_transform: function

    loglikelihood: :class:`~ellinest.utils.LogLikelihood`

    nlive: int
        Number of live-points

    ndim: int
        Number of dimensions

    rstate: :class: numpy.random.Generator

    in_support: function, optional
        Test of the prior support. The likelihood is not evaluated at
        points outside of it.

    n_attempts: int
        Largest number of batches of `nlive` points that are drawn.

    Returns
    -------
    (live_u, live_v, live_logl), logvol_init : tuple
        Points location in cube coordinates, in the original coordinates,
        their logl values and the ln(prior mass) associated with them.
        It will be zero, if all the log(l) values were finite.
    """
    live_u = np.zeros((nlive, ndim))
    live_v = np.zeros((nlive, ndim))
    live_logl = np.zeros(nlive)
    ngoods = 0  # counter for how many finite logl we have found
    nfinite = 0  # finite logl among all the points drawn
    ndrawn = 0
    for iattempt in range(n_attempts):
        cur_live_u = rstate.random(size=(nlive, ndim))
        cur_live_v = np.array([prior_transform(u) for u in cur_live_u])
        if in_support is None:
            cur_live_logl = loglikelihood.map(cur_live_v)
        else:
            good = np.array([in_support(v) for v in cur_live_v], dtype=bool)
            cur_live_logl = np.full(nlive, -np.inf)
            if good.any():
                cur_live_logl[good] = loglikelihood.map(cur_live_v[good])
        ndrawn += nlive

        finite = np.isfinite(cur_live_logl)
        nfinite += finite.sum()
        nextra = min(nlive - ngoods, finite.sum())
        if nextra > 0:
            cur_ind = np.nonzero(finite)[0][:nextra]
            live_u[ngoods:ngoods + nextra] = cur_live_u[cur_ind]
            live_v[ngoods:ngoods + nextra] = cur_live_v[cur_ind]
            live_logl[ngoods:ngoods + nextra] = cur_live_logl[cur_ind]
            ngoods += nextra
        if ngoods == nlive:
            break
    else:
        if ngoods == 0:
            # If we found nothing after many attempts, raise the alarm.
            raise RuntimeError(
                f"After {n_attempts} attempts, we could not "
                "find a single point "
                "that have a valid log-likelihood! Please "
                "check your prior transform and/or "
                "log-likelihood.")
        warnings.warn(f"After {n_attempts} attempts, we could not "
                      f"find {nlive} points "
                      "that have a valid log-likelihood! "
                      "The remaining live points sit at the lowest "
                      "log-likelihood.")
        live_u[ngoods:] = cur_live_u[:nlive - ngoods]
        live_v[ngoods:] = cur_live_v[:nlive - ngoods]
        live_logl[ngoods:] = _LOWL_VAL

    logvol_init = math.log(nfinite / ndrawn)
    if np.ptp(live_logl) == 0:
        warnings.warn(
            'All the initial likelihood values are the same. '
            'You likely have a plateau in the likelihood. '
            'Nested sampling may not be the best sampler in this case.',
            RuntimeWarning)
    return (live_u, live_v, live_logl), logvol_init


class Sampler:
    """
    The basic sampler object that performs the actual nested sampling.
    Subclasses provide the way new live points are drawn
    (:meth:`_new_point`) and the bounding of the live points
    (:meth:`update_bound`).

    Parameters
    ----------
    loglikelihood : function
        Function returning ln(likelihood) given parameters as a 1-d `~numpy`
        array of length `ndim`. It may raise
        :class:`~ellinest.utils.InvalidParametersError` for parameters where
        the likelihood vanishes.

    prior_transform : function
        Function transforming a sample from the a unit cube to the parameter
        space of interest according to the prior. If it also has a
        `logpdf` method (e.g. :class:`~ellinest.priors.Prior`) or, failing
        that, a `density` method, points with zero prior density are never
        accepted.

    ndim : int
        Number of parameters accepted by `prior_transform`.

    nlive_init : int, optional
        Number of live points at the start of the run. Default is `400`.

    min_nlive : int, optional
        Smallest number of live points the reducer may bring the population
        down to. Default is `nlive_init` (constant population).

    rstate : `~numpy.random.Generator` or int, optional
        `~numpy.random.Generator` instance or a seed.

    """

    def __init__(self,
                 loglikelihood,
                 prior_transform,
                 ndim,
                 nlive_init=400,
                 min_nlive=None,
                 rstate=None):

        if ndim < 1:
            raise ValueError("ndim must be >= 1")
        if min_nlive is None:
            min_nlive = nlive_init
        if min_nlive < 2:
            raise ValueError("min_nlive must be >= 2")
        if min_nlive > nlive_init:
            raise ValueError("min_nlive cannot exceed nlive_init")
        if nlive_init <= 2 * ndim:
            warnings.warn(
                "Beware! Having `nlive <= 2 * ndim` is extremely risky!")

        self.state = SamplerState.INITIALIZING
        # distributions
        self.loglikelihood = LogLikelihood(loglikelihood)
        self.prior_transform = prior_transform
        self.prior_logpdf = getattr(prior_transform, 'logpdf', None)
        self.prior_density = getattr(prior_transform, 'density', None)
        self.ndim = ndim

        self.nlive_init = nlive_init
        self.min_nlive = min_nlive

        # random state
        self.rstate = get_random_generator(rstate)

        # live points
        (self.live_u, self.live_v,
         self.live_logl), self.logvol_init = _initialize_live_points(
             self.prior_transform, self.loglikelihood, nlive_init, ndim,
             self.rstate, in_support=self.in_prior_support)
        self.nlive = nlive_init
        self.live_bound = -np.ones(self.nlive, dtype=int)
        self.live_it = np.zeros(self.nlive, dtype=int)
        self.live_nc = np.ones(self.nlive, dtype=int)
        self.live_label = np.zeros(self.nlive, dtype=int)
        self.nclusters = 1

        # sampling
        self.it = 0  # number of replaced live points
        self.eff = 0.  # overall sampling efficiency
        self.added_live = False  # whether leftover live points were used
        self.termination_reason = None

        # running integrals
        self.logz = _LOWL_VAL  # ln(evidence), initially *0.*
        self.logzvar = 0.  # var[ln(evidence)]
        self.h = 0.  # information
        self.logvol = self.logvol_init  # ln(remaining prior mass)
        self.loglstar = _LOWL_VAL  # ln(likelihood) of the last dead point

        # results
        self.saved_run = RunRecord()
        self.state = SamplerState.SAMPLING

    @property
    def ncall(self):
        """Total number of likelihood evaluations."""
        return self.loglikelihood.ncall

    def in_prior_support(self, v):
        """Whether the prior density at the parameter vector `v` is
        positive. The log-density is used where available since the
        density itself underflows for wide or high dimensional priors."""
        if self.prior_logpdf is not None:
            return self.prior_logpdf(v) > -np.inf
        if self.prior_density is not None:
            return self.prior_density(v) > 0
        return True

    def update_bound(self, recluster=False):
        """Update the bounding distribution of the live points. The base
        sampler has none."""
        pass

    def _new_point(self, loglstar, max_ndraw_attempts):
        """
        Draw a new point with ln(likelihood) > `loglstar`.

        Returns u, v, logl, nc (likelihood calls), ndraw (proposals),
        boundidx (ellipsoid the point was drawn from, -1 for the unit cube)
        and label (cluster the point joins).
        """
        raise NotImplementedError

    def _log_shrinkage(self, worst):
        """ln(X_{i-1} / X_i) when the live point `worst` is removed."""
        return 1. / self.nlive

    def statistics(self, termination_factor=None):
        """Immutable snapshot of the run handed to the reducers."""

        return SamplerStatistics(it=self.it,
                                 nlive=self.nlive,
                                 nlive_init=self.nlive_init,
                                 min_nlive=self.min_nlive,
                                 logz=self.logz,
                                 logzvar=self.logzvar,
                                 h=self.h,
                                 logvol=self.logvol,
                                 loglstar=self.loglstar,
                                 logl_max=np.max(self.live_logl),
                                 termination_factor=termination_factor)

    def _delta_logz(self):
        return np.logaddexp(0, np.max(self.live_logl) + self.logvol - self.logz)

    def _delete_live(self, idx):
        for k in [
                'live_u', 'live_v', 'live_logl', 'live_bound', 'live_it',
                'live_nc', 'live_label'
        ]:
            setattr(self, k, np.delete(getattr(self, k), idx, axis=0))
        self.nlive -= 1

    def _kill_worst(self):
        """
        Move the live point with the lowest ln(likelihood) to the dead
        points, shrinking the prior mass and updating the integrals.
        The live point itself is left in place.
        """

        worst = int(np.argmin(self.live_logl))
        dlogvol = self._log_shrinkage(worst)
        self.logvol -= dlogvol

        # Notice we are doing copies here because the live point arrays
        # are updated in-place
        ustar = self.live_u[worst].copy()  # unit cube position
        vstar = self.live_v[worst].copy()  # transformed position
        loglstar = self.live_logl[worst]
        (logwt, self.logz, self.logzvar,
         self.h) = progress_integration(loglstar, self.logz, self.logzvar,
                                        self.h, self.logvol, dlogvol)
        self.loglstar = loglstar

        self.saved_run.append(
            dict(u=ustar,
                 v=vstar,
                 logl=loglstar,
                 logvol=self.logvol,
                 logwt=logwt,
                 logz=self.logz,
                 logzvar=self.logzvar,
                 h=self.h,
                 nc=self.live_nc[worst],
                 boundidx=self.live_bound[worst],
                 it=self.live_it[worst],
                 n=self.nlive,
                 nclusters=self.nclusters))
        return worst, ustar, vstar, logwt

    def _iteration_result(self, worst, ustar, vstar, logwt, nc, ndraw):
        return IteratorResult(worst=worst,
                              ustar=ustar,
                              vstar=vstar,
                              loglstar=self.loglstar,
                              logvol=self.logvol,
                              logwt=logwt,
                              logz=self.logz,
                              logzvar=self.logzvar,
                              h=self.h,
                              nc=nc,
                              ndraw=ndraw,
                              worst_it=self.saved_run['it'][-1],
                              boundidx=self.saved_run['boundidx'][-1],
                              nclusters=self.nclusters,
                              nlive=self.nlive,
                              eff=self.eff,
                              delta_logz=self._delta_logz())

    def _remove_worst(self):
        """Remove the worst live point without replacing it."""

        worst, ustar, vstar, logwt = self._kill_worst()
        self._delete_live(worst)
        return self._iteration_result(worst, ustar, vstar, logwt, 0, 0)

    def _replace_worst(self, max_ndraw_attempts):
        """Remove the worst live point and draw its replacement."""

        worst, ustar, vstar, logwt = self._kill_worst()
        try:
            u, v, logl, nc, ndraw, boundidx, label = self._new_point(
                self.loglstar, max_ndraw_attempts)
        except DrawAttemptsExhaustedError as e:
            # the worst point is already dead
            self._delete_live(worst)
            self.state = SamplerState.TERMINATED
            self.termination_reason = str(e)
            raise

        # Update the live point (previously our "worst" point).
        self.live_u[worst] = u
        self.live_v[worst] = v
        self.live_logl[worst] = logl
        self.live_bound[worst] = boundidx
        self.live_it[worst] = self.it
        self.live_nc[worst] = nc
        self.live_label[worst] = label

        # Increment total number of iterations.
        self.it += 1
        # Compute our sampling efficiency.
        self.eff = 100. * self.it / self.ncall

        return self._iteration_result(worst, ustar, vstar, logwt, nc, ndraw)

    def sample(self,
               reducer,
               ninit_no_clustering=100,
               niter_same_clustering=10,
               max_ndraw_attempts=50000,
               termination_factor=0.01,
               maxiter=None):
        """
        **The main nested sampling loop.** Iteratively replace the worst live
        point with a sample drawn uniformly from the prior within the
        likelihood constraint until the reducer decides the run has
        converged. Instantiates a generator that will be called by the user.

        Parameters
        ----------
        reducer : :class:`~ellinest.reducers.Reducer`
            Decides when to stop and how many live points to keep.

        ninit_no_clustering : int, optional
            Number of initial iterations during which the live points are
            kept in a single cluster. Default is `100`.

        niter_same_clustering : int, optional
            Number of iterations between two clusterings of the live
            points. Default is `10`.

        max_ndraw_attempts : int, optional
            Largest number of proposals for a single new live point.
            Default is `50000`.

        termination_factor : float, optional
            Default tolerance of the reducer. Default is `0.01`.

        maxiter : int, optional
            Maximum number of iterations. Default is no limit.

        Returns
        -------
        worst : int
            Index of the live point with the worst likelihood. This is our
            new dead point sample.

        ustar : `~numpy.ndarray` with shape (ndim,)
            Position of the sample.

        vstar : `~numpy.ndarray` with shape (ndim,)
            Transformed position of the sample.

        loglstar : float
            Ln(likelihood) of the sample.

        logvol : float
            Ln(prior volume) within the sample.

        logwt : float
            Ln(weight) of the sample.

        logz : float
            Cumulative ln(evidence) up to the sample (inclusive).

        logzvar : float
            Estimated cumulative variance on `logz` (inclusive).

        h : float
            Cumulative information up to the sample (inclusive).

        nc : int
            Number of likelihood calls performed before the new
            live point was accepted.

        ndraw : int
            Number of proposals for the new live point.

        worst_it : int
            Iteration when the live (now dead) point was originally proposed.

        boundidx : int
            Index of the ellipsoid the dead point was originally drawn from.

        nclusters : int
            Number of clusters at the current iteration.

        nlive : int
            Number of live points after this iteration.

        eff : float
            The cumulative sampling efficiency (in percent).

        delta_logz : float
            The estimated remaining evidence expressed as the ln(ratio) of the
            current evidence.

        """

        if ninit_no_clustering < 0:
            raise ValueError("ninit_no_clustering must be >= 0")
        if niter_same_clustering < 1:
            raise ValueError("niter_same_clustering must be >= 1")
        if max_ndraw_attempts < 1:
            raise ValueError("max_ndraw_attempts must be >= 1")
        if termination_factor is not None and termination_factor <= 0:
            raise ValueError("termination_factor must be positive")
        if self.state == SamplerState.TERMINATED or self.added_live:
            raise ValueError("The run has already terminated.")
        if maxiter is None:
            maxiter = sys.maxsize

        for it in range(sys.maxsize):
            if it >= maxiter:
                self.termination_reason = 'maxiter'
                break

            self.state = SamplerState.REDUCING
            stats = self.statistics(termination_factor)
            if reducer.should_terminate(stats):
                self.termination_reason = 'converged'
                break
            nlive_next = max(reducer.next_nlive(stats), self.min_nlive)
            while self.nlive > nlive_next:
                yield self._remove_worst()

            if np.ptp(self.live_logl) == 0:
                warnings.warn(
                    'We have reached the plateau in the likelihood we are'
                    ' stopping sampling')
                self.termination_reason = 'plateau'
                break

            recluster = (self.it >= ninit_no_clustering and
                         (self.it - ninit_no_clustering) %
                         niter_same_clustering == 0)
            if recluster:
                self.state = SamplerState.CLUSTERING
            self.update_bound(recluster=recluster)

            self.state = SamplerState.SAMPLING
            yield self._replace_worst(max_ndraw_attempts)

        self.state = SamplerState.TERMINATED

    def run(self,
            reducer,
            ninit_no_clustering=100,
            niter_same_clustering=10,
            max_ndraw_attempts=50000,
            termination_factor=0.01,
            maxiter=None,
            add_live=True,
            print_progress=True,
            print_func=None):
        """
        **A wrapper that executes the main nested sampling loop.**
        Iteratively replace the worst live point with a sample drawn
        uniformly from the prior until the reducer stops the run, then add
        the remaining live points to the samples.

        Parameters
        ----------
        reducer : :class:`~ellinest.reducers.Reducer`
            Decides when to stop and how many live points to keep.

        ninit_no_clustering : int, optional
            Number of initial iterations without clustering.
            Default is `100`.

        niter_same_clustering : int, optional
            Number of iterations between two clusterings. Default is `10`.

        max_ndraw_attempts : int, optional
            Largest number of proposals for a single new live point.
            Default is `50000`.

        termination_factor : float, optional
            Tolerance used by reducers that were not given their own.
            Default is `0.01`.

        maxiter : int, optional
            Maximum number of iterations. Default is no limit.

        add_live : bool, optional
            Whether or not to add the remaining set of live points to
            the list of samples at the end of the run. Default is `True`.

        print_progress : bool, optional
            Whether or not to output a simple summary of the current run that
            updates with each iteration. Default is `True`.

        print_func : function, optional
            A function that prints out the current state of the sampler.
            If not provided, the default :meth:`results.print_fn` is used.

        """

        pbar, print_func = get_print_func(print_func, print_progress)
        try:
            for results in self.sample(
                    reducer,
                    ninit_no_clustering=ninit_no_clustering,
                    niter_same_clustering=niter_same_clustering,
                    max_ndraw_attempts=max_ndraw_attempts,
                    termination_factor=termination_factor,
                    maxiter=maxiter):
                # Print progress.
                if print_progress:
                    print_func(results, self.it, self.ncall)

            # Add remaining live points to samples.
            if add_live:
                for i, results in enumerate(self.add_live_points()):
                    if print_progress:
                        print_func(results,
                                   self.it,
                                   self.ncall,
                                   add_live_it=i + 1)
        finally:
            if pbar is not None:
                pbar.close()

    def add_live_points(self):
        """Add the remaining set of live points to the current set of dead
        points. Every live point receives an equal share of the remaining
        prior mass. Instantiates a generator that will be called by
        the user. Returns the same outputs as :meth:`sample`."""

        # Check if the remaining live points have already been added
        # to the output set of samples.
        if self.added_live:
            raise ValueError("The remaining live points have already "
                             "been added to the list of samples!")
        else:
            self.added_live = True
        self.state = SamplerState.TERMINATED

        nlive = self.nlive
        logvol = self.logvol
        logdvol = logvol - math.log(nlive)
        dlogvol = 1. / nlive
        # The recorded volume of the `i`-th worst point is the expected
        # volume it encloses, `X * (nlive - i) / (nlive + 1)`.
        logvols = logvol + np.log(1. - (np.arange(nlive) + 1.) / (nlive + 1.))
        lsort_idx = np.argsort(self.live_logl)

        # Add contributions from the remaining live points in order
        # from the lowest to the highest log-likelihoods.
        for i in range(nlive):
            idx = lsort_idx[i]
            ustar = self.live_u[idx].copy()
            vstar = self.live_v[idx].copy()
            loglstar = self.live_logl[idx]
            (logwt, self.logz, self.logzvar,
             self.h) = progress_integration(loglstar,
                                            self.logz,
                                            self.logzvar,
                                            self.h,
                                            logvols[i],
                                            dlogvol,
                                            logdvol=logdvol)
            self.loglstar = loglstar
            self.logvol = logvols[i]

            self.saved_run.append(
                dict(u=ustar,
                     v=vstar,
                     logl=loglstar,
                     logvol=self.logvol,
                     logwt=logwt,
                     logz=self.logz,
                     logzvar=self.logzvar,
                     h=self.h,
                     nc=self.live_nc[idx],
                     boundidx=self.live_bound[idx],
                     it=self.live_it[idx],
                     n=nlive - i,
                     nclusters=self.nclusters))

            yield IteratorResult(worst=idx,
                                 ustar=ustar,
                                 vstar=vstar,
                                 loglstar=loglstar,
                                 logvol=self.logvol,
                                 logwt=logwt,
                                 logz=self.logz,
                                 logzvar=self.logzvar,
                                 h=self.h,
                                 nc=0,
                                 ndraw=0,
                                 worst_it=self.live_it[idx],
                                 boundidx=self.live_bound[idx],
                                 nclusters=self.nclusters,
                                 nlive=nlive - i,
                                 eff=self.eff,
                                 delta_logz=np.logaddexp(
                                     0,
                                     np.max(self.live_logl) + self.logvol -
                                     self.logz))

    def add_final_live(self, print_progress=True, print_func=None):
        """
        **A wrapper that executes the loop adding the final live points.**
        Useful after a run that stopped with
        :class:`DrawAttemptsExhaustedError` or with `add_live=False`.

        Parameters
        ----------
        print_progress : bool, optional
            Whether or not to output a simple summary of the current run that
            updates with each iteration. Default is `True`.

        print_func : function, optional
            A function that prints out the current state of the sampler.
            If not provided, the default :meth:`results.print_fn` is used.

        """

        pbar, print_func = get_print_func(print_func, print_progress)
        try:
            for i, results in enumerate(self.add_live_points()):
                if print_progress:
                    print_func(results, self.it, self.ncall, add_live_it=i + 1)
        finally:
            if pbar is not None:
                pbar.close()

    def get_log_evidence(self):
        """ln(evidence) accumulated so far."""
        if len(self.saved_run) == 0:
            return -np.inf
        return self.logz

    def get_log_evidence_error(self):
        """Standard deviation of ln(evidence)."""
        return math.sqrt(abs(self.logzvar))

    def get_information_gain(self):
        """Information gain (Kullback-Leibler divergence of the posterior
        from the prior) in nats."""
        return self.h

    @property
    def posterior_sample(self):
        """Parameters of the dead points, with shape (ndim, nsamples)."""
        return np.array(self.saved_run['v']).reshape(-1, self.ndim).T

    @property
    def logl_posterior(self):
        return np.array(self.saved_run['logl'])

    @property
    def logwt_posterior(self):
        return np.array(self.saved_run['logwt'])

    @property
    def results(self):
        """Saved results from the nested sampling run."""

        d = {}
        for k in [
                'nc', 'v', 'it', 'u', 'logwt', 'logl', 'logvol', 'logz',
                'logzvar', 'h', 'n', 'boundidx', 'nclusters'
        ]:
            d[k] = np.array(self.saved_run[k])

        # Add all saved samples to the results.
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            results = [('nlive', self.nlive_init), ('niter', self.it),
                       ('ncall', self.ncall), ('eff', self.eff),
                       ('samples', d['v'].reshape(-1, self.ndim)),
                       ('samples_u', d['u'].reshape(-1, self.ndim))]
            for k in ['it', 'n']:
                results.append(('samples_' + k, d[k].astype(int)))
            results.append(('samples_bound', d['boundidx'].astype(int)))
            results.append(('nclusters', d['nclusters'].astype(int)))
            for k in ['logwt', 'logl', 'logvol', 'logz']:
                results.append((k, d[k]))
            results.append(('logzerr', np.sqrt(np.abs(d['logzvar']))))
            results.append(('information', d['h']))

        return Results(results)

    @property
    def n_effective(self):
        """
        Estimate the effective number of posterior samples using the Kish
        Effective Sample Size (ESS) where `ESS = sum(wts)^2 / sum(wts^2)`.
        Note that this is `len(wts)` when `wts` are uniform and
        `1` if there is only one non-zero element in `wts`.

        """
        logwt = self.saved_run['logwt']
        if len(logwt) == 0 or np.isneginf(np.max(logwt)):
            # If there are no saved weights, or its -inf return 0.
            return 0
        else:
            return get_neff_from_logwt(np.asarray(logwt))
