#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Utilities for handling results.

"""

import os
import sys
import copy
import shutil
from collections import namedtuple
import numpy as np

__all__ = ["Results", "print_fn"]

PrintFnArgs = namedtuple('PrintFnArgs',
                         ['niter', 'short_str', 'mid_str', 'long_str'])


def print_fn(results,
             niter,
             ncall,
             add_live_it=None,
             pbar=None):
    """
    The default function used to print out results in real time.

    Parameters
    ----------

    results : tuple
        Collection of variables output from the current state of the sampler
        (an `IteratorResult`).

    niter : int
        The current iteration of the sampler.

    ncall : int
        The total number of function calls at the current iteration.

    add_live_it : int, optional
        If the last set of live points are being added explicitly, this
        quantity tracks the sorted index of the current live point being added.

    pbar : `tqdm.tqdm`, optional
        Progress bar to update. If not provided the status line is written
        to `sys.stderr`.

    """
    fn_args = get_print_fn_args(results,
                                niter,
                                ncall,
                                add_live_it=add_live_it)
    if pbar is None:
        print_fn_fallback(fn_args)
    else:
        print_fn_tqdm(pbar, fn_args)


def get_print_fn_args(results, niter, ncall, add_live_it=None):
    # Extract results at the current iteration.
    loglstar = results.loglstar
    logz = results.logz
    logzvar = results.logzvar
    delta_logz = results.delta_logz

    # Adjusting outputs for printing.
    if delta_logz > 1e6:
        delta_logz = np.inf
    if logzvar >= 0. and logzvar <= 1e6:
        logzerr = np.sqrt(logzvar)
    else:
        logzerr = np.nan
    if logz <= -1e6:
        logz = -np.inf
    if loglstar <= -1e6:
        loglstar = -np.inf

    # Constructing output.
    long_str = []
    if add_live_it is not None:
        long_str.append("+{:d}".format(add_live_it))
    short_str = list(long_str)
    long_str.append("nlive: {:d}".format(results.nlive))
    long_str.append("ncluster: {:d}".format(results.nclusters))
    long_str.append("ndraw: {:d}".format(results.ndraw))
    long_str.append("ncall: {:d}".format(ncall))
    long_str.append("eff(%): {:6.3f}".format(results.eff))
    short_str.append(long_str[-1])
    long_str.append("logl*: {:6.3f}".format(loglstar))
    short_str.append("logl*: {:6.1f}".format(loglstar))
    long_str.append("logz: {:6.3f} +/- {:6.3f}".format(logz, logzerr))
    short_str.append("logz: {:6.1f}+/-{:.1f}".format(logz, logzerr))
    mid_str = list(short_str)
    # ln(1 + Z_rem / Z)
    long_str.append("dlogz: {:6.3f}".format(delta_logz))
    mid_str.append("dlogz: {:6.1f}".format(delta_logz))

    return PrintFnArgs(niter=niter,
                       short_str=short_str,
                       mid_str=mid_str,
                       long_str=long_str)


def print_fn_tqdm(pbar, fn_args):
    pbar.set_postfix_str(" | ".join(fn_args.long_str), refresh=False)
    pbar.update(fn_args.niter - pbar.n)


def print_fn_fallback(fn_args):
    niter, short_str, mid_str, long_str = (fn_args.niter, fn_args.short_str,
                                           fn_args.mid_str, fn_args.long_str)

    long_str = ["iter: {:d}".format(niter)] + long_str

    # Printing.
    long_str = ' | '.join(long_str)
    mid_str = ' | '.join(mid_str)
    short_str = '|'.join(short_str)
    if sys.stderr.isatty():
        columns = shutil.get_terminal_size(fallback=(80, 25))[0]
    else:
        columns = 200
    if columns > len(long_str):
        sys.stderr.write("\r" + long_str + ' ' * (columns - len(long_str) - 2))
    elif columns > len(mid_str):
        sys.stderr.write("\r" + mid_str + ' ' * (columns - len(mid_str) - 2))
    else:
        sys.stderr.write("\r" + short_str + ' ' *
                         (columns - len(short_str) - 2))
    sys.stderr.flush()


# List of results attributes as
# Name, type, description, shape (if array)
_RESULTS_STRUCTURE = [
    ('nlive', 'int', 'Number of live points at the start of the run', None),
    ('niter', 'int', 'number of iterations', None),
    ('ncall', 'int', 'Total number likelihood calls', None),
    ('eff', 'float', 'Sampling efficiency (in percent)', None),
    ('samples', 'array', 'The coordinates of the samples', 'nsamples,ndim'),
    ('samples_u', 'array[float]', '''The coordinates of the samples in the
    unit cube coordinate system''', 'nsamples,ndim'),
    ('samples_it', 'array[int]',
     "the sampling iteration when the sample was proposed", 'nsamples'),
    ('samples_n', 'array[int]',
     'The number of live points when the sample was removed', 'nsamples'),
    ('samples_bound', 'array[int]',
     "The index of the ellipsoid the sample was drawn from "
     "(-1 for the unit cube)", 'nsamples'),
    ('nclusters', 'array[int]', 'Number of clusters at each iteration',
     'nsamples'),
    ('logl', 'array[float]', 'Log likelihood', 'nsamples'),
    ('logvol', 'array[float]', 'Log prior mass of the samples', 'nsamples'),
    ('logwt', 'array', 'Array of log-posterior weights', 'nsamples'),
    ('logz', 'array', 'Array of cumulative log(Z) integrals', 'nsamples'),
    ('logzerr', 'array', 'Array of uncertainty of log(Z)', 'nsamples'),
    ('information', 'array[float]', 'Information Integral H', 'nsamples'),
]


class Results:
    """
    Contains the full output of a run along with a set of helper
    functions for summarizing the output.
    The object is meant to be unchangeable record of the nested run.

    Results attributes (name, type, description, array size):
    """

    _ALLOWED = set([_[0] for _ in _RESULTS_STRUCTURE])

    def __init__(self, key_values):
        """
        Initialize the results using the list of key value pairs
        or a dictionary
        Results([('logl', [1, 2, 3]), ('samples_it',[1,2,3])])
        Results(dict(logl=[1, 2, 3], samples_it=[1,2,3]))
        """
        self._keys = []
        self._initialized = False
        if isinstance(key_values, dict):
            key_values_list = key_values.items()
        else:
            key_values_list = key_values
        for k, v in key_values_list:
            assert (k not in self._keys)  # ensure no duplicates
            assert k in Results._ALLOWED, k
            self._keys.append(k)
            setattr(self, k, copy.copy(v))
        required_keys = ['samples', 'logl', 'logwt', 'logz']
        for k in required_keys:
            if k not in self._keys:
                raise ValueError('Key %s must be provided' % k)
        self._initialized = True

    def __copy__(self):
        # this will be a deep copy
        return Results(self.asdict().items())

    def copy(self):
        '''
        return a copy of the object
        all numpy arrays will be copied too
        '''
        return self.__copy__()

    def __setattr__(self, name, value):
        if name[0] != '_' and self._initialized:
            raise RuntimeError("Cannot set attributes directly")
        super().__setattr__(name, value)

    def __getitem__(self, name):
        if name in self._keys:
            return getattr(self, name)
        else:
            raise KeyError(name)

    def __repr__(self):
        m = max(list(map(len, list(self._keys)))) + 1
        return '\n'.join(
            [k.rjust(m) + ': ' + repr(getattr(self, k)) for k in self._keys])

    def __contains__(self, key):
        return key in self._keys

    def keys(self):
        """ Return the list of attributes/keys stored in Results """
        return self._keys

    def items(self):
        """
Return the list of items in the results object as list of key,value pairs
        """
        return ((k, getattr(self, k)) for k in self._keys)

    def asdict(self):
        """
        Return contents of the Results object as dictionary
        """
        # importantly here we copy attribute values
        return dict((k, copy.copy(getattr(self, k))) for k in self._keys)

    def posterior_probability(self):
        """
        Posterior probability of each sample, `exp(logwt - logz)`. These are
        probabilities (they sum to one), not densities.
        """
        return np.exp(np.asarray(self.logwt) - self.logz[-1])

    def samples_equal(self, rstate=None):
        """
        Return the equally weighted samples in random order.
        """
        from .utils import resample_equal, get_random_generator
        rstate = get_random_generator(rstate)
        wt = self.posterior_probability()
        samples = resample_equal(self.samples, wt / wt.sum(), rstate=rstate)
        return rstate.permutation(samples)

    def parameter_estimation(self, credible_level=68.27):
        """
        Summary statistics of the marginal posterior of every parameter.

        Parameters
        ----------
        credible_level : float, optional
            Probability (in percent) enclosed by the credible interval.
            Default is `68.27`.

        Returns
        -------
        estimates : `~numpy.ndarray` with shape (ndim, 5)
            For every parameter: mean, median, mode, and the distances from
            the mode to the lower and to the upper end of the shortest
            credible interval.

        """
        if not 0 < credible_level < 100:
            raise ValueError("credible_level must be in (0, 100)")
        samples = np.atleast_2d(np.asarray(self.samples))
        prob = self.posterior_probability()
        prob = prob / prob.sum()
        level = credible_level / 100.
        ndim = samples.shape[1]
        estimates = np.zeros((ndim, 5))
        for i in range(ndim):
            values, marginal = _merge_marginal(samples[:, i], prob)
            mean = np.sum(values * marginal)
            cdf = np.cumsum(marginal)
            median = values[min(np.searchsorted(cdf, 0.5), len(values) - 1)]
            imode = np.argmax(marginal)
            left, right = _shortest_interval(marginal, imode, level)
            estimates[i] = (mean, median, values[imode],
                            values[imode] - values[left],
                            values[right] - values[imode])
        return estimates

    def summary(self):
        """Return a formatted string giving a quick summary
        of the results."""

        res = ("nlive: {:d}\n"
               "niter: {:d}\n"
               "ncall: {:d}\n"
               "eff(%): {:6.3f}\n"
               "logz: {:6.3f} +/- {:6.3f}\n"
               "H: {:6.3f}".format(self.nlive, self.niter, self.ncall,
                                   self.eff, self.logz[-1], self.logzerr[-1],
                                   self.information[-1]))

        print('Summary\n=======\n' + res)

    def write_parameters(self, prefix, extension='.txt'):
        """Write the samples of every parameter to its own one-column file
        `prefix000.txt`, `prefix001.txt`, ..."""

        samples = np.atleast_2d(np.asarray(self.samples))
        for i in range(samples.shape[1]):
            np.savetxt('{0}{1:03d}{2}'.format(prefix, i, extension),
                       samples[:, i],
                       fmt='%.9e',
                       header='Posterior sample from nested sampling\n'
                       'Parameter {0:d}'.format(i))

    def write_loglikelihood(self, path):
        np.savetxt(path,
                   np.asarray(self.logl),
                   fmt='%.9e',
                   header='Posterior sample from nested sampling\n'
                   'log(Likelihood)')

    def write_evidence_information(self, path):
        np.savetxt(path,
                   np.array(
                       [[self.logz[-1], self.logzerr[-1],
                         self.information[-1]]]),
                   fmt='%.9e',
                   header='Evidence results from nested sampling\n'
                   'log(Evidence)  Error of log(Evidence)  Information Gain')

    def write_posterior_probability(self, path):
        np.savetxt(path,
                   self.posterior_probability(),
                   fmt='%.9e',
                   header='Posterior probability distribution from nested '
                   'sampling')

    def write_parameter_summary(self,
                                path,
                                credible_level=68.27,
                                write_marginal=False):
        """
        Write the five-column summary of :meth:`parameter_estimation` to
        `path`. With `write_marginal`, the marginal distribution of every
        parameter (distinct sample values and their summed posterior
        probabilities) also goes to `<root>_marginal000<ext>`,
        `<root>_marginal001<ext>`, ... where `path = <root><ext>`.
        """
        np.savetxt(path,
                   self.parameter_estimation(credible_level),
                   fmt='%.9e',
                   header='Summary of Parameter Estimation from nested '
                   'sampling\n'
                   'Credible intervals are the shortest credible intervals\n'
                   'Credible level: {0:.2f} %\n'
                   'Column #1: Expectation\n'
                   'Column #2: Median\n'
                   'Column #3: Mode\n'
                   'Column #4: Lower Credible Interval (CI)\n'
                   'Column #5: Upper Credible Interval (CI)'.format(
                       credible_level))
        if write_marginal:
            self.write_marginals(path)

    def write_marginals(self, path):
        """Write the merged marginal distribution of every parameter to its
        own two-column file next to `path`."""

        root, ext = os.path.splitext(path)
        samples = np.atleast_2d(np.asarray(self.samples))
        prob = self.posterior_probability()
        prob = prob / prob.sum()
        for i in range(samples.shape[1]):
            values, marginal = _merge_marginal(samples[:, i], prob)
            np.savetxt('{0}_marginal{1:03d}{2}'.format(root, i, ext),
                       np.column_stack([values, marginal]),
                       fmt='%.9e',
                       header='Marginal posterior distribution from nested '
                       'sampling\n'
                       'Parameter {0:d}\n'
                       'Column #1: Parameter value\n'
                       'Column #2: Marginal probability'.format(i))


Results.__doc__ += '\n\n' + str('\n'.join(
    ['| ' + str(_) for _ in _RESULTS_STRUCTURE])) + '\n'


def _merge_marginal(values, prob):
    """
    Sort the values of one parameter and merge the probabilities of
    identical values (stable sort followed by a run-length merge).
    """
    order = np.argsort(values, kind='stable')
    values = values[order]
    prob = prob[order]
    new_run = np.concatenate([[True], values[1:] != values[:-1]])
    starts = np.nonzero(new_run)[0]
    return values[starts], np.add.reduceat(prob, starts)


def _shortest_interval(marginal, imode, level):
    """
    Grow an interval around the mode, always adding the more probable of
    the two neighbouring values, until it holds `level` of the
    probability. Returns the indices of both ends.
    """
    left = right = imode
    total = marginal[imode]
    n = len(marginal)
    while total < level and (left > 0 or right < n - 1):
        if right == n - 1 or (left > 0
                               and marginal[left - 1] >= marginal[right + 1]):
            left -= 1
            total += marginal[left]
        else:
            right += 1
            total += marginal[right]
    return left, right
