#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Bounding classes used when proposing new live points, along with a number of
useful helper functions. Bounding objects include:

    UnitCube:
        The unit N-cube (unconstrained draws from the prior).

    Ellipsoid:
        Bounding ellipsoid.

    MultiEllipsoid:
        A set of (possibly overlapping) bounding ellipsoids.

All bounds live in the unit cube coordinates of the prior.

"""

import math
import warnings
import numpy as np
from numpy import cov as mle_cov
from scipy import linalg as lalg
from scipy.special import logsumexp, gammaln
from .utils import unitcheck

__all__ = [
    "UnitCube", "Ellipsoid", "MultiEllipsoid", "DegenerateEllipsoidError",
    "logvol_prefactor", "randsphere", "rand_choice", "bounding_ellipsoid",
    "regularized_ellipsoid"
]

# largest ratio of the largest to the smallest eigenvalue of a shape
# matrix before it is considered singular
MAX_CONDITION_NUMBER = 1e12

# the outermost point is placed at (x-v)^T A (x-v) = 1 - ROUND_DELTA
ROUND_DELTA = 1e-3


class DegenerateEllipsoidError(ValueError):
    """
    Raised when a set of points cannot constrain a proper ellipsoid, i.e.
    when there are fewer than `ndim + 1` points or their covariance matrix
    is singular.
    """
    pass


class UnitCube:
    """
    An N-dimensional unit cube.

    Parameters
    ----------
    ndim : int
        The number of dimensions of the unit cube.

    """

    def __init__(self, ndim):
        self.n = ndim  # dimension
        self.logvol = 0.  # ln(volume)
        self.nells = 1

    def contains(self, x):
        """Checks if unit cube contains the point `x`."""

        return unitcheck(x)

    def volume(self):
        return 1.

    def sample(self, rstate=None):
        """
        Draw a sample uniformly distributed within the unit cube.

        Returns
        -------
        x : `~numpy.ndarray` with shape (ndim,)
            A coordinate within the unit cube.

        """

        return rstate.uniform(size=self.n)

    def propose(self, rstate=None):
        """Same interface as :meth:`MultiEllipsoid.propose`. The cube is not
        one of the ellipsoids, so the returned index is `-1`."""

        return self.sample(rstate=rstate), -1, 1

    def accept_overlap(self, q, rstate=None):
        return True


class Ellipsoid:
    """
    An N-dimensional ellipsoid defined by::

        (x - v)^T A (x - v) = 1

    where the vector `v` is the center of the ellipsoid and `A` is a
    symmetric, positive-definite `N x N` matrix.

    Parameters
    ----------
    ctr : `~numpy.ndarray` with shape (N,)
        Coordinates of ellipsoid center.

    cov : `~numpy.ndarray` with shape (N, N)
        Covariance matrix describing the axes before enlargement
        (`A = cov^-1`).

    enlarge : float, optional
        Fraction by which every axis is enlarged: axes are multiplied by
        `1 + enlarge`. Default is `0` (no enlargement).

    """

    def __init__(self, ctr, cov, enlarge=0.):
        if enlarge < 0:
            raise ValueError("The enlargement fraction must be >= 0.")
        self.n = len(ctr)  # dimension
        self.ctr = np.asarray(ctr, dtype=float)  # center coordinates
        self.enlarge = enlarge
        # covariance matrix
        self.cov = np.asarray(cov, dtype=float) * (1. + enlarge)**2

        # The eigenvalues (l) of `cov` are (a^2, b^2, ...) where
        # (a, b, ...) are the lengths of principle axes.
        # The eigenvectors (v) are the normalized principle axes.
        l, v = lalg.eigh(self.cov)
        if not np.all((l > 0.) & (np.isfinite(l))):
            raise DegenerateEllipsoidError(
                "The matrix defining the ellipsoid {0} is apparently "
                "singular with l={1}.".format(self.cov, l))
        self.axlens = np.sqrt(l)
        self.logvol = logvol_prefactor(self.n) + 0.5 * np.log(l).sum()
        self.am = v @ np.diag(1. / l) @ v.T  # precision matrix
        self.axes = lalg.cholesky(self.cov, lower=True)  # transformation axes

    def volume(self):
        """Volume of the ellipsoid."""

        return math.exp(self.logvol)

    def distance(self, x):
        """Compute the normalized distance to `x` from the center of the
        ellipsoid."""

        d = x - self.ctr

        return np.sqrt(np.dot(np.dot(d, self.am), d))

    def contains(self, x):
        """Checks if ellipsoid contains `x`."""

        return self.distance(x) <= 1.0

    def sample(self, rstate=None):
        """
        Draw a sample uniformly distributed within the ellipsoid.

        Returns
        -------
        x : `~numpy.ndarray` with shape (ndim,)
            A coordinate within the ellipsoid.

        """

        return self.ctr + np.dot(self.axes, randsphere(self.n, rstate=rstate))

    def samples(self, nsamples, rstate=None):
        """
        Draw `nsamples` samples uniformly distributed within the ellipsoid.

        Returns
        -------
        x : `~numpy.ndarray` with shape (nsamples, ndim)
            A collection of coordinates within the ellipsoid.

        """

        return np.array([self.sample(rstate=rstate) for i in range(nsamples)])


class MultiEllipsoid:
    """
    A collection of M N-dimensional ellipsoids.

    Parameters
    ----------
    ells : list of `Ellipsoid` objects with length M
        A set of `Ellipsoid` objects that make up the collection of
        N-ellipsoids.

    """

    def __init__(self, ells):
        if len(ells) == 0:
            raise ValueError("At least one ellipsoid is required.")
        self.nells = len(ells)
        self.ells = list(ells)
        self.n = self.ells[0].n
        self.ctrs = np.array([ell.ctr for ell in self.ells])
        self.ams = np.array([ell.am for ell in self.ells])
        self.logvols = np.array([ell.logvol for ell in self.ells])
        self.logvol_tot = logsumexp(self.logvols)

    def volume_shares(self):
        """Fraction of the summed volume carried by each ellipsoid."""

        return np.exp(self.logvols - self.logvol_tot)

    def _quadforms(self, x):
        delt = x[None, :] - self.ctrs
        return np.einsum('ai,aij,aj->a', delt, self.ams, delt)

    def within(self, x, j=None):
        """Checks which ellipsoid(s) `x` falls within, skipping the `j`-th
        ellipsoid if need be."""

        mask = self._quadforms(x) <= 1
        if j is not None:
            mask[j] = False
        return np.nonzero(mask)[0]

    def overlap(self, x, j=None):
        """Checks how many ellipsoid(s) `x` falls within, skipping the `j`-th
        ellipsoid."""

        return len(self.within(x, j=j))

    def contains(self, x):
        """Checks if the set of ellipsoids contains `x`."""

        return np.any(self._quadforms(x) <= 1)

    def nearest(self, x):
        """Index of the ellipsoid with the smallest normalized distance
        to `x`."""

        return int(np.argmin(self._quadforms(x)))

    def propose(self, rstate=None):
        """
        One draw attempt from the union of ellipsoids. An ellipsoid is
        selected with probability proportional to its volume and a point
        is drawn uniformly inside it.

        Returns
        -------
        x : `~numpy.ndarray` with shape (ndim,)
            A coordinate within the set of ellipsoids.

        idx : int
            The index of the ellipsoid `x` was sampled from.

        q : int
            The number of ellipsoids `x` falls within. The draw has to be
            accepted with probability `1 / q` (see :meth:`accept_overlap`)
            for the accepted points to be uniform over the union.

        """

        if self.nells == 1:
            return self.ells[0].sample(rstate=rstate), 0, 1

        idx = rand_choice(self.volume_shares(), rstate)
        x = self.ells[idx].sample(rstate=rstate)
        q = max(self.overlap(x), 1)  # round-off at the boundary

        return x, idx, q

    def accept_overlap(self, q, rstate=None):
        """Accept a point lying within `q` ellipsoids with probability
        `1 / q`."""

        return q == 1 or rstate.uniform() < 1. / q

    def sample(self, rstate=None):
        """
        Sample a point uniformly distributed within the *union* of ellipsoids.

        Returns
        -------
        x : `~numpy.ndarray` with shape (ndim,)
            A coordinate within the set of ellipsoids.

        idx : int
            The index of the ellipsoid `x` was sampled from.

        """

        while True:
            x, idx, q = self.propose(rstate=rstate)
            if self.accept_overlap(q, rstate=rstate):
                return x, idx

    def samples(self, nsamples, rstate=None):
        """
        Draw `nsamples` samples uniformly distributed within the *union* of
        ellipsoids.

        Returns
        -------
        xs : `~numpy.ndarray` with shape (nsamples, ndim)
            A collection of coordinates within the set of ellipsoids.

        """

        return np.array(
            [self.sample(rstate=rstate)[0] for i in range(nsamples)])


def logvol_prefactor(n, p=2.):
    """
    Returns the ln(volume constant) for an `n`-dimensional sphere with an
    :math:`L^p` norm. The constant is defined as::

        lnf = n * ln(2.) + n * LogGamma(1./p + 1) - LogGamma(n/p + 1.)

    By default the `p=2.` norm is used (i.e. the standard Euclidean norm).

    """

    p *= 1.  # convert to float in case user inputs an integer
    lnf = (n * np.log(2.) + n * gammaln(1. / p + 1.) - gammaln(n / p + 1))

    return lnf


def randsphere(n, rstate=None):
    """Draw a point uniformly within an `n`-dimensional unit sphere."""

    z = rstate.standard_normal(size=n)  # initial n-dim vector
    xhat = z * (rstate.uniform()**(1. / n) / lalg.norm(z, check_finite=False))
    return xhat


def rand_choice(pb, rstate):
    """ Optimized version of numpy's random.choice
    Return an index of a point selected with the probability pb
    The pb must sum to 1
    """
    p1 = np.cumsum(pb)
    xr = rstate.uniform()
    return min(np.searchsorted(p1, xr), len(pb) - 1)


def _check_shape(covar):
    """Return the eigen decomposition of `covar` if it is a usable,
    well-conditioned shape matrix, otherwise `None`."""

    try:
        eigval, eigvec = lalg.eigh(covar, check_finite=False)
    except lalg.LinAlgError:
        return None
    if not np.isfinite(eigval).all() or eigval.max() <= 0:
        return None
    if eigval.min() <= eigval.max() / MAX_CONDITION_NUMBER:
        return None
    return eigval, eigvec


def _bound_points(points, ctr, covar, am):
    """Rescale `covar` (and its inverse `am`) so the outermost of `points`
    sits just inside the boundary."""

    delta = points - ctr
    fmax = np.einsum('ij,jk,ik->i', delta, am, delta).max()
    if fmax > 0:
        mult = fmax / (1. - ROUND_DELTA)
        covar = covar * mult
        am = am / mult
    return covar, am


def bounding_ellipsoid(points, enlarge=0.):
    """
    Calculate the bounding ellipsoid containing a collection of points.

    The center is the mean of the points and the shape is their covariance,
    rescaled so that every point is enclosed. The axes are then enlarged by
    the fraction `enlarge`.

    Parameters
    ----------
    points : `~numpy.ndarray` with shape (npoints, ndim)
        A set of coordinates.

    enlarge : float, optional
        Enlargement fraction of the axes. Default is `0`.

    Returns
    -------
    ellipsoid : :class:`Ellipsoid`
        The bounding :class:`Ellipsoid` object.

    Raises
    ------
    DegenerateEllipsoidError
        If there are fewer than `ndim + 1` points or the points do not span
        the space.

    """

    points = np.atleast_2d(points)
    npoints, ndim = points.shape

    if npoints < ndim + 1:
        raise DegenerateEllipsoidError(
            "Cannot compute a bounding ellipsoid of {0} points in {1} "
            "dimensions.".format(npoints, ndim))

    # Calculate covariance of points.
    ctr = np.mean(points, axis=0)
    # When ndim = 1, `np.cov` returns a 0-d array. Make it a 1x1 2-d array.
    covar = np.atleast_2d(mle_cov(points, rowvar=False))

    decomp = _check_shape(covar)
    if decomp is None:
        raise DegenerateEllipsoidError(
            "The covariance of the {0} points is singular.".format(npoints))
    eigval, eigvec = decomp
    am = eigvec @ np.diag(1. / eigval) @ eigvec.T

    # Points should obey `(x-v)^T A (x-v) <= 1`, so we scale A up or down
    # to make the "outermost" point obey `(x-v)^T A (x-v) = 1 - (a bit)`.
    covar, am = _bound_points(points, ctr, covar, am)

    return Ellipsoid(ctr, covar, enlarge=enlarge)


def regularized_ellipsoid(points, enlarge=0., scale=None, ntries=100):
    """
    Bounding ellipsoid of a set of points that is too small or too flat for
    :func:`bounding_ellipsoid`. The covariance is blended with the diagonal
    matrix `diag(scale)`, with a weight increasing from `1e-10` to `1`,
    until it is well conditioned.

    Parameters
    ----------
    points : `~numpy.ndarray` with shape (npoints, ndim)
        A set of coordinates (a single point is allowed).

    enlarge : float, optional
        Enlargement fraction of the axes. Default is `0`.

    scale : `~numpy.ndarray` with shape (ndim,), optional
        Typical squared extent along each axis, e.g. the variances of the
        whole live point population. Default is the variance of `points`.

    ntries : int, optional
        Number of regularisation steps. Default is `100`.

    Returns
    -------
    ellipsoid : :class:`Ellipsoid`

    """

    points = np.atleast_2d(points)
    npoints, ndim = points.shape
    ctr = np.mean(points, axis=0)
    if npoints > 1:
        covar0 = np.atleast_2d(mle_cov(points, rowvar=False))
    else:
        covar0 = np.zeros((ndim, ndim))
    if scale is None:
        scale = np.diag(covar0)
    scale = np.asarray(scale, dtype=float)
    good = np.isfinite(scale) & (scale > 0)
    if not good.any():
        scale = np.ones(ndim)
    else:
        scale = np.where(good, scale, scale[good].max())

    coeffmin = 1e-10
    decomp = None
    for trial in range(ntries):
        # this starts at coeffmin when trial=0 and ends at 1
        # when trial == ntries-1
        coeff = coeffmin * (1. / coeffmin)**(trial * 1. / (ntries - 1))
        covar = (1. - coeff) * covar0 + coeff * np.diag(scale)
        decomp = _check_shape(covar)
        if decomp is not None:
            break
    if decomp is None:
        warnings.warn("Failed to regularize the ellipsoid axes. "
                      "Defaulting to a sphere.")
        covar = np.eye(ndim)
        decomp = np.ones(ndim), np.eye(ndim)
    eigval, eigvec = decomp
    am = eigvec @ np.diag(1. / eigval) @ eigvec.T
    covar, am = _bound_points(points, ctr, covar, am)

    return Ellipsoid(ctr, covar, enlarge=enlarge)
