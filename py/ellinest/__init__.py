#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
ellinest is a nested sampling package.
The main functionality of ellinest is performed by the
ellinest.MultiEllipsoidSampler class driven by one of the
reducers of ellinest.reducers
"""

from .nestedsamplers import MultiEllipsoidSampler
from .sampler import SamplerState, DrawAttemptsExhaustedError
from .clustering import KmeansClusterer
from .metric import Metric, EuclideanMetric, ManhattanMetric
from .reducers import FerozReducer, ExponentialReducer
from .priors import UniformPrior, NormalPrior, JointPrior
from .utils import InvalidParametersError
from . import bounding
from . import utils

__version__ = "0.1.0"
