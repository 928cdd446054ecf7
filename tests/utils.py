import numpy as np
import os
'''
Shared helpers of the tests. The seed can be set through the
ELLINEST_TEST_RANDOMSEED environment variable and the progress output
enabled through ELLINEST_TEST_PRINTING.
'''


def get_rstate(seed=None):
    if seed is None:
        kw = 'ELLINEST_TEST_RANDOMSEED'
        if kw in os.environ:
            seed = int(os.environ[kw])
        else:
            seed = 56432
    return np.random.default_rng(seed)


def get_printing():
    kw = 'ELLINEST_TEST_PRINTING'
    if kw in os.environ:
        return int(os.environ[kw])
    else:
        return False
