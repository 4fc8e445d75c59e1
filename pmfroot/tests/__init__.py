# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
""" Collection of tests for PMFRoot.
"""
import unittest
import warnings

from . import test_util
from . import test_soil_profile
from . import test_root_supply
from . import test_root_growth
from . import test_root_allocation
from . import test_root_lifecycle
from . import test_agromanager
from . import test_engine


def make_test_suite():
    """Assemble test suite and return it
    """
    allsuites = unittest.TestSuite([test_util.suite(),
                                    test_soil_profile.suite(),
                                    test_root_supply.suite(),
                                    test_root_growth.suite(),
                                    test_root_allocation.suite(),
                                    test_root_lifecycle.suite(),
                                    test_agromanager.suite(),
                                    test_engine.suite()
                                    ])
    return allsuites


def test_all():
    """Assemble test suite and run the test using the TextTestRunner
    """
    allsuites = make_test_suite()
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        unittest.TextTestRunner(verbosity=2).run(allsuites)
