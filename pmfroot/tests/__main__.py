# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""This allows to run the PMFRoot tests using `python -m pmfroot.tests`, optionally
running the tests of a single module with `python -m pmfroot.tests --module test_engine`
"""
import argparse
import importlib
import unittest

from . import make_test_suite


def create_parser():
    parser = argparse.ArgumentParser(description='Run PMFRoot test suite', prog="python -m pmfroot.tests")
    parser.add_argument('--module', dest='module', default=None,
                        help='Run only the tests of the given test module, e.g. test_engine', required=False,
                        )
    parser.add_argument('--verbosity', dest='verbosity', type=int, default=2,
                        help='Verbosity of the test runner', required=False,
                        )
    return parser


def main():
    parser = create_parser()
    args = parser.parse_args()

    if args.module is None:
        suite = make_test_suite()
    else:
        module = importlib.import_module("pmfroot.tests.%s" % args.module)
        suite = module.suite()

    unittest.TextTestRunner(verbosity=args.verbosity).run(suite)


if __name__ == "__main__":
    main()
