# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""The fileinput package contains the readers for parameters, agromanagement
and driving variables stored in files.
"""
from .yaml_input import YAMLInputProvider, YAMLAgroManagementReader
from .csv_driver import CSVDriverDataProvider
