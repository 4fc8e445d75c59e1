# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""Base classes for creating PMFRoot simulation units.

In general these classes are not to be used directly, but are to be subclassed
when creating simulation units.
"""
from .variablekiosk import VariableKiosk
from .engine import BaseEngine
from .parameter_providers import ParameterProvider
from .simulationobject import SimulationObject, AncillaryObject
from .states_rates import StatesTemplate, RatesTemplate, ParamTemplate
from .drivers import DriverDataContainer, DriverDataProvider
from .dispatcher import DispatcherObject
from .config_loader import ConfigurationLoader
