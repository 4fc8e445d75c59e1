# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""Exception hierarchy for PMFRoot
"""

class PMFRootError(Exception):
    """Top PMFRoot Exception"""

class ParameterError(PMFRootError):
    "Raised when problems with parameters are found."

class SoilCropParameterError(ParameterError):
    "Raised when no soil-crop parameterisation exists for a plant."

class ZoneError(ParameterError):
    "Raised when the root is bound to a missing zone or to more than one zone."

class RemovalFractionError(ParameterError):
    "Raised when the fractions of a biomass removal add up to more than one."

class SoilProfileError(PMFRootError):
    "Raised when a depth or a per-layer array does not fit the soil profile."

class AllocationError(PMFRootError):
    "Raised when dry matter or nitrogen allocations are inconsistent with demand."

class ArbitrationOrderError(AllocationError):
    "Raised when arbitration calls on an organ are made out of order."

class NutrientBalanceError(AllocationError):
    "Raised when nitrogen flows are not balanced."

class MissingUptakeError(PMFRootError):
    "Raised when allocation is requested before any uptake was recorded."

class VariableKioskError(PMFRootError):
    "Raised when problems with kiosk registrations are found."

class DriverDataProviderError(PMFRootError):
    "Raised when problems occur with the DriverDataProviders"
