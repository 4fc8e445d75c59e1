# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""Empirical functions parameterising the root.

Several root properties (senescence rate, partition fraction, N
concentrations, ...) can be given as a constant or as a table of XY pairs
over a driving variable or a published model variable. In the parameter
files they are defined as::

    SenescenceRate: 0.01
    TemperatureEffect:
        XYPairs: [0., 0., 10., 0.5, 25., 1.0, 35., 0.]
        X: TEMP

Optional functions that are not defined fall back to their default value,
and some of them (such as `PartitionFraction`) have no default at all, in
which case the behaviour depending on them is switched off.
"""
import numbers

from ..util import Afgen
from .. import exceptions as exc

REQUIRED = object()


class Constant(object):
    """A function returning a fixed value."""

    def __init__(self, value):
        self.value = float(value)

    def __call__(self, drv=None, kiosk=None):
        return self.value

    def __str__(self):
        return "Constant(%s)" % self.value


class XYPairs(object):
    """Linear interpolation over XY pairs with X taken from the driving
    variables or, when not a driving variable, from the kiosk.

    :param tbl_xy: list of XY pairs
    :param x: name of the variable providing the X value
    """

    def __init__(self, tbl_xy, x):
        self.afgen = Afgen(tbl_xy)
        self.x = x

    def __call__(self, drv=None, kiosk=None):
        if drv is not None and getattr(drv, self.x, None) is not None:
            return self.afgen(getattr(drv, self.x))
        if kiosk is not None and self.x in kiosk:
            return self.afgen(kiosk[self.x])
        msg = "Variable '%s' needed for XY pairs function not available." % self.x
        raise exc.ParameterError(msg)

    def __str__(self):
        return "XYPairs(X=%s, %s)" % (self.x, list(zip(self.afgen.x_list, self.afgen.y_list)))


def make_function(name, definition):
    """Builds a function from a number or a dict with XYPairs and X."""
    if isinstance(definition, (Constant, XYPairs)):
        return definition
    if isinstance(definition, numbers.Number) and not isinstance(definition, bool):
        return Constant(definition)
    if isinstance(definition, dict):
        try:
            return XYPairs(definition["XYPairs"], definition["X"])
        except KeyError as e:
            msg = "Function '%s' defined as table misses key %s." % (name, e)
            raise exc.ParameterError(msg)
    msg = "Cannot build function '%s' from definition: %s" % (name, definition)
    raise exc.ParameterError(msg)


class OptionalFunction(object):
    """A function that may be absent from the parameters.

    :param name: parameter name of the function
    :param parvalues: the parameter provider
    :param default: value used when the function is not defined, `None`
        when the function has no default and `REQUIRED` when it must be
        defined.
    """

    def __init__(self, name, parvalues, default=None):
        self.name = name
        self.default = default
        definition = parvalues[name] if name in parvalues else None
        if definition is None:
            if default is REQUIRED:
                msg = "Value for parameter %s missing." % name
                raise exc.ParameterError(msg)
            self.function = None
        else:
            self.function = make_function(name, definition)

    @property
    def is_defined(self):
        return self.function is not None

    def __call__(self, drv=None, kiosk=None):
        if self.function is None:
            return self.default
        return self.function(drv, kiosk)


class RootFunctions(object):
    """The set of functions parameterising the root, with their defaults.

    ===================== =================================================== ============
     Name                  Description                                          Default
    ===================== =================================================== ============
    RootFrontVelocity      Daily advance of the root front (mm/d)               required
    MaxDailyNUptake        Maximum daily uptake of each N form (kg/ha)          required
    KLModifier             Multiplier on the soil KL values                     1.0
    TemperatureEffect      Multiplier on the root front velocity                1.0
    SenescenceRate         Daily fraction of live biomass senescing             0.0
    PartitionFraction      Fraction of the plant DM supply demanded by roots    none
    MaximumNConc           Maximum N concentration (g N/g DM)                   0.01
    MinimumNConc           Minimum (structural) N concentration (g N/g DM)      0.01
    NitrogenDemandSwitch   Multiplier on the N demand                           1.0
    MaximumRootDepth       Crop specific maximum rooting depth (mm)             none
    ===================== =================================================== ============
    """
    defaults = [("RootFrontVelocity", REQUIRED),
                ("MaxDailyNUptake", REQUIRED),
                ("KLModifier", 1.0),
                ("TemperatureEffect", 1.0),
                ("SenescenceRate", 0.0),
                ("PartitionFraction", None),
                ("MaximumNConc", 0.01),
                ("MinimumNConc", 0.01),
                ("NitrogenDemandSwitch", 1.0),
                ("MaximumRootDepth", None)]

    def __init__(self, parvalues):
        self._functions = {}
        for name, default in self.defaults:
            self._functions[name] = OptionalFunction(name, parvalues, default)
        self.drv = None
        self.kiosk = None

    def bind(self, kiosk):
        self.kiosk = kiosk

    def set_drivers(self, drv):
        """Sets the driving variables used for evaluating the functions."""
        self.drv = drv

    def is_defined(self, name):
        return self._functions[name].is_defined

    def __getattr__(self, name):
        functions = self.__dict__.get("_functions", {})
        if name not in functions:
            raise AttributeError("Unknown root function '%s'." % name)
        return functions[name](self.drv, self.kiosk)

    def __str__(self):
        msg = "Root functions:\n"
        for name, _ in self.defaults:
            f = self._functions[name]
            msg += "  %20s: %s\n" % (name, f.function if f.is_defined else "default (%s)" % f.default)
        return msg
