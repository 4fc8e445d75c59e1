# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""Base class for the engine driving the simulation.
"""
import types
import logging

from ..traitlets import HasTraits
from .dispatcher import DispatcherObject
from .simulationobject import SimulationObject


class BaseEngine(HasTraits, DispatcherObject):
    """Base Class for Engine to inherit from
    """

    def __init__(self):
        HasTraits.__init__(self)
        DispatcherObject.__init__(self)

    @property
    def logger(self):
        loggername = "%s.%s" % (self.__class__.__module__,
                                self.__class__.__name__)
        return logging.getLogger(loggername)

    def __setattr__(self, attr, value):
        # Same rules as SimulationObject.__setattr__()
        if attr.startswith("_") or type(value) is types.FunctionType:
            HasTraits.__setattr__(self, attr, value)
        elif hasattr(self, attr):
            HasTraits.__setattr__(self, attr, value)
        else:
            msg = "Assignment to non-existing attribute '%s' prevented." % attr
            raise AttributeError(msg)

    @property
    def subSimObjects(self):
        """ Find SimulationObjects embedded within self.
        """

        subSimObjects = []
        defined_traits = self.__dict__["_trait_values"]
        for attr in defined_traits.values():
            if isinstance(attr, SimulationObject):
                subSimObjects.append(attr)
        return subSimObjects

    def get_variable(self, varname):
        """ Return the value of the specified state or rate variable.

        :param varname: Name of the variable.

        Published variables are taken from the kiosk, other registered
        variables are searched by traversing the hierarchy of SimulationObjects.
        Unregistered variables return None.
        """

        if not self.kiosk.variable_exists(varname):
            return None

        if varname in self.kiosk:
            return self.kiosk[varname]

        value = None
        for simobj in self.subSimObjects:
            value = simobj.get_variable(varname)
            if value is not None:
                break
        return value

    def zerofy(self):
        """Zerofy the value of all rate variables of any sub-SimulationObjects.
        """
        for simobj in self.subSimObjects:
            simobj.zerofy()
