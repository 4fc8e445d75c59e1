# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
import logging

import numpy as np

from ..traitlets import (HasTraits, Float, Int, Instance, Bool, All)
from ..util import Afgen
from .. import exceptions as exc
from .variablekiosk import VariableKiosk


class ParamTemplate(HasTraits):
    """Template for storing parameter values.

    This is meant to be subclassed by the actual class where the parameters
    are defined.

    example::

        >>> from pmfroot.base import ParamTemplate
        >>> from pmfroot.traitlets import Float
        >>>
        >>> class Parameters(ParamTemplate):
        ...     InitialDM = Float()
        ...     SpecificRootLength = Float()
        ...
        >>> params = Parameters({"InitialDM": 0.2, "SpecificRootLength": 40000.})
        >>> params.InitialDM
        0.2
        >>> params = Parameters({"InitialDM": 0.2})
        Traceback (most recent call last):
        ...
        pmfroot.exceptions.ParameterError: Value for parameter SpecificRootLength missing.
    """

    def __init__(self, parvalues):

        HasTraits.__init__(self)

        for parname in self.trait_names():
            # Attributes starting with "trait" are traitlets internals
            if parname.startswith("trait"):
                continue
            if parname not in parvalues:
                msg = "Value for parameter %s missing." % parname
                raise exc.ParameterError(msg)
            value = parvalues[parname]
            if isinstance(getattr(self, parname), Afgen):
                setattr(self, parname, Afgen(value))
            else:
                setattr(self, parname, value)

    def __setattr__(self, attr, value):
        if attr.startswith("_"):
            HasTraits.__setattr__(self, attr, value)
        elif hasattr(self, attr):
            HasTraits.__setattr__(self, attr, value)
        else:
            msg = "Assignment to non-existing attribute '%s' prevented." % attr
            raise AttributeError(msg)


def check_publish(publish):
    """ Convert the list of published variables to a set with unique elements.
    """

    if publish is None:
        publish = []
    elif isinstance(publish, str):
        publish = [publish]
    elif isinstance(publish, (list, tuple)):
        pass
    else:
        msg = "The publish keyword should specify a string or a list of strings"
        raise RuntimeError(msg)
    return set(publish)


class StatesRatesCommon(HasTraits):
    _kiosk = Instance(VariableKiosk)
    _valid_vars = Instance(set)
    _locked = Bool(False)

    def __init__(self, kiosk=None, publish=None):
        """Set up the common stuff for the states and rates template
        including variables that have to be published in the kiosk
        """

        HasTraits.__init__(self)

        if not isinstance(kiosk, VariableKiosk):
            msg = ("Variable Kiosk must be provided when instantiating rate " +
                   "or state variables.")
            raise RuntimeError(msg)
        self._kiosk = kiosk

        publish = check_publish(publish)
        self._valid_vars = self._find_valid_variables()
        self._register_with_kiosk(publish)

    def _find_valid_variables(self):
        """Returns a set with the valid state/rate variables names. Valid rate
        variables have names not starting with 'trait' or '_'.
        """

        valid = lambda s: not (s.startswith("_") or s.startswith("trait"))
        r = [name for name in self.trait_names() if valid(name)]
        return set(r)

    def _register_with_kiosk(self, publish):
        """Register the variables with the variable kiosk.

        Registration fails when a variable is registered twice, which makes
        rate/state variables unique across the entire model. Variables listed
        with the publish keyword get a trigger that updates their value in
        the kiosk on every assignment.

        Note that self._vartype determines if the variables are registered
        as state variables (_vartype=="S") or rate variables (_vartype=="R")
        """

        for attr in self._valid_vars:
            if attr in publish:
                publish.remove(attr)
                self._kiosk.register_variable(id(self), attr, type=self._vartype,
                                              publish=True)
                self.observe(handler=self._update_kiosk, names=attr, type=All)
            else:
                self._kiosk.register_variable(id(self), attr, type=self._vartype,
                                              publish=False)
        if len(publish) > 0:
            msg = ("Unknown variable(s) specified with the publish " +
                   "keyword: %s") % publish
            raise exc.PMFRootError(msg)

    def _update_kiosk(self, change):
        """Update the variable_kiosk through trait notification.
        """
        self._kiosk.set_variable(id(self), change["name"], change["new"])

    def unlock(self):
        "Unlocks the attributes of this class."
        self._locked = False

    def lock(self):
        "Locks the attributes of this class."
        self._locked = True

    def _delete(self):
        """Deregister the variables from the kiosk before garbage
        collecting.

        This method is coded as _delete() and must by explicitly called
        because of precarious handling of __del__() in python.
        """
        for attr in self._valid_vars:
            self._kiosk.deregister_variable(id(self), attr)

    @property
    def logger(self):
        loggername = "%s.%s" % (self.__class__.__module__,
                                self.__class__.__name__)
        return logging.getLogger(loggername)


class StatesTemplate(StatesRatesCommon):
    """Takes care of assigning initial values to state variables, registering
    variables in the kiosk and monitoring assignments to variables that are
    published.

    :param kiosk: Instance of the VariableKiosk class. All state variables
        will be registered in the kiosk in order to enforce that variable names
        are unique across the model. Moreover, the value of variables that
        are published will be available through the VariableKiosk.
    :param publish: Lists the variables whose values need to be published
        in the VariableKiosk. Can be omitted if no variables need to be
        published.

    Initial values for all state variables must be given as keywords when
    instantiating a States class, otherwise a `PMFRootError` is raised.
    """

    _vartype = "S"

    def __init__(self, kiosk=None, publish=None, **kwargs):

        StatesRatesCommon.__init__(self, kiosk, publish)

        for attr in self._valid_vars:
            if attr in kwargs:
                value = kwargs.pop(attr)
                setattr(self, attr, value)
            else:
                msg = "Initial value for state %s missing." % attr
                raise exc.PMFRootError(msg)

        if len(kwargs) > 0:
            msg = ("Initial value given for unknown state variable(s): " +
                   "%s") % list(kwargs.keys())
            self.logger.warning(msg)

        self._locked = True

    def touch(self):
        """Re-assigns the value of each state variable, thereby updating its
        value in the variablekiosk if the variable is published."""

        self.unlock()
        for name in self._valid_vars:
            value = getattr(self, name)
            setattr(self, name, value)
        self.lock()


class RatesTemplate(StatesRatesCommon):
    """Takes care of registering variables in the kiosk and monitoring
    assignments to variables that are published.

    :param kiosk: Instance of the VariableKiosk class.
    :param publish: Lists the variables whose values need to be published
        in the VariableKiosk.
    :param kwargs: initial values for rate variables that hold per-layer
        numpy arrays. The arrays fix the shape of these rates.

    Scalar rates are set to zero (Int, Float variables) or False (Boolean
    variables) by `zerofy()`, per-layer array rates are filled with zeros
    in place so that their size never changes.
    """

    _rate_vars_zero = Instance(dict)
    _array_vars = Instance(set)
    _vartype = "R"

    def __init__(self, kiosk=None, publish=None, **kwargs):

        StatesRatesCommon.__init__(self, kiosk, publish)

        self._rate_vars_zero, self._array_vars = self._find_rate_zero_values()
        for name in self._array_vars:
            if name not in kwargs:
                msg = "Initial array for per-layer rate %s missing." % name
                raise exc.PMFRootError(msg)
            setattr(self, name, np.array(kwargs.pop(name), dtype=float))

        self.zerofy()
        self._locked = True

    def _find_rate_zero_values(self):
        """Returns a dict with the zero values of the scalar rate variables
        and the set of names of the per-layer array rates.
        """

        zero_value = {Bool: False, Int: 0, Float: 0.}

        d = {}
        arrays = set()
        for name, trait in self.traits().items():
            if name not in self._valid_vars:
                continue
            if isinstance(trait, Instance) and trait.klass is np.ndarray:
                arrays.add(name)
                continue
            try:
                d[name] = zero_value[trait.__class__]
            except KeyError:
                msg = ("Rate variable '%s' not of type Float, Bool, Int or ndarray. " +
                       "Its zero value cannot be determined and it will " +
                       "not be treated by zerofy().") % name
                self.logger.warning(msg)
        return d, arrays

    def zerofy(self):
        """Sets the values of all rate values to zero (Int, Float, ndarray)
        or False (Boolean).
        """
        self._trait_values.update(self._rate_vars_zero)
        for name in self._array_vars:
            value = self._trait_values.get(name)
            if value is not None:
                value.fill(0.)
