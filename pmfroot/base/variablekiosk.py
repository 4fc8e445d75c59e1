# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
from .. import exceptions as exc


class VariableKiosk(dict):
    """VariableKiosk for registering and publishing state and rate variables.

    All variables defined within the model are registered in the
    VariableKiosk, while usually only a small subset of those will be
    published. Published values can be retrieved with the bracket notation
    or as attributes, e.g. `kiosk["RD"]` or `kiosk.DMSupply`.

    Registering/deregistering goes through `register_variable()` and
    `deregister_variable()` while `set_variable()` updates the value of a
    published variable. Only the object that registered a variable may set
    its value. In general these methods are called by the logic within the
    `StatesTemplate` and `RatesTemplate`.

    example::

        >>> from pmfroot.base import VariableKiosk
        >>>
        >>> v = VariableKiosk()
        >>> id0 = 0
        >>> v.register_variable(id0, "RD", type="S", publish=True)
        >>> v.register_variable(id0, "RL", type="S", publish=False)
        >>> id1 = 1
        >>> v.register_variable(id1, "DMSupply", type="R", publish=True)
        >>> v.set_variable(id0, "RD", 105.)
        >>> v.set_variable(id1, "DMSupply", 12.5)
        >>> v.RD
        105.0
        >>> v.set_variable(id0, "DMSupply", 13.1)
        Traceback (most recent call last):
        ...
        pmfroot.exceptions.VariableKioskError: Unregistered object tried to set the value of variable 'DMSupply': access denied.
    """

    def __init__(self):
        dict.__init__(self)
        self.registered_states = {}
        self.registered_rates = {}
        self.published_states = {}
        self.published_rates = {}

    def __setitem__(self, item, value):
        msg = "See set_variable() for setting a variable."
        raise RuntimeError(msg)

    def __contains__(self, item):
        return dict.__contains__(self, item)

    def __getattr__(self, item):
        """Allow use of attribute notation (eg "kiosk.RD") on published rates or states.
        """
        try:
            return dict.__getitem__(self, item)
        except KeyError:
            msg = "Variable '%s' not available in the VariableKiosk." % item
            raise AttributeError(msg)

    def __str__(self):
        msg = "Contents of VariableKiosk:\n"
        msg += " * Registered state variables: %i\n" % len(self.registered_states)
        msg += " * Published state variables: %i with values:\n" % len(self.published_states)
        for varname in self.published_states:
            value = self[varname] if varname in self else "undefined"
            msg += "  - variable %s, value: %s\n" % (varname, value)
        msg += " * Registered rate variables: %i\n" % len(self.registered_rates)
        msg += " * Published rate variables: %i with values:\n" % len(self.published_rates)
        for varname in self.published_rates:
            value = self[varname] if varname in self else "undefined"
            msg += "  - variable %s, value: %s\n" % (varname, value)
        return msg

    def register_variable(self, oid, varname, type, publish=False):
        """Register a varname from object with id, with given type

        :param oid: Object id (from python builtin id() function) of the
            state/rate object registering this variable.
        :param varname: Name of the variable to be registered, e.g. "RD"
        :param type: Either "R" (rate) or "S" (state) variable, is handled
            automatically by the states/rates template class.
        :param publish: True if variable should be published in the kiosk,
            defaults to False
        """

        self._check_duplicate_variable(varname)
        if type.upper() == "R":
            self.registered_rates[varname] = oid
            if publish is True:
                self.published_rates[varname] = oid
        elif type.upper() == "S":
            self.registered_states[varname] = oid
            if publish is True:
                self.published_states[varname] = oid
        else:
            msg = "Variable type should be 'S'|'R'"
            raise exc.VariableKioskError(msg)

    def deregister_variable(self, oid, varname):
        """Object with id(object) asks to deregister varname from kiosk

        :param oid: Object id (from python builtin id() function) of the
            state/rate object registering this variable.
        :param varname: Name of the variable to be deregistered
        """
        for registered, published in [(self.registered_states, self.published_states),
                                      (self.registered_rates, self.published_rates)]:
            if varname in registered:
                if oid != registered[varname]:
                    msg = "Wrong object tried to deregister variable '%s'." % varname
                    raise exc.VariableKioskError(msg)
                registered.pop(varname)
                published.pop(varname, None)
                break
        else:
            msg = "Failed to deregister variable '%s'!" % varname
            raise exc.VariableKioskError(msg)

        if varname in self:
            self.pop(varname)

    def _check_duplicate_variable(self, varname):
        """Checks if variables are not registered twice.
        """
        if varname in self.registered_rates or \
                varname in self.registered_states:
            msg = "Duplicate state/rate variable '%s' encountered!"
            raise exc.VariableKioskError(msg % varname)

    def set_variable(self, id, varname, value):
        """Let object with id, set the value of variable varname

        :param id: Object id (from python builtin id() function) of the
            state/rate object registering this variable.
        :param varname: Name of the variable to be updated
        :param value: Value to be assigned to the variable.
        """

        if varname in self.published_rates:
            owner = self.published_rates[varname]
        elif varname in self.published_states:
            owner = self.published_states[varname]
        else:
            msg = "Variable '%s' not published in VariableKiosk."
            raise exc.VariableKioskError(msg % varname)

        if owner != id:
            msg = "Unregistered object tried to set the value of variable '%s': access denied."
            raise exc.VariableKioskError(msg % varname)
        dict.__setitem__(self, varname, value)

    def variable_exists(self, varname):
        """ Returns True if the state/rate variable is registered in the kiosk.

        :param varname: Name of the variable to be checked for registration.
        """

        return varname in self.registered_rates or varname in self.registered_states

    def flush_rates(self):
        """flush the values of all published rate variable from the kiosk.
        """
        for key in self.published_rates:
            self.pop(key, None)

    def flush_states(self):
        """flush the values of all state variable from the kiosk.
        """
        for key in self.published_states:
            self.pop(key, None)
