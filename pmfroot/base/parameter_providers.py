# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
import logging
from collections import Counter
from collections.abc import MutableMapping

from .. import exceptions as exc


class ParameterProvider(MutableMapping):
    """Class providing a dictionary-like interface over all parameter sets
    (crop, soil, site). It acts very much like a ChainMap with some additional
    features.

    Encapsulating the parameter sets into a single object harmonizes the
    signature of the `initialize()` method of each `SimulationObject`.
    Specific parameter values can be changed by setting an `override` on
    that parameter, which is useful for calibration and sensitivity runs.

    Parameter names must be unique over the site, soil and crop data sets.
    """
    _maps = list()
    _sitedata = dict()
    _soildata = dict()
    _cropdata = dict()
    _override = dict()

    def __init__(self, sitedata=None, soildata=None, cropdata=None):
        self._sitedata = sitedata if sitedata is not None else {}
        self._cropdata = cropdata if cropdata is not None else {}
        self._soildata = soildata if soildata is not None else {}
        self._override = {}
        self._maps = [self._override, self._sitedata, self._soildata, self._cropdata]
        self._test_uniqueness()

    @property
    def logger(self):
        loggername = "%s.%s" % (self.__class__.__module__,
                                self.__class__.__name__)
        return logging.getLogger(loggername)

    def set_override(self, varname, value, check=True):
        """"Override the value of parameter varname in the parameterprovider.

        Note that if check=True (default) varname should already exist in one of site,
        soil or cropdata.
        """

        if check and varname not in self:
            msg = "Cannot override '%s', parameter does not exist." % varname
            raise exc.PMFRootError(msg)
        self._override[varname] = value

    def _test_uniqueness(self):
        """Check if parameter names are unique and raise an error if duplicates occur.

        The uniqueness is not tested for parameters in self._override as this
        is specifically meant for overriding parameters.
        """
        parnames = []
        for mapping in [self._sitedata, self._soildata, self._cropdata]:
            parnames.extend(mapping.keys())
        unique = Counter(parnames)
        for parname, count in unique.items():
            if count > 1:
                msg = "Duplicate parameter found: %s" % parname
                raise exc.PMFRootError(msg)

    @property
    def _unique_parameters(self):
        """Returns a sorted list of unique parameter names across all sets of parameters.
        """
        s = set()
        for mapping in self._maps:
            s.update(mapping.keys())
        return sorted(s)

    def __getitem__(self, key):
        """Returns the value of the given parameter (key).

        self._override is searched first, so overridden parameters are
        always found first.
        """
        for mapping in self._maps:
            if key in mapping:
                return mapping[key]
        raise KeyError(key)

    def __contains__(self, key):
        return any(key in mapping for mapping in self._maps)

    def __str__(self):
        msg = "ParameterProvider providing %i parameters, %i parameters overridden: %s."
        return msg % (len(self), len(self._override), list(self._override.keys()))

    def __setitem__(self, key, value):
        """Override an existing parameter (key) by value.

        To add a *new* parameter use: set_override(key, value, check=False)
        """
        if key in self:
            self._override[key] = value
        else:
            msg = "Cannot override parameter '%s', parameter does not exist. " \
                  "to bypass this check use: set_override(parameter, value, check=False)" % key
            raise exc.PMFRootError(msg)

    def __delitem__(self, key):
        """Deletes a parameter from self._override.

        If a parameter is overridden its original value will return after
        the override is deleted.
        """
        if key in self._override:
            self._override.pop(key)
        elif key in self:
            msg = "Cannot delete default parameter: %s" % key
            raise exc.PMFRootError(msg)
        else:
            raise KeyError(key)

    def __len__(self):
        return len(self._unique_parameters)

    def __iter__(self):
        return iter(self._unique_parameters)
