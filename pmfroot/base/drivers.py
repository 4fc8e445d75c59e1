# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""Containers and providers for the daily driving variables of the root model.

The root organ is driven by the dry matter supply of the plant (DMSUPPLY),
the transpiration demand that limits water uptake (TRANSPDEMAND) and the mean
air temperature (TEMP), which can be used by the temperature effect on the
root front velocity.
"""
import logging

from .. import exceptions as exc
from ..settings import settings
from ..util import check_date


class DriverDataContainer(object):
    """Class for storing the driving variables of one day.

    Driving variables are provided through keywords that are also the
    attribute names under which the variables can be accessed, so the
    keyword DMSUPPLY=12 sets an attribute DMSUPPLY with value 12.

    :keyword DAY: the day of the record (python datetime.date)
    :keyword DMSUPPLY: Dry matter supply of the plant (g/m2/day)
    :keyword TRANSPDEMAND: Transpiration demand of the plant (mm/day)

    Optional keyword:

    :keyword TEMP: Daily mean temperature (Celsius)
    """
    required = ["DMSUPPLY", "TRANSPDEMAND"]
    optional = ["TEMP"]
    __slots__ = required + optional + ["DAY"]

    units = {"DMSUPPLY": "g/m2/day", "TRANSPDEMAND": "mm/day", "TEMP": "Celsius"}

    ranges = {"DMSUPPLY": (0., 200.),
              "TRANSPDEMAND": (0., 25.),
              "TEMP": (-50., 60.)}

    def __init__(self, *args, **kwargs):

        if len(args) > 0:
            msg = ("DriverDataContainer should be initialized by providing driving " +
                   "variables through keywords only. Got '%s' instead.")
            raise exc.DriverDataProviderError(msg % (args,))

        if "DAY" not in kwargs:
            msg = "Date of record 'DAY' not provided when building DriverDataContainer."
            raise exc.DriverDataProviderError(msg)
        self.DAY = check_date(kwargs.pop("DAY"))

        for varname in self.required:
            value = kwargs.pop(varname, None)
            try:
                setattr(self, varname, float(value))
            except (ValueError, TypeError):
                msg = "%s: Driving variable '%s' missing or invalid numerical value: %s"
                raise exc.DriverDataProviderError(msg % (self.DAY, varname, value))

        for varname in self.optional:
            value = kwargs.pop(varname, None)
            if value is None:
                continue
            try:
                setattr(self, varname, float(value))
            except (ValueError, TypeError):
                msg = "%s: Driving variable '%s' has invalid numerical value: %s"
                logging.warning(msg, self.DAY, varname, value)

        if len(kwargs) > 0:
            msg = "DriverDataContainer: unknown keywords '%s' are ignored!"
            logging.warning(msg, list(kwargs.keys()))

    def __setattr__(self, key, value):
        if settings.DRIVER_RANGE_CHECKS and key in self.ranges:
            vmin, vmax = self.ranges[key]
            if not vmin <= value <= vmax:
                msg = "Value (%s) for driving variable '%s' outside allowed range (%s, %s)." % \
                      (value, key, vmin, vmax)
                raise exc.DriverDataProviderError(msg)
        object.__setattr__(self, key, value)

    def __str__(self):
        msg = "Driving variables for %s (DAY)\n" % self.DAY
        for v in self.required + self.optional:
            value = getattr(self, v, None)
            if value is None:
                continue
            msg += "%12s: %12.2f %9s\n" % (v, value, self.units[v])
        return msg


class DriverDataProvider(object):
    """Base class for all providers of driving variables.

    :param records: an optional iterable of dicts, each with a DAY key and
        the driving variables for that day.

    Calling the provider with a date returns the `DriverDataContainer` for
    that day.
    """
    description = []

    def __init__(self, records=None):
        self.store = {}
        if records is not None:
            for record in records:
                ddc = DriverDataContainer(**dict(record))
                self._store_DriverDataContainer(ddc, ddc.DAY)

    @property
    def logger(self):
        loggername = "%s.%s" % (self.__class__.__module__,
                                self.__class__.__name__)
        return logging.getLogger(loggername)

    @property
    def first_date(self):
        return min(self.store) if self.store else None

    @property
    def last_date(self):
        return max(self.store) if self.store else None

    @property
    def missing(self):
        if not self.store:
            return 0
        return (self.last_date - self.first_date).days - len(self.store) + 1

    def _store_DriverDataContainer(self, ddc, keydate):
        """Stores the DriverDataContainer under the given keydate.
        """
        try:
            kd = check_date(keydate)
        except KeyError as e:
            raise exc.DriverDataProviderError(str(e))
        self.store[kd] = ddc

    def __call__(self, day):

        try:
            keydate = check_date(day)
        except KeyError as e:
            raise exc.DriverDataProviderError(str(e))
        self.logger.debug("Retrieving driving variables for day %s" % keydate)
        try:
            return self.store[keydate]
        except KeyError:
            msg = "No driving variables for %s." % keydate
            raise exc.DriverDataProviderError(msg)

    def __str__(self):
        msg = "Driving variables provided by: %s\n" % self.__class__.__name__
        msg += "--------Description---------\n"
        if isinstance(self.description, str):
            msg += "%s\n" % self.description
        else:
            for l in self.description:
                msg += "%s\n" % str(l)
        msg += "Data available for %s - %s\n" % (self.first_date, self.last_date)
        msg += "Number of missing days: %i\n" % self.missing
        return msg
