# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""Miscellaneous utilities for PMFRoot
"""
import datetime
from bisect import bisect_left
from collections.abc import Iterable

from .traitlets import TraitType
from . import exceptions as exc

# Conversion between kg/ha and g/m2
KG_HA_TO_G_M2 = 0.1
G_M2_TO_KG_HA = 10.


def limit(min, max, v):
    """limits the range of v between min and max
    """

    if min > max:
        raise RuntimeError("Min value (%f) larger than max (%f)" % (min, max))

    if v < min:
        return min
    elif v < max:
        return v
    else:
        return max


def floats_are_equal(a, b, tolerance=1e-9):
    """Returns True when a and b differ less than `tolerance` (absolute)."""
    return abs(a - b) < tolerance


class Afgen(object):
    """Linear interpolation over a table of XY pairs.

    :param tbl_xy: List or array of XY value pairs describing the function
        the X values should be monotonically increasing.

    Returns the interpolated value at the given abscissa. Outside the range
    of X values the first or last Y value is returned.

    example::

        >>> tbl_xy = [0,0,1,1,5,10]
        >>> f =  Afgen(tbl_xy)
        >>> f(0.5)
        0.5
        >>> f(1.5)
        2.125
        >>> f(5)
        10.0
        >>> f(6)
        10.0
        >>> f(-1)
        0.0
    """

    def _check_x_ascending(self, tbl_xy):
        """Checks that the x values are strictly ascending.

        Trailing (0.,0.) pairs, as used for padding tables, are truncated.
        """
        x_list = list(tbl_xy[0::2])
        y_list = list(tbl_xy[1::2])
        if len(x_list) == 0 or len(x_list) != len(y_list):
            msg = "AFGEN table should hold a non-empty list of XY pairs: %s" % list(tbl_xy)
            raise exc.ParameterError(msg)

        n = len(x_list)
        for i in range(1, n):
            if x_list[i] <= x_list[i-1]:
                break
        else:
            return x_list, y_list

        # Only a trailing series of padding zeros is accepted after the break
        if all(x == 0. and y == 0. for x, y in zip(x_list[i:], y_list[i:])):
            return x_list[:i], y_list[:i]

        msg = "X values for AFGEN input list not strictly ascending: %s" % x_list
        raise exc.ParameterError(msg)

    def __init__(self, tbl_xy):

        x_list, y_list = self._check_x_ascending(tbl_xy)
        x_list = self.x_list = list(map(float, x_list))
        y_list = self.y_list = list(map(float, y_list))
        intervals = list(zip(x_list, x_list[1:], y_list, y_list[1:]))
        self.slopes = [(y2 - y1)/(x2 - x1) for x1, x2, y1, y2 in intervals]

    def __call__(self, x):

        if x <= self.x_list[0]:
            return self.y_list[0]
        if x >= self.x_list[-1]:
            return self.y_list[-1]

        i = bisect_left(self.x_list, x) - 1
        v = self.y_list[i] + self.slopes[i] * (x - self.x_list[i])

        return v

    def __str__(self):
        msg = "AFGEN interpolation over (X,Y) pairs:\n"
        for x, y in zip(self.x_list, self.y_list):
            msg += "(%f,%f)\n" % (x, y)
        return msg


class AfgenTrait(TraitType):
    """An AFGEN table trait, lists of XY pairs are converted into an `Afgen`."""
    default_value = Afgen([0, 0, 1, 1])
    info_text = "An AFGEN table of XY pairs"

    def validate(self, obj, value):
        if isinstance(value, Afgen):
            return value
        elif isinstance(value, Iterable):
            return Afgen(value)
        self.error(obj, value)


def is_a_month(day):
    """Returns True if the date is on the last day of a month."""

    return (day + datetime.timedelta(days=1)).month != day.month


def is_a_week(day, weekday=0):
    """Default weekday is Monday. Monday is 0 and Sunday is 6"""
    return day.weekday() == weekday


def is_a_dekad(day):
    """Returns True if the date is on a dekad boundary, i.e. the 10th,
    the 20th or the last day of each month"""

    if day.day in (10, 20):
        return True
    return is_a_month(day)


def check_date(indate):
    """Check representations of date and try to force into a datetime.date

    The following formats are supported:

    1. a date object
    2. a datetime object
    3. a string of the format YYYYMMDD
    4. a string of the format YYYYDDD
    5. a string of the format YYYY-MM-DD

    Formats 2-5 are all converted into a date object internally.
    """

    if isinstance(indate, datetime.datetime):
        return indate.date()
    elif isinstance(indate, datetime.date):
        return indate
    elif isinstance(indate, str):
        skey = indate.strip()
        l = len(skey)
        if l == 8:
            return datetime.datetime.strptime(skey, "%Y%m%d").date()
        elif l == 7:
            return datetime.datetime.strptime(skey, "%Y%j").date()
        elif l == 10:
            return datetime.datetime.strptime(skey, "%Y-%m-%d").date()
        else:
            msg = "Input value not recognized as date: %s"
            raise KeyError(msg % indate)
    else:
        msg = "Input value not recognized as date: %s"
        raise KeyError(msg % indate)
