# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""
This module is here only to ensure that all PMFRoot modules can import internally
from .traitlets while this module loads the actual traitlets modules from the
`traitlets_pcse` package. Some traits are adapted to allow `None` as default
values and to coerce values to float().
"""
from traitlets_pcse import *
import traitlets_pcse as tr


class Instance(tr.Instance):

    def __init__(self, *args, **kwargs):
        if 'allow_none' not in kwargs:
            kwargs['allow_none'] = True
        tr.Instance.__init__(self, *args, **kwargs)


class Enum(tr.Enum):

    def __init__(self, *args, **kwargs):
        if 'allow_none' not in kwargs:
            kwargs['allow_none'] = True
        tr.Enum.__init__(self, *args, **kwargs)


class Unicode(tr.Unicode):

    def __init__(self, *args, **kwargs):
        if 'allow_none' not in kwargs:
            kwargs['allow_none'] = True
        tr.Unicode.__init__(self, *args, **kwargs)


class Bool(tr.Bool):

    def __init__(self, *args, **kwargs):
        if 'allow_none' not in kwargs:
            kwargs['allow_none'] = True
        tr.Bool.__init__(self, *args, **kwargs)


class Float(tr.Float):

    def __init__(self, *args, **kwargs):
        if 'allow_none' not in kwargs:
            kwargs['allow_none'] = True
        tr.Float.__init__(self, *args, **kwargs)

    def validate(self, obj, value):
        try:
            value = float(value)
        except (TypeError, ValueError):
            self.error(obj, value)
        return value
