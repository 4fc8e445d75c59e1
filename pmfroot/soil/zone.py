# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
import numpy as np

from ..traitlets import HasTraits, Unicode, Instance
from .. import exceptions as exc


class ZoneWaterAndN(HasTraits):
    """Water and mineral nitrogen of one named root zone.

    :param name: name of the zone
    :param nlayers: number of soil layers

    `Water` is given in mm per layer, `NO3N` and `NH4N` in kg N/ha per layer.
    The arrays are created once and refreshed in place by the soil store, so
    that a root bound to the zone always sees the values of the current day.
    """
    name = Unicode()
    Water = Instance(np.ndarray)
    NO3N = Instance(np.ndarray)
    NH4N = Instance(np.ndarray)

    def __init__(self, name, nlayers):
        HasTraits.__init__(self)
        self.name = name
        self.Water = np.zeros(nlayers)
        self.NO3N = np.zeros(nlayers)
        self.NH4N = np.zeros(nlayers)

    @property
    def nlayers(self):
        return len(self.Water)

    def update(self, water, no3, nh4):
        """Copies the current soil water and mineral N into the zone arrays."""
        for target, values in [(self.Water, water), (self.NO3N, no3), (self.NH4N, nh4)]:
            values = np.asarray(values, dtype=float)
            if values.shape != target.shape:
                msg = "Cannot update zone '%s' with %i layers from an array of shape %s." % \
                      (self.name, self.nlayers, values.shape)
                raise exc.SoilProfileError(msg)
            target[:] = values

    def __str__(self):
        msg = "Zone '%s'\n" % self.name
        msg += "  Water (mm):   %s\n" % self.Water
        msg += "  NO3 (kg/ha):  %s\n" % self.NO3N
        msg += "  NH4 (kg/ha):  %s\n" % self.NH4N
        return msg


def find_zone(zones, name):
    """Returns the single zone with the given name from a list of zones.

    Roots can explore one zone only, so more than one zone in the list or a
    missing zone raise a ZoneError.
    """
    if zones is None or len(zones) == 0:
        msg = "No soil zones available for the root."
        raise exc.ZoneError(msg)
    if len(zones) > 1:
        msg = "Root model can only handle one root zone at present, got %i zones." % len(zones)
        raise exc.ZoneError(msg)
    zone = zones[0]
    if zone.name != name:
        msg = "Cannot find soil zone '%s', available: '%s'." % (name, zone.name)
        raise exc.ZoneError(msg)
    return zone
