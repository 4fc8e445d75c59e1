# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""Layered soil profile with crop-specific water extraction parameters.

The geometry of the profile (layer thickness, bulk density, lower limit and
drained upper limit) is read-only to the crop. Every per-layer array derived
from a profile has the length of the profile and keeps it for the lifetime of
the simulation.
"""
import numpy as np

from ..traitlets import Float, Instance, Unicode, HasTraits
from .. import exceptions as exc


class SoilLayer(HasTraits):
    """Contains the properties of a single soil layer.

    :param layer: a dict with the layer definition, see the table below.

    =============== =========================================================  =================
    Name             Description                                                Unit
    =============== =========================================================  =================
    Thickness        Layer thickness                                            mm
    BD               Bulk density of the soil                                   g soil cm-3
    LL15             Volumetric water content at 15 bar (lower limit)           mm water mm-1
    DUL              Volumetric water content at drained upper limit            mm water mm-1
    SWI              Initial volumetric water content                           mm water mm-1
    NO3I             Initial nitrate-N in the layer                             kg N ha-1
    NH4I             Initial ammonium-N in the layer                            kg N ha-1
    =============== =========================================================  =================

    SWI defaults to DUL, NO3I and NH4I default to zero.
    """
    Thickness = Float()
    BD = Float()
    LL15 = Float()
    DUL = Float()
    SWI = Float()
    NO3I = Float()
    NH4I = Float()

    def __init__(self, layer):
        HasTraits.__init__(self)
        try:
            self.Thickness = layer["Thickness"]
            self.BD = layer["BD"]
            self.LL15 = layer["LL15"]
            self.DUL = layer["DUL"]
        except KeyError as e:
            msg = "Soil layer definition misses property %s: %s" % (e, layer)
            raise exc.ParameterError(msg)
        self.SWI = layer.get("SWI", self.DUL)
        self.NO3I = layer.get("NO3I", 0.)
        self.NH4I = layer.get("NH4I", 0.)

        if self.Thickness <= 0.:
            msg = "Soil layer should have a positive thickness. Current value: %f" % self.Thickness
            raise exc.SoilProfileError(msg)
        if self.BD <= 0.:
            msg = "Soil layer should have a positive bulk density. Current value: %f" % self.BD
            raise exc.SoilProfileError(msg)
        if not self.LL15 < self.DUL:
            msg = "LL15 (%f) should be smaller than DUL (%f) for soil layer." % (self.LL15, self.DUL)
            raise exc.SoilProfileError(msg)

    @property
    def LL15mm(self):
        return self.LL15 * self.Thickness

    @property
    def DULmm(self):
        return self.DUL * self.Thickness


class SoilCrop(HasTraits):
    """Crop-specific soil parameterisation: lower limit of extraction (LL, mm/mm),
    water extraction rate (KL, /d) and root exploration factor (XF, 0-1) per layer.
    """
    name = Unicode()
    LL = Instance(np.ndarray)
    KL = Instance(np.ndarray)
    XF = Instance(np.ndarray)

    def __init__(self, name, nlayers, LL, KL, XF):
        HasTraits.__init__(self)
        self.name = name
        for parname, values in [("LL", LL), ("KL", KL), ("XF", XF)]:
            values = np.array(values, dtype=float)
            if values.shape != (nlayers,):
                msg = "Soil crop parameter %s for '%s' has %i values while the profile has %i layers." % \
                      (parname, name, values.size, nlayers)
                raise exc.SoilProfileError(msg)
            setattr(self, parname, values)
        if np.any(self.XF < 0.) or np.any(self.XF > 1.):
            msg = "Soil crop parameter XF for '%s' should be in the range 0-1: %s" % (name, self.XF)
            raise exc.SoilProfileError(msg)


class SoilProfile(list):
    """A container of `SoilLayer` instances representing the soil column,
    with the layer geometry helpers needed by the root.

    :param parvalues: a ParameterProvider (or dict) providing the description
        of the soil profile under the key `SoilProfileDescription`.

    An example of a soil profile description in YAML::

        SoilProfileDescription:
            SoilLayers:
            - {Thickness: 150., BD: 1.3, LL15: 0.12, DUL: 0.32, SWI: 0.30, NO3I: 20., NH4I: 2.}
            - {Thickness: 300., BD: 1.4, LL15: 0.14, DUL: 0.34, SWI: 0.32, NO3I: 10., NH4I: 1.}
            SoilCrops:
                wheat: {LL: [0.12, 0.15], KL: [0.08, 0.06], XF: [1.0, 1.0]}

    The `SoilCrops` section holds the crop-specific parameterisation for
    every plant that may grow on this soil.
    """

    def __init__(self, parvalues):
        list.__init__(self)
        try:
            desc = parvalues["SoilProfileDescription"]
        except KeyError:
            msg = "Parameter 'SoilProfileDescription' missing."
            raise exc.ParameterError(msg)

        layers = desc.get("SoilLayers")
        if not layers:
            msg = "Soil profile description should define one or more SoilLayers."
            raise exc.ParameterError(msg)
        for layer in layers:
            self.append(SoilLayer(layer))

        self.thickness = np.array([layer.Thickness for layer in self])
        self.bd = np.array([layer.BD for layer in self])
        self.ll15mm = np.array([layer.LL15mm for layer in self])
        self.dulmm = np.array([layer.DULmm for layer in self])
        self.depth_bottom = np.cumsum(self.thickness)

        self._soil_crops = {}
        for name, soil_crop in (desc.get("SoilCrops") or {}).items():
            self._soil_crops[name] = SoilCrop(name, len(self), **soil_crop)

    @property
    def nlayers(self):
        return len(self)

    @property
    def total_depth(self):
        return float(self.depth_bottom[-1])

    def crop(self, name):
        """Returns the `SoilCrop` parameterisation for the plant with given name.
        """
        try:
            return self._soil_crops[name]
        except KeyError:
            msg = "Cannot find a soil crop parameterisation for %s" % name
            raise exc.SoilCropParameterError(msg)

    def layer_index(self, depth):
        """Returns the index of the layer that contains the given depth (mm).

        A depth at a layer boundary belongs to the layer above the boundary.
        """
        cum_depth = 0.
        for i, thickness in enumerate(self.thickness):
            cum_depth += thickness
            if cum_depth >= depth:
                return i
        msg = "Depth %f deeper than bottom of soil profile (%f)" % (depth, self.total_depth)
        raise exc.SoilProfileError(msg)

    def root_proportion(self, layer, root_depth):
        """Returns the fraction of `layer` occupied by roots reaching root_depth (mm).
        """
        bottom = self.depth_bottom[layer]
        top = bottom - self.thickness[layer]
        depth_in_layer = max(0., min(bottom, root_depth) - top)
        return depth_in_layer / self.thickness[layer]

    def root_proportions(self, root_depth):
        """Returns the root proportion of all layers as an array."""
        tops = self.depth_bottom - self.thickness
        depth_in_layer = np.maximum(0., np.minimum(self.depth_bottom, root_depth) - tops)
        return depth_in_layer / self.thickness

    def max_penetrable_depth(self, soil_crop):
        """Returns the summed thickness of the layers that roots can explore (XF > 0).
        """
        return float(self.thickness[soil_crop.XF > 0.].sum())

    def layers_above(self, depth):
        """Returns the number of layers whose top lies above the given depth."""
        tops = self.depth_bottom - self.thickness
        return int(np.count_nonzero(tops < depth))

    def check_layered(self, name, values):
        """Returns `values` as an array after checking it has one value per layer."""
        values = np.asarray(values, dtype=float)
        if values.shape != (len(self),):
            msg = "Array '%s' with shape %s does not match the %i layers of the soil profile." % \
                  (name, values.shape, len(self))
            raise exc.SoilProfileError(msg)
        return values
