# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""Per-layer biomass pools and the value types exchanged with the arbitrator
and the soil organic matter pool.

All biomass and nitrogen in the pools is expressed in g/m2, FOM records are
expressed in kg/ha.
"""
from collections import namedtuple

import numpy as np

from .. import exceptions as exc
from ..util import G_M2_TO_KG_HA

# Carbon fraction of root dry matter
CARBON_FRACTION = 0.4

BiomassPoolType = namedtuple("BiomassPoolType", "structural non_structural metabolic")
BiomassPoolType.__new__.__defaults__ = (0., 0., 0.)

BiomassAllocationType = namedtuple("BiomassAllocationType",
                                   "structural non_structural metabolic uptake respired")
BiomassAllocationType.__new__.__defaults__ = (0., 0., 0., 0., 0.)

BiomassSupplyType = namedtuple("BiomassSupplyType", "fixation uptake retranslocation reallocation")
BiomassSupplyType.__new__.__defaults__ = (0., 0., 0., 0.)

FOMLayer = namedtuple("FOMLayer", "amount N C P AshAlk CNR LabileP")
FOMLayer.__new__.__defaults__ = (0., 0., 0., 0., 0., 0., 0.)

FOMLayers = namedtuple("FOMLayers", "crop_type layers")


def make_fom_layers(crop_type, dm, n):
    """Packages per-layer dry matter and N (g/m2) as FOM in kg/ha.

    :param crop_type: type of the crop delivering the FOM
    :param dm: array with dry matter per layer (g/m2)
    :param n: array with nitrogen per layer (g/m2)
    :return: a `FOMLayers` record
    """
    layers = []
    for layer_dm, layer_n in zip(dm, n):
        amount = float(layer_dm) * G_M2_TO_KG_HA
        layers.append(FOMLayer(amount=amount, N=float(layer_n) * G_M2_TO_KG_HA,
                               C=CARBON_FRACTION * amount, P=0., AshAlk=0.))
    return FOMLayers(crop_type=crop_type, layers=layers)


class LayeredBiomass(object):
    """Biomass pools of an organ in each soil layer.

    :param nlayers: number of soil layers, fixed for the lifetime of the pools

    Each pool is an array with one value per layer (g/m2):

    * StructuralWt, NonStructuralWt: structural and non-structural dry matter
    * StructuralN, NonStructuralN: structural and non-structural nitrogen
    * PotentialDMAllocation: the potential dry matter allocation of the day

    The arrays are created once and modified in place only.
    """
    pools = ("StructuralWt", "NonStructuralWt", "StructuralN", "NonStructuralN")

    def __init__(self, nlayers):
        if nlayers < 1:
            msg = "Layered biomass needs at least one layer, got %i." % nlayers
            raise exc.SoilProfileError(msg)
        self.StructuralWt = np.zeros(nlayers)
        self.NonStructuralWt = np.zeros(nlayers)
        self.StructuralN = np.zeros(nlayers)
        self.NonStructuralN = np.zeros(nlayers)
        self.PotentialDMAllocation = np.zeros(nlayers)

    def __len__(self):
        return len(self.StructuralWt)

    @property
    def Wt(self):
        """Dry matter per layer."""
        return self.StructuralWt + self.NonStructuralWt

    @property
    def N(self):
        """Nitrogen per layer."""
        return self.StructuralN + self.NonStructuralN

    @property
    def total_wt(self):
        return float(self.Wt.sum())

    @property
    def total_n(self):
        return float(self.N.sum())

    def scale(self, fraction):
        """Multiplies all pools by `fraction`."""
        if fraction < 0.:
            msg = "Cannot scale biomass pools with a negative fraction: %f" % fraction
            raise exc.PMFRootError(msg)
        for name in self.pools:
            getattr(self, name)[:] *= fraction

    def clear(self):
        """Sets all pools to zero."""
        for name in self.pools + ("PotentialDMAllocation",):
            getattr(self, name).fill(0.)

    def __str__(self):
        msg = "Layered biomass with %i layers:\n" % len(self)
        for name in self.pools:
            msg += "  %16s: %s\n" % (name, getattr(self, name))
        return msg
