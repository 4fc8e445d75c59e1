# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
from .biomass import LayeredBiomass, BiomassPoolType, BiomassAllocationType, BiomassSupplyType, \
    FOMLayer, FOMLayers
from .functions import RootFunctions
from .root_supply import RootUptakeSupply
from .root import Root
from .arbitrator import OrganArbitrator, SoilArbitrator
from .plant import Plant
