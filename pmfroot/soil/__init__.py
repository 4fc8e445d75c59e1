# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
from .soil_profile import SoilProfile, SoilLayer, SoilCrop
from .zone import ZoneWaterAndN
from .soil_water_n import SoilWaterN
