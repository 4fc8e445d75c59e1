# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""Parameter sets and factories shared by the PMFRoot tests.
"""
import os
import copy
from datetime import date

from ..base import VariableKiosk, ParameterProvider, DriverDataContainer
from ..soil.soil_water_n import SoilWaterN
from ..crop.root import Root

test_data_dir = os.path.join(os.path.dirname(__file__), "test_data")

start_day = date(2000, 10, 1)

one_layer_soil = {
    "SoilLayers": [
        {"Thickness": 150., "BD": 1.3, "LL15": 0.12, "DUL": 0.32, "SWI": 0.30, "NO3I": 20., "NH4I": 2.},
    ],
    "SoilCrops": {
        "wheat": {"LL": [0.12], "KL": [0.08], "XF": [1.0]},
    }
}

two_layer_soil = {
    "SoilLayers": [
        {"Thickness": 100., "BD": 1.3, "LL15": 0.12, "DUL": 0.32, "SWI": 0.30, "NO3I": 20., "NH4I": 2.},
        {"Thickness": 200., "BD": 1.4, "LL15": 0.14, "DUL": 0.34, "SWI": 0.32, "NO3I": 10., "NH4I": 1.},
    ],
    "SoilCrops": {
        "wheat": {"LL": [0.12, 0.14], "KL": [0.08, 0.06], "XF": [1.0, 1.0]},
    }
}

crop_parameters = {
    "CropName": "wheat",
    "CropType": "cereal",
    "InitialDM": 0.005,
    "SpecificRootLength": 105000.,
    "KNO3": [0.0, 0.02, 1.0, 0.02],
    "KNH4": [0.0, 0.01, 1.0, 0.01],
    "NUptakeSWFactor": [0.0, 0.0, 1.0, 1.0],
    "RootFrontVelocity": 5.,
    "MaxDailyNUptake": 10.,
    "MaximumNConc": 0.02,
    "MinimumNConc": 0.01,
    "PartitionFraction": 0.3,
}


def make_parameterprovider(soil=None, **crop_overrides):
    """Returns a ParameterProvider for a wheat root on the given soil
    description, crop parameters can be overridden with keywords.
    """
    soil = one_layer_soil if soil is None else soil
    cropdata = copy.deepcopy(crop_parameters)
    for key, value in crop_overrides.items():
        if value is None:
            cropdata.pop(key, None)
        else:
            cropdata[key] = value
    return ParameterProvider(sitedata={"ZoneName": "field"},
                             soildata={"SoilProfileDescription": copy.deepcopy(soil)},
                             cropdata=cropdata)


def make_root(soil=None, **crop_overrides):
    """Returns the kiosk, the soil store and a Root bound to its zone."""
    kiosk = VariableKiosk()
    parvalues = make_parameterprovider(soil, **crop_overrides)
    soil = SoilWaterN(start_day, kiosk, parvalues)
    root = Root(start_day, kiosk, parvalues, soil.soil_profile)
    return kiosk, soil, root


def make_drivers(day=start_day, dmsupply=5.0, transpdemand=2.0, temp=None):
    return DriverDataContainer(DAY=day, DMSUPPLY=dmsupply, TRANSPDEMAND=transpdemand, TEMP=temp)
