# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR

from .engine import Engine


class LayeredRootModel(Engine):
    """Convenience class for running the layered root model on a soil with
    water and mineral nitrogen pools.

    see `pmfroot.engine.Engine` for description of arguments and keywords
    """
    config = "LayeredRoot.conf"
    __rootmodel__ = "LayeredRoot"
    __rootmodelversion__ = "1.0"
    __waterbalance__ = "SoilWaterN"
    __nitrogenbalance__ = "SoilWaterN"
