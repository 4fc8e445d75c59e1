# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
import logging

import numpy as np

from ..util import limit, KG_HA_TO_G_M2


class RootUptakeSupply(object):
    """Computes the per-layer supply of water, nitrate and ammonium that the
    root can take up from its zone.

    :param soil_profile: the `SoilProfile` explored by the root
    :param soil_crop: the `SoilCrop` parameterisation for the plant
    :param zone: the `ZoneWaterAndN` the root is bound to
    :param params: root parameters providing `SpecificRootLength` (mm/g) and
        the `KNO3`, `KNH4` and `NUptakeSWFactor` tables.

    Water supply is limited by the extraction rate KL and the fraction of the
    layer explored by the root front. Mineral N supply of each form depends
    on the amount of N in the layer, its concentration, the root length
    density and the relative water content of the layer.
    """

    def __init__(self, soil_profile, soil_crop, zone, params):
        self.soil_profile = soil_profile
        self.soil_crop = soil_crop
        self.zone = zone
        self.params = params

    @property
    def logger(self):
        loggername = "%s.%s" % (self.__class__.__module__,
                                self.__class__.__name__)
        return logging.getLogger(loggername)

    def length_density(self, live):
        """Root length density per layer (mm/mm3) of the live biomass."""
        return live.Wt * self.params.SpecificRootLength / 1e6 / self.soil_profile.thickness

    def relative_water_content(self):
        """Water content between LL15 and DUL, scaled to 0-1 for each layer."""
        sp = self.soil_profile
        rwc = (self.zone.Water - sp.ll15mm) / (sp.dulmm - sp.ll15mm)
        return np.clip(rwc, 0., 1.)

    def water_supply(self, root_depth, kl_modifier):
        """Potential water uptake per layer (mm) for roots reaching `root_depth`.

        Layers below the layer holding the root front supply nothing.
        """
        sp = self.soil_profile
        sc = self.soil_crop
        supply = np.zeros(sp.nlayers)
        if root_depth <= 0.:
            return supply
        front = sp.layer_index(root_depth)
        for i in range(front + 1):
            available = self.zone.Water[i] - sc.LL[i] * sp.thickness[i]
            supply[i] = max(0., sc.KL[i] * kl_modifier * available * sp.root_proportion(i, root_depth))
        return supply

    def _mineral_n_supply(self, mineral_n, k_table, live, max_daily_uptake):
        sp = self.soil_profile
        supply = np.zeros(sp.nlayers)
        rlv = self.length_density(live)
        rwc = self.relative_water_content()
        wt = live.Wt
        cumulative = 0.
        for i in range(sp.nlayers):
            if wt[i] <= 0.:
                continue
            ppm = mineral_n[i] * (100.0 / (sp.bd[i] * sp.thickness[i]))
            swaf = self.params.NUptakeSWFactor(limit(0., 1., rwc[i]))
            potential = mineral_n[i] * k_table(rlv[i]) * ppm * swaf
            supply[i] = min(potential, max_daily_uptake - cumulative)
            if supply[i] < potential:
                self.logger.debug("Mineral N supply of layer %i capped at %.3f kg/ha by the maximum "
                                  "daily uptake of %.3f kg/ha." % (i, supply[i], max_daily_uptake))
            cumulative += supply[i]
        return supply

    def no3_supply(self, live, max_daily_uptake):
        """Nitrate-N supply per layer (kg N/ha), cumulatively capped at
        `max_daily_uptake` (kg N/ha).
        """
        return self._mineral_n_supply(self.zone.NO3N, self.params.KNO3, live, max_daily_uptake)

    def nh4_supply(self, live, max_daily_uptake):
        """Ammonium-N supply per layer (kg N/ha), cumulatively capped at
        `max_daily_uptake` (kg N/ha).
        """
        return self._mineral_n_supply(self.zone.NH4N, self.params.KNH4, live, max_daily_uptake)

    def n_supply(self, live, max_daily_uptake):
        """Total mineral N supply (g N/m2) of both N forms."""
        no3 = self.no3_supply(live, max_daily_uptake).sum()
        nh4 = self.nh4_supply(live, max_daily_uptake).sum()
        return (min(no3, max_daily_uptake) + min(nh4, max_daily_uptake)) * KG_HA_TO_G_M2
