# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""Arbitration of dry matter and nitrogen between the plant and its organs
and of water and mineral N between the soil and the roots.

Both arbitrators are deliberately simple and serve a single organ: the
organ arbitrator gives the organ what it demands within the DM supply of
the plant, the soil arbitrator limits water uptake to the transpiration
demand and N uptake to the N demand of the organ.
"""
from ..traitlets import Float
from ..decorators import prepare_rates
from ..base import RatesTemplate, SimulationObject
from ..util import KG_HA_TO_G_M2, G_M2_TO_KG_HA
from .biomass import BiomassPoolType, BiomassAllocationType


class OrganArbitrator(SimulationObject):
    """Distributes the dry matter supply and the N taken up by the plant.

    **Rate variables**

    ================  ============================================ ==== =============
     Name              Description                                  Pbl      Unit
    ================  ============================================ ==== =============
    DMSupply           Dry matter supply of the plant                Y    |g m-2 d-1|
    OrganDMDemand      Dry matter demand of the organ                N    |g m-2 d-1|
    OrganDMAllocated   Dry matter allocated to the organ             N    |g m-2 d-1|
    OrganNDemand       N demand of the organ                         N    |g m-2 d-1|
    OrganNAllocated    N allocated to the organ                      N    |g m-2 d-1|
    ================  ============================================ ==== =============

    **External dependencies:**

    =========  =================================== =================  =============
     Name       Description                         Provided by        Unit
    =========  =================================== =================  =============
    DMSUPPLY   Dry matter supply of the plant       Driving variables  |g m-2 d-1|
    =========  =================================== =================  =============
    """

    class RateVariables(RatesTemplate):
        DMSupply = Float()
        OrganDMDemand = Float()
        OrganDMAllocated = Float()
        OrganNDemand = Float()
        OrganNAllocated = Float()

    def initialize(self, day, kiosk):
        self.rates = self.RateVariables(kiosk, publish=["DMSupply"])

    @prepare_rates
    def calc_rates(self, day, drv):
        self.rates.DMSupply = drv.DMSUPPLY

    def integrate(self, day, delt=1.0):
        pass

    @prepare_rates
    def allocate_potential_dm(self, organ):
        """Asks the organ for its DM demand and sets its potential allocation."""
        r = self.rates
        demand = organ.dm_demand(r.DMSupply)
        r.OrganDMDemand = demand.structural
        potential = min(demand.structural, r.DMSupply)
        organ.set_dm_potential_allocation(BiomassPoolType(structural=potential))
        return potential

    @prepare_rates
    def allocate_dm(self, organ, amount):
        """Sets the final DM allocation of the organ."""
        self.rates.OrganDMAllocated = amount
        organ.set_dm_allocation(BiomassAllocationType(structural=amount))

    @prepare_rates
    def allocate_n(self, organ, n_uptake, demand=None):
        """Allocates the N taken up (g/m2) to the organ, structural demand first.

        The N demand of the organ is requested when not given.
        """
        r = self.rates
        if demand is None:
            demand = organ.n_demand()
        r.OrganNDemand = demand.structural + demand.non_structural
        structural = min(n_uptake, demand.structural)
        non_structural = min(n_uptake - structural, demand.non_structural)
        r.OrganNAllocated = structural + non_structural
        organ.set_n_allocation(BiomassAllocationType(structural=structural, non_structural=non_structural,
                                                     uptake=n_uptake))


class SoilArbitrator(SimulationObject):
    """Decides how much water and mineral N the roots take up from their supply.

    **Rate variables**

    ===========  ============================================ ==== =============
     Name         Description                                  Pbl      Unit
    ===========  ============================================ ==== =============
    WSupply       Water supply of the roots                     N    |mm d-1|
    WUptake       Water taken up by the roots                   N    |mm d-1|
    NSupply       Mineral N supply of the roots                 N    |g m-2 d-1|
    NUptakeAct    Mineral N taken up by the roots               N    |g m-2 d-1|
    ===========  ============================================ ==== =============

    **External dependencies:**

    ============  =================================== =================  =============
     Name          Description                         Provided by        Unit
    ============  =================================== =================  =============
    TRANSPDEMAND   Transpiration demand of the plant   Driving variables  |mm d-1|
    ============  =================================== =================  =============
    """

    class RateVariables(RatesTemplate):
        WSupply = Float()
        WUptake = Float()
        NSupply = Float()
        NUptakeAct = Float()

    def initialize(self, day, kiosk):
        self.rates = self.RateVariables(kiosk)

    def calc_rates(self, day, drv):
        pass

    def integrate(self, day, delt=1.0):
        pass

    @prepare_rates
    def take_up_water(self, organ, demand):
        """Scales the water supply of the organ to the transpiration demand (mm)
        and passes the uptake to the organ.
        """
        r = self.rates
        supply = organ.water_supply()
        r.WSupply = float(supply.sum())
        fraction = min(1.0, demand / r.WSupply) if r.WSupply > 0. else 0.
        uptake = supply * fraction
        r.WUptake = float(uptake.sum())
        organ.do_water_uptake(uptake)
        return r.WUptake

    @prepare_rates
    def take_up_nitrogen(self, organ, demand):
        """Takes up mineral N (g/m2) up to `demand`, split over the layers and
        N forms in proportion to their supply. Returns the N taken up (g/m2).
        """
        r = self.rates
        no3 = organ.no3_supply()
        nh4 = organ.nh4_supply()
        total = float(no3.sum() + nh4.sum())
        r.NSupply = total * KG_HA_TO_G_M2
        fraction = min(1.0, demand * G_M2_TO_KG_HA / total) if total > 0. else 0.
        organ.do_nitrogen_uptake(no3 * fraction, nh4 * fraction)
        r.NUptakeAct = total * fraction * KG_HA_TO_G_M2
        return r.NUptakeAct
