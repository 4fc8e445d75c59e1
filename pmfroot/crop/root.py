# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
import numpy as np

from ..traitlets import Float, Instance, Unicode, Enum
from ..decorators import prepare_rates, prepare_states
from ..util import AfgenTrait, floats_are_equal
from ..base import ParamTemplate, StatesTemplate, RatesTemplate, \
    SimulationObject
from ..settings import settings
from ..soil.soil_profile import SoilProfile, SoilCrop
from ..soil.zone import ZoneWaterAndN, find_zone
from .. import signals
from .. import exceptions as exc
from .biomass import LayeredBiomass, BiomassPoolType, BiomassSupplyType, make_fom_layers
from .functions import RootFunctions
from .root_supply import RootUptakeSupply

PHASES = ["dormant", "demand_computed", "potential_allocated", "supply_reported",
          "final_allocated", "grown", "cleared"]


class Root(SimulationObject):
    """Layered root organ: root front advance, senescence, supply of water and
    mineral N and the distribution of dry matter and N over the soil layers.

    The root keeps live and dead biomass pools for each layer of the soil
    profile. Every day the root front advances with a velocity that is
    modified by temperature and by the exploration factor XF of the layer
    holding the front, until it reaches the deepest layer that can be
    explored or the maximum rooting depth of the crop. After emergence a
    fraction of the live biomass senesces and is returned to the soil as
    fresh organic matter (FOM).

    The root takes part in the daily arbitration of the plant: it reports its
    dry matter (DM) and N demand and its supply of water and mineral N, and
    receives allocations of DM and N. Allocations are distributed over the
    layers with weights given by the root activity, i.e. the water uptake per
    unit of root biomass in each layer. Allocations are applied to the pools
    immediately.

    **Simulation parameters**

    =================== ================================================ ===========
     Name                Description                                      Unit
    =================== ================================================ ===========
    InitialDM            Root dry matter per plant at sowing               g/plant
    SpecificRootLength   Root length per unit of root biomass              mm/g
    KNO3                 NO3 extraction coefficient as function of the     -
                         root length density
    KNH4                 NH4 extraction coefficient as function of the     -
                         root length density
    NUptakeSWFactor      Soil water factor on N uptake as function of      -
                         the relative water content
    CropName             Name of the plant, used for the soil-crop          -
                         parameterisation and for matching signals
    CropType             Crop type reported with the FOM                    -
    ZoneName             Name of the soil zone explored by the root         -
    =================== ================================================ ===========

    Further functions, such as RootFrontVelocity and SenescenceRate, are
    described with `RootFunctions`.

    **State variables**

    =======  ================================================= ==== ============
     Name     Description                                      Pbl      Unit
    =======  ================================================= ==== ============
    RD       Depth of the root front                             Y     mm
    RL       Total root length density over the layers           Y    |mm mm-3|
    Live     Live biomass pools per layer                        N    |g m-2|
    Dead     Dead biomass pools per layer                        N    |g m-2|
    WRT      Weight of living roots                              Y    |g m-2|
    DWRT     Weight of dead roots                                N    |g m-2|
    NRT      N in living roots                                   Y    |g m-2|
    =======  ================================================= ==== ============

    **Rate variables**

    ========================== ============================================ ==== ==============
     Name                       Description                                  Pbl      Unit
    ========================== ============================================ ==== ==============
    RR                          Increase of root depth                        N    |mm d-1|
    SenescenceRate              Fraction of live biomass senescing            N    |d-1|
    TotalDMDemand               Dry matter demand                             Y    |g m-2 d-1|
    TotalDMAllocated            Dry matter allocated                          Y    |g m-2 d-1|
    TotalStructuralNDemand      Structural N demand                           N    |g m-2 d-1|
    TotalNonStructuralNDemand   Non-structural N demand                       N    |g m-2 d-1|
    TotalNDemand                Total N demand                                Y    |g m-2 d-1|
    TotalNAllocated             Total N allocated                             Y    |g m-2 d-1|
    NTakenUp                    N taken up after arbitration                  N    |g m-2 d-1|
    NUptakeSupply               Mineral N supply of both forms                Y    |g m-2 d-1|
    WaterUptake                 Water taken up                                Y    |mm d-1|
    NUptake                     Mineral N taken up                            Y    |kg ha-1 d-1|
    DMAllocated                 Dry matter allocated per layer                N    |g m-2 d-1|
    StructuralNDemand           Structural N demand per layer                 N    |g m-2 d-1|
    NonStructuralNDemand        Non-structural N demand per layer             N    |g m-2 d-1|
    WaterSupply                 Water supply per layer                        N    |mm d-1|
    NO3Supply                   Nitrate-N supply per layer                    N    |kg ha-1 d-1|
    NH4Supply                   Ammonium-N supply per layer                   N    |kg ha-1 d-1|
    WaterActivity               Water activity of the roots per layer         N    |mm g-1 m2|
    NActivity                   N activity of the roots per layer             N    |mm g-1 m2|
    ========================== ============================================ ==== ==============

    **Signals send or handled**

    `Root` sends WATER_CHANGED, NITROGEN_CHANGED and INCORP_FOM and handles
    SOWING, CROP_EMERGED, REMOVE_BIOMASS and PLANT_ENDING for its plant.

    **External dependencies:**

    =========  =================================== =================  ============
     Name       Description                         Provided by        Unit
    =========  =================================== =================  ============
    Zones      Soil water and mineral N             SoilWaterN          -
    =========  =================================== =================  ============
    """

    soil_profile = Instance(SoilProfile)
    soil_crop = Instance(SoilCrop)
    zone = Instance(ZoneWaterAndN)
    supply = Instance(RootUptakeSupply)
    functions = Instance(RootFunctions)
    phase = Enum(PHASES)

    # Lifecycle of the plant as received through signals
    _alive = False
    _emerged = False
    _sowing_depth = 0.

    # Water uptake recorded through do_water_uptake()
    _uptake = None
    _n_demand_ready = False

    class Parameters(ParamTemplate):
        InitialDM = Float()
        SpecificRootLength = Float()
        KNO3 = AfgenTrait()
        KNH4 = AfgenTrait()
        NUptakeSWFactor = AfgenTrait()
        CropName = Unicode()
        CropType = Unicode()
        ZoneName = Unicode()

    class StateVariables(StatesTemplate):
        RD = Float()
        RL = Float()
        Live = Instance(LayeredBiomass)
        Dead = Instance(LayeredBiomass)
        WRT = Float()
        DWRT = Float()
        NRT = Float()

    class RateVariables(RatesTemplate):
        RR = Float()
        SenescenceRate = Float()
        TotalDMDemand = Float()
        TotalDMAllocated = Float()
        TotalStructuralNDemand = Float()
        TotalNonStructuralNDemand = Float()
        TotalNDemand = Float()
        TotalNAllocated = Float()
        NTakenUp = Float()
        NUptakeSupply = Float()
        WaterUptake = Float()
        NUptake = Float()
        DMAllocated = Instance(np.ndarray)
        StructuralNDemand = Instance(np.ndarray)
        NonStructuralNDemand = Instance(np.ndarray)
        WaterSupply = Instance(np.ndarray)
        NO3Supply = Instance(np.ndarray)
        NH4Supply = Instance(np.ndarray)
        WaterActivity = Instance(np.ndarray)
        NActivity = Instance(np.ndarray)

    def initialize(self, day, kiosk, parvalues, soil_profile):
        """
        :param day: start date of the simulation
        :param kiosk: variable kiosk of this PMFRoot instance
        :param parvalues: `ParameterProvider` object providing parameters as
                key/value pairs
        :param soil_profile: the `SoilProfile` explored by the root
        """
        self.params = p = self.Parameters(parvalues)
        self.functions = RootFunctions(parvalues)
        self.functions.bind(kiosk)
        self.soil_profile = soil_profile
        self.soil_crop = soil_profile.crop(p.CropName)
        if "Zones" not in kiosk:
            msg = "No soil zones published, the soil must be initialized before the root."
            raise exc.ZoneError(msg)
        self.zone = find_zone(kiosk.Zones, p.ZoneName)
        if self.zone.nlayers != soil_profile.nlayers:
            msg = "Zone '%s' has %i layers while the soil profile has %i." % \
                  (self.zone.name, self.zone.nlayers, soil_profile.nlayers)
            raise exc.SoilProfileError(msg)
        self.supply = RootUptakeSupply(soil_profile, self.soil_crop, self.zone, p)

        n = soil_profile.nlayers
        self.states = self.StateVariables(kiosk, publish=["RD", "RL", "WRT", "NRT"],
                                          RD=0., RL=0., Live=LayeredBiomass(n), Dead=LayeredBiomass(n),
                                          WRT=0., DWRT=0., NRT=0.)
        arrays = {name: np.zeros(n) for name in ["DMAllocated", "StructuralNDemand", "NonStructuralNDemand",
                                                 "WaterSupply", "NO3Supply", "NH4Supply",
                                                 "WaterActivity", "NActivity"]}
        self.rates = self.RateVariables(kiosk, publish=["TotalDMDemand", "TotalDMAllocated", "TotalNDemand",
                                                        "TotalNAllocated", "NUptakeSupply", "WaterUptake",
                                                        "NUptake"], **arrays)
        self.clear()
        self.phase = "dormant"

        self._connect_signal(self._on_SOWING, signals.sowing)
        self._connect_signal(self._on_CROP_EMERGED, signals.crop_emerged)
        self._connect_signal(self._on_REMOVE_BIOMASS, signals.remove_biomass)
        self._connect_signal(self._on_PLANT_ENDING, signals.plant_ending)

    @property
    def is_alive(self):
        return self._alive

    @property
    def is_emerged(self):
        return self._emerged

    @property
    def is_growing(self):
        return self._alive and self._sowing_depth < self.states.RD

    @property
    def max_depth(self):
        """Deepest root front position given soil and crop limits (mm)."""
        depth = self.soil_profile.max_penetrable_depth(self.soil_crop)
        if self.functions.is_defined("MaximumRootDepth"):
            depth = min(depth, self.functions.MaximumRootDepth)
        return depth

    @property
    def length_density(self):
        return self.supply.length_density(self.states.Live)

    @property
    def MaxNconc(self):
        return self.functions.MaximumNConc

    @property
    def MinNconc(self):
        return self.functions.MinimumNConc

    @prepare_rates
    def calc_rates(self, day, drv):
        r = self.rates
        s = self.states
        f = self.functions
        f.set_drivers(drv)

        self._n_demand_ready = False
        if self.phase != "cleared":
            self.phase = "dormant"

        r.RR = 0.
        if self._alive:
            front = self.soil_profile.layer_index(s.RD)
            advance = f.RootFrontVelocity * self.soil_crop.XF[front] * f.TemperatureEffect
            new_depth = min(s.RD + advance, self.max_depth)
            r.RR = max(0., new_depth - s.RD)

        r.SenescenceRate = f.SenescenceRate if self._emerged else 0.

    @prepare_states
    def integrate(self, day, delt=1.0):
        s = self.states
        r = self.rates

        if self._alive:
            s.RD += r.RR * delt
        if self._emerged:
            self._senesce(r.SenescenceRate)
        self._update_totals()
        if self.phase != "cleared":
            self.phase = "grown"

    def _senesce(self, rate):
        """Senesces a fraction of the live biomass and returns it to the soil as FOM.

        The FOM is sent also when the rate is zero.
        """
        live = self.states.Live
        dm = live.Wt * rate
        n = live.N * rate
        live.scale(1.0 - rate)
        fom = make_fom_layers(self.params.CropType, dm, n)
        self._send_signal(signal=signals.incorp_fom, fom_layers=fom)

    def _update_totals(self):
        s = self.states
        s.WRT = s.Live.total_wt
        s.DWRT = s.Dead.total_wt
        s.NRT = s.Live.total_n
        s.RL = float(self.length_density.sum())

    def _root_activity(self):
        """Sets the water and N activity of the roots per layer and returns the
        water activity, used as the weights for distributing dry matter over
        the layers.

        Layers without live biomass above the root front take over the
        activity of the layer above them.
        """
        s = self.states
        sp = self.soil_profile
        wt = s.Live.Wt
        ra_water = self.rates.WaterActivity
        ra_nitrogen = self.rates.NActivity
        ra_water.fill(0.)
        ra_nitrogen.fill(0.)
        front = sp.layer_index(s.RD)
        for i in range(front + 1):
            if wt[i] > 0.:
                ra_water[i] = self._uptake[i] / wt[i] * sp.thickness[i] * sp.root_proportion(i, s.RD)
                ra_water[i] = max(ra_water[i], 1e-20)
                # TODO: floor the N activity with its own value once reference
                #  outputs confirm it; it is floored with the water activity now.
                ra_nitrogen[i] = max(ra_water[i], 1e-10)
            elif i > 0:
                ra_water[i] = ra_water[i-1]
                ra_nitrogen[i] = ra_nitrogen[i-1]
        return ra_water.copy()

    def dm_demand(self, dm_supply):
        """Returns the dry matter demand of the root, all of it structural.

        :param dm_supply: the dry matter supply of the plant (g/m2)

        The demand is a fraction `PartitionFraction` of the supply while the
        plant is alive and the root front is below the sowing depth.
        """
        demand = 0.
        if self.is_growing and self.functions.is_defined("PartitionFraction"):
            demand = dm_supply * self.functions.PartitionFraction
        self.rates.TotalDMDemand = demand
        self.phase = "demand_computed"
        return BiomassPoolType(structural=demand)

    def set_dm_potential_allocation(self, value):
        """Distributes the potential dry matter allocation over the layers.

        :param value: a `BiomassPoolType` with the potential allocation (g/m2)
        """
        if self._uptake is None:
            msg = "No water and N uptakes supplied to root. Is a soil arbitrator included in the simulation?"
            raise exc.MissingUptakeError(msg)

        if self.states.RD <= 0.:
            return

        if self.rates.TotalDMDemand == 0. and value.structural >= 1e-12:
            msg = "Invalid allocation of potential DM (%g) to %s without demand." % \
                  (value.structural, self.params.CropName)
            raise exc.AllocationError(msg)

        live = self.states.Live
        activity = self._root_activity()
        total = activity.sum()
        if total > 0.:
            live.PotentialDMAllocation[:] = value.structural * activity / total
        elif value.structural > 0.:
            msg = "Error trying to partition potential root biomass: no root activity."
            raise exc.AllocationError(msg)
        else:
            live.PotentialDMAllocation.fill(0.)
        self.phase = "potential_allocated"

    def n_demand(self):
        """Returns the structural and non-structural N demand of the root.

        The structural demand follows from the potential DM allocation and the
        minimum N concentration, the non-structural demand is the remaining
        deficit up to the maximum N concentration. Repeated calls within a day
        return the same demand.
        """
        r = self.rates
        live = self.states.Live
        switch = self.functions.NitrogenDemandSwitch
        potential = live.PotentialDMAllocation

        r.StructuralNDemand[:] = potential * self.MinNconc * switch
        deficit = np.maximum(0., self.MaxNconc * (live.Wt + potential) - (live.N + r.StructuralNDemand))
        r.NonStructuralNDemand[:] = np.maximum(0., deficit - r.StructuralNDemand) * switch

        r.TotalStructuralNDemand = float(r.StructuralNDemand.sum())
        r.TotalNonStructuralNDemand = float(r.NonStructuralNDemand.sum())
        r.TotalNDemand = r.TotalStructuralNDemand + r.TotalNonStructuralNDemand
        self._n_demand_ready = True
        return BiomassPoolType(structural=r.TotalStructuralNDemand,
                               non_structural=r.TotalNonStructuralNDemand)

    def _report_supply(self):
        # supply asked for before the potential allocation, such as the water
        # supply needed for the uptake, does not move the phase
        if self.phase == "potential_allocated":
            self.phase = "supply_reported"

    def water_supply(self):
        """Returns the water supply per layer (mm)."""
        r = self.rates
        r.WaterSupply[:] = self.supply.water_supply(self.states.RD, self.functions.KLModifier)
        self._report_supply()
        return r.WaterSupply.copy()

    def no3_supply(self):
        """Returns the nitrate-N supply per layer (kg N/ha)."""
        r = self.rates
        r.NO3Supply[:] = self.supply.no3_supply(self.states.Live, self.functions.MaxDailyNUptake)
        self._report_supply()
        return r.NO3Supply.copy()

    def nh4_supply(self):
        """Returns the ammonium-N supply per layer (kg N/ha)."""
        r = self.rates
        r.NH4Supply[:] = self.supply.nh4_supply(self.states.Live, self.functions.MaxDailyNUptake)
        self._report_supply()
        return r.NH4Supply.copy()

    def n_supply(self):
        """Returns the total mineral N supply (g N/m2) as a `BiomassSupplyType`."""
        supply = self.supply.n_supply(self.states.Live, self.functions.MaxDailyNUptake)
        self.rates.NUptakeSupply = supply
        self._report_supply()
        return BiomassSupplyType(uptake=supply)

    def do_water_uptake(self, amounts):
        """Records the water uptake per layer (mm) and passes it on to the soil."""
        amounts = self.soil_profile.check_layered("water uptake", amounts)
        self._uptake = amounts.copy()
        self.rates.WaterUptake = float(amounts.sum())
        self._send_signal(signal=signals.water_changed, delta_water=-amounts)

    def do_nitrogen_uptake(self, no3_amounts, nh4_amounts):
        """Records the nitrate and ammonium uptake per layer (kg N/ha) and
        passes it on to the soil.
        """
        sp = self.soil_profile
        no3_amounts = sp.check_layered("NO3 uptake", no3_amounts)
        nh4_amounts = sp.check_layered("NH4 uptake", nh4_amounts)
        self.rates.NUptake = float(no3_amounts.sum() + nh4_amounts.sum())
        self._send_signal(signal=signals.nitrogen_changed, delta_no3=-no3_amounts,
                          delta_nh4=-nh4_amounts)

    @prepare_states
    def set_dm_allocation(self, value):
        """Adds the dry matter allocation (g/m2) to the live structural
        biomass, distributed over the layers with the root activity.

        :param value: a `BiomassAllocationType`
        """
        r = self.rates
        r.TotalDMAllocated = 0.
        r.DMAllocated.fill(0.)

        if self.states.RD <= 0.:
            if value.structural > settings.FLOAT_TOLERANCE:
                msg = "Invalid allocation of DM (%g) to %s before it has roots." % \
                      (value.structural, self.params.CropName)
                raise exc.AllocationError(msg)
            return
        if self._uptake is None:
            msg = "No water and N uptakes supplied to root. Is a soil arbitrator included in the simulation?"
            raise exc.MissingUptakeError(msg)
        if r.TotalDMDemand == 0. and value.structural >= 1e-12:
            msg = "Invalid allocation of DM (%g) to %s without demand." % \
                  (value.structural, self.params.CropName)
            raise exc.AllocationError(msg)

        r.TotalDMAllocated = value.structural

        live = self.states.Live
        activity = self._root_activity()
        total = activity.sum()
        if total > 0.:
            r.DMAllocated[:] = value.structural * activity / total
            live.StructuralWt += r.DMAllocated
        elif value.structural > 0.:
            msg = "Error trying to partition root biomass: no root activity."
            raise exc.AllocationError(msg)

        if not floats_are_equal(r.DMAllocated.sum(), value.structural, settings.FLOAT_TOLERANCE):
            msg = "Error in DM allocation to %s: %g allocated over layers, %g requested." % \
                  (self.params.CropName, r.DMAllocated.sum(), value.structural)
            raise exc.AllocationError(msg)
        self._update_totals()
        self.phase = "final_allocated"

    @prepare_states
    def set_n_allocation(self, value):
        """Adds the N allocation (g/m2) to the live pools, distributed over the
        layers in proportion to the structural and non-structural N demand.

        :param value: a `BiomassAllocationType`
        """
        r = self.rates
        if not self._n_demand_ready:
            msg = "N allocation to %s before its N demand was computed." % self.params.CropName
            raise exc.ArbitrationOrderError(msg)

        r.NTakenUp = value.uptake
        r.TotalNAllocated = value.structural + value.non_structural
        surplus = r.TotalNAllocated - r.TotalNDemand
        if surplus > settings.FLOAT_TOLERANCE:
            msg = "N allocation to roots (%g) exceeds demand (%g)." % (r.TotalNAllocated, r.TotalNDemand)
            raise exc.AllocationError(msg)

        live = self.states.Live
        allocated = 0.
        if r.TotalStructuralNDemand > 0.:
            structural = value.structural * r.StructuralNDemand / r.TotalStructuralNDemand
            live.StructuralN += structural
            allocated += structural.sum()
        if r.TotalNonStructuralNDemand > 0.:
            non_structural = value.non_structural * r.NonStructuralNDemand / r.TotalNonStructuralNDemand
            live.NonStructuralN += non_structural
            allocated += non_structural.sum()

        if not floats_are_equal(allocated, r.TotalNAllocated, settings.FLOAT_TOLERANCE):
            msg = "Error in N allocation to %s: %g allocated over layers, %g requested." % \
                  (self.params.CropName, allocated, r.TotalNAllocated)
            raise exc.NutrientBalanceError(msg)
        self._update_totals()

    @prepare_states
    def clear(self):
        """Resets depth, pools and recorded uptake."""
        s = self.states
        s.RD = 0.
        s.Live.clear()
        s.Dead.clear()
        self._uptake = None
        self.rates.WaterActivity.fill(0.)
        self.rates.NActivity.fill(0.)
        self._n_demand_ready = False
        self.rates.SenescenceRate = 0.
        self._update_totals()

    @prepare_states
    def _on_SOWING(self, plant_name=None, depth=None, population=None, **kwargs):
        if plant_name != self.params.CropName:
            return
        # pools left over from an earlier season are discarded without FOM
        self.clear()
        s = self.states
        self._alive = True
        self._emerged = False
        self._sowing_depth = depth
        s.RD = depth
        self.phase = "dormant"

        nlayers = self.soil_profile.layers_above(depth)
        if nlayers > 0:
            dm = self.params.InitialDM / nlayers * population
            s.Live.StructuralWt[:nlayers] = dm
            s.Live.StructuralN[:nlayers] = dm * self.MaxNconc
        self._update_totals()
        self.logger.info("Root of %s sown at %.1f mm with %.1f plants/m2, initial DM spread over %i layers." %
                         (plant_name, depth, population, nlayers))

    def _on_CROP_EMERGED(self, plant_name=None, **kwargs):
        if plant_name != self.params.CropName:
            return
        self._emerged = True

    @prepare_states
    def _on_REMOVE_BIOMASS(self, plant_name=None, fraction_to_residue=0., fraction_removed=0., **kwargs):
        if plant_name != self.params.CropName:
            return
        remain = 1.0 - (fraction_to_residue + fraction_removed)
        if remain < 0.:
            msg = ("The sum of fraction_to_residue (%g) and fraction_removed (%g) for %s is greater " +
                   "than 1, more root biomass would be removed than is present.") % \
                  (fraction_to_residue, fraction_removed, plant_name)
            raise exc.RemovalFractionError(msg)
        if remain >= 1.0:
            return

        s = self.states
        dm = (s.Live.Wt + s.Dead.Wt) * fraction_to_residue
        n = (s.Live.N + s.Dead.N) * fraction_to_residue
        fom = make_fom_layers(self.params.CropType, dm, n)
        s.Live.scale(remain)
        s.Dead.scale(remain)
        self._update_totals()
        self.logger.info("Harvesting root from %s removing %.1f%% and returning %.1f%% to the "
                         "soil organic matter" % (plant_name, fraction_removed * 100, fraction_to_residue * 100))
        self._send_signal(signal=signals.incorp_fom, fom_layers=fom)

    def _on_PLANT_ENDING(self, plant_name=None, **kwargs):
        if plant_name != self.params.CropName:
            return
        s = self.states
        fom = make_fom_layers(self.params.CropType, s.Live.Wt + s.Dead.Wt, s.Live.N + s.Dead.N)
        self._send_signal(signal=signals.incorp_fom, fom_layers=fom)
        self.clear()
        self._alive = False
        self._emerged = False
        self.phase = "cleared"
        self.logger.info("Root of %s cleared at plant ending." % plant_name)
