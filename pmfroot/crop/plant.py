# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
from ..traitlets import Float, Bool, Unicode, Instance
from ..decorators import prepare_states
from ..base import ParamTemplate, StatesTemplate, SimulationObject
from ..soil.soil_profile import SoilProfile
from .. import signals
from .root import Root
from .arbitrator import OrganArbitrator, SoilArbitrator


class Plant(SimulationObject):
    """Top level object for a plant with a layered root, taking care of the
    lifecycle of the plant and of the daily arbitration sequence.

    The arbitration is carried out in a fixed order every day:

    1. the dry matter supply of the plant is read from the driving variables;
    2. the root computes its depth increase and senescence rate;
    3. the soil arbitrator takes up water up to the transpiration demand;
    4. the root reports its DM demand and receives its potential allocation;
    5. the root reports its N demand;
    6. the soil arbitrator takes up mineral N up to the N demand;
    7. the root receives its final DM allocation and its N allocation.

    **Simulation parameters**

    =========  ================================================ =======
     Name       Description                                      Unit
    =========  ================================================ =======
    CropName    Name of the plant                                  -
    CropType    Type of the plant                                  -
    =========  ================================================ =======

    **State variables**

    ============ ================================================= ==== ============
     Name         Description                                       Pbl      Unit
    ============ ================================================= ==== ============
    PlantAlive    True between sowing and plant ending               Y     -
    PlantEmerged  True between emergence and plant ending            Y     -
    SowingDepth   Depth of sowing                                    Y     mm
    Population    Number of plants                                   Y    |m-2|
    TWUPT         Total water taken up by the roots                  Y     mm
    TNUPT         Total mineral N taken up by the roots              Y    |kg ha-1|
    TDMRT         Total dry matter allocated to the roots            Y    |g m-2|
    ============ ================================================= ==== ============

    **Signals send or handled**

    `Plant` handles SOWING, CROP_EMERGED and PLANT_ENDING for its own name.
    """

    soil_profile = Instance(SoilProfile)
    root = Instance(SimulationObject)
    organ_arbitrator = Instance(SimulationObject)
    soil_arbitrator = Instance(SimulationObject)

    class Parameters(ParamTemplate):
        CropName = Unicode()
        CropType = Unicode()

    class StateVariables(StatesTemplate):
        PlantAlive = Bool()
        PlantEmerged = Bool()
        SowingDepth = Float()
        Population = Float()
        TWUPT = Float()
        TNUPT = Float()
        TDMRT = Float()

    def initialize(self, day, kiosk, parvalues):
        """
        :param day: start date of the simulation
        :param kiosk: variable kiosk of this PMFRoot instance
        :param parvalues: `ParameterProvider` object providing parameters as
                key/value pairs
        """
        self.params = self.Parameters(parvalues)
        self.soil_profile = SoilProfile(parvalues)

        self.organ_arbitrator = OrganArbitrator(day, kiosk)
        self.soil_arbitrator = SoilArbitrator(day, kiosk)
        self.root = Root(day, kiosk, parvalues, self.soil_profile)

        self.states = self.StateVariables(kiosk, publish=["PlantAlive", "PlantEmerged", "SowingDepth",
                                                          "Population", "TWUPT", "TNUPT", "TDMRT"],
                                          PlantAlive=False, PlantEmerged=False, SowingDepth=0.,
                                          Population=0., TWUPT=0., TNUPT=0., TDMRT=0.)

        self._connect_signal(self._on_SOWING, signals.sowing)
        self._connect_signal(self._on_CROP_EMERGED, signals.crop_emerged)
        self._connect_signal(self._on_PLANT_ENDING, signals.plant_ending)

    def calc_rates(self, day, drv):
        root = self.root
        oa = self.organ_arbitrator
        sa = self.soil_arbitrator

        oa.calc_rates(day, drv)
        root.calc_rates(day, drv)

        sa.take_up_water(root, drv.TRANSPDEMAND)

        potential = oa.allocate_potential_dm(root)
        n_demand = root.n_demand()

        n_supply = root.n_supply().uptake
        n_wanted = min(n_supply, n_demand.structural + n_demand.non_structural)
        n_uptake = sa.take_up_nitrogen(root, n_wanted)

        oa.allocate_dm(root, potential)
        oa.allocate_n(root, n_uptake, n_demand)

    @prepare_states
    def integrate(self, day, delt=1.0):
        s = self.states
        r = self.root.rates
        s.TWUPT += r.WaterUptake
        s.TNUPT += r.NUptake
        s.TDMRT += r.TotalDMAllocated

        self.root.integrate(day, delt)
        self.organ_arbitrator.integrate(day, delt)
        self.soil_arbitrator.integrate(day, delt)

        # Re-publish states that did not change in the kiosk
        self.touch()

    @prepare_states
    def _on_SOWING(self, plant_name=None, depth=None, population=None, **kwargs):
        if plant_name != self.params.CropName:
            return
        s = self.states
        s.PlantAlive = True
        s.PlantEmerged = False
        s.SowingDepth = depth
        s.Population = population
        s.TWUPT = 0.
        s.TNUPT = 0.
        s.TDMRT = 0.

    @prepare_states
    def _on_CROP_EMERGED(self, plant_name=None, **kwargs):
        if plant_name != self.params.CropName:
            return
        self.states.PlantEmerged = True

    @prepare_states
    def _on_PLANT_ENDING(self, plant_name=None, **kwargs):
        if plant_name != self.params.CropName:
            return
        self.states.PlantAlive = False
        self.states.PlantEmerged = False
