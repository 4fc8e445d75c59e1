# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
import numpy as np

from ..traitlets import Float, Unicode, Instance
from ..decorators import prepare_rates, prepare_states
from ..base import ParamTemplate, StatesTemplate, RatesTemplate, \
    SimulationObject
from .. import signals
from .soil_profile import SoilProfile
from .zone import ZoneWaterAndN


class SoilWaterN(SimulationObject):
    """A layered store of soil water, mineral nitrogen and fresh organic matter.

    This module is a book-keeping approach for the soil resources explored by
    the root. It does not simulate infiltration, drainage, evaporation or N
    transformations: the water and mineral N in each layer only change through
    the uptake reported by the root, and fresh organic matter (FOM) from root
    senescence and plant ending is accumulated per layer. The current water and
    mineral N are made available to the root through a single `ZoneWaterAndN`.

    **Simulation parameters**

    ======================== ================================================ =======
     Name                     Description                                      Unit
    ======================== ================================================ =======
    SoilProfileDescription    Layers and soil-crop parameters, see              -
                              `SoilProfile`
    ZoneName                  Name of the root zone                             -
    ======================== ================================================ =======

    **State variables**

    ============ ================================================= ==== ============
     Name         Description                                       Pbl      Unit
    ============ ================================================= ==== ============
     SW           Soil water per layer                               N    mm
     NO3          Nitrate-N per layer                                N    |kg ha-1|
     NH4          Ammonium-N per layer                               N    |kg ha-1|
     FOMAmount    Fresh organic matter per layer                     N    |kg ha-1|
     FOMN         N in fresh organic matter per layer                N    |kg ha-1|
     FOMC         C in fresh organic matter per layer                N    |kg ha-1|
     SWTOT        Total soil water in the profile                    Y    mm
     NO3TOT       Total nitrate-N in the profile                     Y    |kg ha-1|
     NH4TOT       Total ammonium-N in the profile                    Y    |kg ha-1|
     FOMTOT       Total fresh organic matter in the profile          Y    |kg ha-1|
     Zones        List with the root zone(s) of this soil            Y    -
    ============ ================================================= ==== ============

    **Rate variables**

    ============ ================================================= ==== =============
     Name         Description                                       Pbl      Unit
    ============ ================================================= ==== =============
     DeltaSW      Change of soil water per layer                     N    |mm d-1|
     DeltaNO3     Change of nitrate-N per layer                      N    |kg ha-1 d-1|
     DeltaNH4     Change of ammonium-N per layer                     N    |kg ha-1 d-1|
     FOMIn        Incoming fresh organic matter per layer            N    |kg ha-1 d-1|
     FOMNIn       Incoming N in fresh organic matter per layer       N    |kg ha-1 d-1|
     FOMCIn       Incoming C in fresh organic matter per layer       N    |kg ha-1 d-1|
    ============ ================================================= ==== =============

    **Signals send or handled**

    `SoilWaterN` receives the following signals:
        * WATER_CHANGED: changes of soil water through root uptake.
        * NITROGEN_CHANGED: changes of nitrate and ammonium through root uptake.
        * INCORP_FOM: fresh organic matter incorporated in the soil.
    """

    soil_profile = Instance(SoilProfile)

    class Parameters(ParamTemplate):
        ZoneName = Unicode()

    class StateVariables(StatesTemplate):
        SW = Instance(np.ndarray)
        NO3 = Instance(np.ndarray)
        NH4 = Instance(np.ndarray)
        FOMAmount = Instance(np.ndarray)
        FOMN = Instance(np.ndarray)
        FOMC = Instance(np.ndarray)
        SWTOT = Float()
        NO3TOT = Float()
        NH4TOT = Float()
        FOMTOT = Float()
        Zones = Instance(list)

    class RateVariables(RatesTemplate):
        DeltaSW = Instance(np.ndarray)
        DeltaNO3 = Instance(np.ndarray)
        DeltaNH4 = Instance(np.ndarray)
        FOMIn = Instance(np.ndarray)
        FOMNIn = Instance(np.ndarray)
        FOMCIn = Instance(np.ndarray)

    def initialize(self, day, kiosk, parvalues):
        """
        :param day: start date of the simulation
        :param kiosk: variable kiosk of this PMFRoot instance
        :param parvalues: `ParameterProvider` object providing parameters as
                key/value pairs
        """
        self.params = self.Parameters(parvalues)
        self.soil_profile = sp = SoilProfile(parvalues)
        n = sp.nlayers

        SW = np.array([layer.SWI * layer.Thickness for layer in sp])
        NO3 = np.array([layer.NO3I for layer in sp])
        NH4 = np.array([layer.NH4I for layer in sp])
        zone = ZoneWaterAndN(self.params.ZoneName, n)
        zone.update(SW, NO3, NH4)

        self.states = self.StateVariables(kiosk, publish=["SWTOT", "NO3TOT", "NH4TOT", "FOMTOT", "Zones"],
                                          SW=SW, NO3=NO3, NH4=NH4, FOMAmount=np.zeros(n),
                                          FOMN=np.zeros(n), FOMC=np.zeros(n), SWTOT=SW.sum(),
                                          NO3TOT=NO3.sum(), NH4TOT=NH4.sum(), FOMTOT=0., Zones=[zone])
        zeros = {name: np.zeros(n) for name in ["DeltaSW", "DeltaNO3", "DeltaNH4", "FOMIn", "FOMNIn", "FOMCIn"]}
        self.rates = self.RateVariables(kiosk, **zeros)

        self._connect_signal(self._on_WATER_CHANGED, signals.water_changed)
        self._connect_signal(self._on_NITROGEN_CHANGED, signals.nitrogen_changed)
        self._connect_signal(self._on_INCORP_FOM, signals.incorp_fom)

    def calc_rates(self, day, drv):
        # all changes arrive through signals
        pass

    @prepare_states
    def integrate(self, day, delt=1.0):
        r = self.rates
        s = self.states

        for name, delta in [("SW", r.DeltaSW), ("NO3", r.DeltaNO3), ("NH4", r.DeltaNH4)]:
            values = getattr(s, name)
            values += delta * delt
            if np.any(values < -1e-9):
                msg = "Negative %s in soil layers after uptake: %s, set to zero." % (name, values)
                self.logger.warning(msg)
            np.maximum(values, 0., out=values)

        s.FOMAmount += r.FOMIn
        s.FOMN += r.FOMNIn
        s.FOMC += r.FOMCIn

        s.SWTOT = float(s.SW.sum())
        s.NO3TOT = float(s.NO3.sum())
        s.NH4TOT = float(s.NH4.sum())
        s.FOMTOT = float(s.FOMAmount.sum())
        for zone in s.Zones:
            zone.update(s.SW, s.NO3, s.NH4)
        self.touch()

    @prepare_rates
    def _on_WATER_CHANGED(self, delta_water=None, **kwargs):
        self.rates.DeltaSW += self.soil_profile.check_layered("delta_water", delta_water)

    @prepare_rates
    def _on_NITROGEN_CHANGED(self, delta_no3=None, delta_nh4=None, **kwargs):
        r = self.rates
        sp = self.soil_profile
        if delta_no3 is not None:
            r.DeltaNO3 += sp.check_layered("delta_no3", delta_no3)
        if delta_nh4 is not None:
            r.DeltaNH4 += sp.check_layered("delta_nh4", delta_nh4)

    @prepare_rates
    def _on_INCORP_FOM(self, fom_layers=None, **kwargs):
        r = self.rates
        layers = fom_layers.layers
        if len(layers) != self.soil_profile.nlayers:
            msg = "FOM from '%s' has %i layers, soil profile has %i." % \
                  (fom_layers.crop_type, len(layers), self.soil_profile.nlayers)
            self.logger.warning(msg)
        for i, fom in enumerate(layers[:self.soil_profile.nlayers]):
            r.FOMIn[i] += fom.amount
            r.FOMNIn[i] += fom.N
            r.FOMCIn[i] += fom.C
        self.logger.debug("Received %.3f kg/ha FOM from %s" % (sum(f.amount for f in layers),
                                                             fom_layers.crop_type))
