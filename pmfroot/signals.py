# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""This module defines and describes the signals used by PMFRoot

Signals are used to notify components of events such as sowing, emergence,
harvest and the end of a plant's life, and to pass uptake and organic matter
fluxes from the root to the soil. Signals are sent by any SimulationObject
through its `SimulationObject._send_signal()` method and received by
registering a handler through `SimulationObject._connect_signal()`. Only
keyword arguments should be used when sending signals; handlers receive the
keywords they accept and ignore the rest (see the PyDispatcher_ package).

The following signals are defined:

**SOWING**

Sent by the AgroManager when a plant is sown::

    self._send_signal(signal=signals.sowing, plant_name=<str>, depth=<float>,
                      population=<float>)

`depth` is the sowing depth (mm) and `population` the number of plants per m2.

**CROP_EMERGED**

Sent by the AgroManager when the plant emerges, from this moment senescence
of root biomass is simulated::

    self._send_signal(signal=signals.crop_emerged, plant_name=<str>)

**REMOVE_BIOMASS**

Sent for harvest, cut or graze events::

    self._send_signal(signal=signals.remove_biomass, plant_name=<str>,
                      fraction_to_residue=<float>, fraction_removed=<float>)

**PLANT_ENDING**

Sent when the plant dies or is removed; all root biomass is returned to the
soil as fresh organic matter::

    self._send_signal(signal=signals.plant_ending, plant_name=<str>)

**WATER_CHANGED**

Sent by the root after water uptake, `delta_water` holds the (negative) change
of soil water per layer in mm::

    self._send_signal(signal=signals.water_changed, delta_water=<ndarray>)

**NITROGEN_CHANGED**

Sent by the root after nitrogen uptake, with the (negative) changes of nitrate
and ammonium per layer in kg N/ha::

    self._send_signal(signal=signals.nitrogen_changed, delta_no3=<ndarray>,
                      delta_nh4=<ndarray>)

**INCORP_FOM**

Sent when senesced or removed root biomass is incorporated as fresh organic
matter in the soil::

    self._send_signal(signal=signals.incorp_fom, fom_layers=<FOMLayers>)

**OUTPUT**

Sent by the Timer when model output should be stored.

**TERMINATE**

Sent by the Timer or the AgroManager when the simulation should stop.

.. _PyDispatcher: http://pydispatcher.sourceforge.net/
"""
sowing = "SOWING"
crop_emerged = "CROP_EMERGED"
remove_biomass = "REMOVE_BIOMASS"
plant_ending = "PLANT_ENDING"
water_changed = "WATER_CHANGED"
nitrogen_changed = "NITROGEN_CHANGED"
incorp_fom = "INCORP_FOM"
output = "OUTPUT"
terminate = "TERMINATE"
