# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""The PMFRoot Engine provides the environment where SimulationObjects are 'living'.
The engine takes care of reading the model configuration, initializing model
components, driving the simulation forward by calling the SimulationObjects,
calling the agromanagement unit, keeping track of time and providing the
driving variables needed.

Models are treated together with the Engine, because models are simply
pre-configured Engines.
"""
import datetime

import numpy as np

from .traitlets import Instance, Bool, List, Dict
from .base import (VariableKiosk, DriverDataProvider, AncillaryObject,
                   SimulationObject, BaseEngine, ParameterProvider,
                   ConfigurationLoader)
from .util import check_date
from .timer import Timer
from . import signals
from .settings import settings


class Engine(BaseEngine):
    """Simulation engine for simulating the combined soil/plant system.

    :param parameterprovider: A `ParameterProvider` object providing model
        parameters as key/value pairs. The parameterprovider encapsulates
        the different parameter sets for crop, soil and site parameters.
    :param driverdataprovider: An instance of a DriverDataProvider that can
        return the driving variables in a DriverDataContainer for a given date.
    :param agromanagement: AgroManagement data. The data format is described
        in the section on agronomic management.
    :param config: A string describing the model configuration file to use.
        By only giving a filename PMFRoot assumes it to be located in the 'conf/'
        folder in the main PMFRoot folder.
        If you want to provide you own configuration file, specify
        it as an absolute or a relative path (e.g. with a leading '.')

    Both the soil and the plant are created when the engine starts and are
    simulated during the entire run. The plant remains dormant until it
    receives a SOWING signal from the AgroManager and is cleared again on
    PLANT_ENDING, so a sequence of campaigns can sow the same plant again.

    The daily cycle of the engine is: update the timer, integrate the states
    of plant and soil, retrieve the driving variables, run the agromanagement
    and calculate the rates of plant and soil.

    **Signals handled by Engine:**

    `Engine` handles the following signals:
        * PLANT_ENDING: stores the summary output before the plant is cleared.
        * TERMINATE: runs the `finalize()` section on the components and
          terminates the entire simulation.
        * OUTPUT:  Preserves a copy of the value of selected state/rate
          variables during simulation for later use.
    """
    # system configuration
    config = None
    mconf = Instance(ConfigurationLoader)
    parameterprovider = Instance(ParameterProvider)

    # sub components for simulation
    crop = Instance(SimulationObject)
    soil = Instance(SimulationObject)
    agromanager = Instance(AncillaryObject)
    driverdataprovider = Instance(DriverDataProvider)
    drv = None
    kiosk = Instance(VariableKiosk)
    timer = Instance(Timer)
    day = Instance(datetime.date)

    # flags that are being set by signals
    flag_terminate = Bool(False)
    flag_output = Bool(False)

    # placeholders for variables saved during model execution
    _saved_output = List()
    _saved_summary_output = List()
    _saved_terminal_output = Dict()

    def __init__(self, parameterprovider, driverdataprovider, agromanagement, config=None):

        BaseEngine.__init__(self)

        # Load the model configuration, models provide a default one
        if config is None:
            config = self.config
        self.mconf = ConfigurationLoader(config)
        self.parameterprovider = parameterprovider

        # Variable kiosk for registering and publishing variables
        self.kiosk = VariableKiosk()

        # Placeholder for variables to be saved during a model run
        self._saved_output = list()
        self._saved_summary_output = list()
        self._saved_terminal_output = dict()

        # Handlers are connected before the components are created, so that
        # summary output is stored before the plant is cleared.
        self._connect_signal(self._on_PLANT_ENDING, signal=signals.plant_ending)
        self._connect_signal(self._on_OUTPUT, signal=signals.output)
        self._connect_signal(self._on_TERMINATE, signal=signals.terminate)

        # Component for agromanagement
        self.agromanager = self.mconf.AGROMANAGEMENT(self.kiosk, agromanagement)
        start_date = self.agromanager.start_date
        end_date = self.agromanager.end_date

        # Timer: starting day, final day and model output
        self.timer = Timer(self.kiosk, start_date, end_date, self.mconf)
        self.day, delt = self.timer()

        # Driving variables
        self.driverdataprovider = driverdataprovider
        self.drv = self._get_driving_variables(self.day)

        # The soil is created first, it publishes the zones explored by the roots
        self.soil = self.mconf.SOIL(self.day, self.kiosk, parameterprovider)
        self.crop = self.mconf.CROP(self.day, self.kiosk, parameterprovider)

        # Call AgroManagement module for management actions at initialization
        self.agromanager(self.day, self.drv)

        # Calculate initial rates
        self.calc_rates(self.day, self.drv)

    def calc_rates(self, day, drv):

        # The plant reports water and N uptake to the soil, so it goes first
        if self.crop is not None:
            self.crop.calc_rates(day, drv)

        if self.soil is not None:
            self.soil.calc_rates(day, drv)

        # Save state variables of the model
        if self.flag_output:
            self._save_output(day)

    def integrate(self, day, delt):

        # Flush state variables from the kiosk before state updates
        self.kiosk.flush_states()

        if self.crop is not None:
            self.crop.integrate(day, delt)

        if self.soil is not None:
            self.soil.integrate(day, delt)

        # Set all rate variables to zero
        if settings.ZEROFY:
            self.zerofy()

        # Flush rate variables from the kiosk after state updates
        self.kiosk.flush_rates()

    def _run(self):
        """Make one time step of the simulation.
        """

        # Update timer
        self.day, delt = self.timer()

        # State integration
        self.integrate(self.day, delt)

        # Driving variables
        self.drv = self._get_driving_variables(self.day)

        # Agromanagement decisions
        self.agromanager(self.day, self.drv)

        # Rate calculation
        self.calc_rates(self.day, self.drv)

        if self.flag_terminate is True:
            self._terminate_simulation(self.day)

    def run(self, days=1):
        """Advances the system state with given number of days"""

        days_done = 0
        while (days_done < days) and (self.flag_terminate is False):
            days_done += 1
            self._run()

    def run_till_terminate(self):
        """Runs the system until a terminate signal is sent."""

        while self.flag_terminate is False:
            self._run()

    def run_till(self, rday):
        """Runs the system until rday is reached."""

        try:
            rday = check_date(rday)
        except KeyError:
            msg = "run_till() function needs a date object as input"
            self.logger.error(msg)
            return

        if rday <= self.day:
            msg = "date argument for run_till() function before current model date."
            self.logger.error(msg)
            return

        while self.flag_terminate is False and self.day < rday:
            self._run()

    def _on_PLANT_ENDING(self, plant_name=None):
        """Stores the summary output when the plant ends, before its roots
        are returned to the soil.
        """
        self.logger.debug("Received signal 'PLANT_ENDING' for %s on day %s" % (plant_name, self.day))
        if self.crop is not None:
            self.crop.finalize(self.day)
        self._save_summary_output()

    def _on_TERMINATE(self):
        """Sets the variable 'flag_terminate' to True when the signal TERMINATE
        was received.
        """
        self.flag_terminate = True

    def _on_OUTPUT(self):
        """Sets the variable 'flag_output to True' when the signal OUTPUT
        was received.
        """
        self.flag_output = True

    def _terminate_simulation(self, day):
        """Terminates the entire simulation.

        First the finalize() call on the soil and plant is executed.
        Next, the TERMINAL_OUTPUT is collected and stored.
        """
        if self.crop is not None:
            self.crop.finalize(day)
        if self.soil is not None:
            self.soil.finalize(day)
        self._save_terminal_output()

    def _get_driving_variables(self, day):
        """Get driving variables for the given day.
        """
        return self.driverdataprovider(day)

    def _get_output_value(self, varname):
        value = self.get_variable(varname)
        if isinstance(value, np.ndarray):
            return value.copy()
        return value

    def _save_output(self, day):
        """Appends selected model variables to self._saved_output for this day.
        """
        # Switch off the flag for generating output
        self.flag_output = False

        states = {"day": day}
        for var in self.mconf.OUTPUT_VARS:
            states[var] = self._get_output_value(var)
        self._saved_output.append(states)

    def _save_summary_output(self):
        """Appends selected model variables to self._saved_summary_output.
        """
        states = {"day": self.day}
        for var in self.mconf.SUMMARY_OUTPUT_VARS:
            states[var] = self._get_output_value(var)
        self._saved_summary_output.append(states)

    def _save_terminal_output(self):
        """Appends selected model variables to self._saved_terminal_output.
        """
        for var in self.mconf.TERMINAL_OUTPUT_VARS:
            self._saved_terminal_output[var] = self._get_output_value(var)

    def get_output(self):
        """Returns the variables have have been stored during the simulation.

        If no output is stored an empty list is returned. Otherwise, the output is
        returned as a list of dictionaries in chronological order. Each dictionary is
        a set of stored model variables for a certain date. """

        return self._saved_output

    def get_summary_output(self):
        """Returns the summary variables have have been stored at the end of each plant.
        """

        return self._saved_summary_output

    def get_terminal_output(self):
        """Returns the terminal output variables have have been stored during the simulation.
        """

        return self._saved_terminal_output
