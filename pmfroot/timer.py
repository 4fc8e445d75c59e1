# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
import datetime

from .base import AncillaryObject
from .traitlets import Instance, Bool, Int, Enum
from . import signals
from .util import is_a_dekad, is_a_month, is_a_week


class Timer(AncillaryObject):
    """This class implements a basic timer for use with the root model.

    This object implements a simple timer that increments the current time with
    a fixed time-step of one day at each call and returns its value. Moreover,
    it generates OUTPUT signals in daily, weekly, dekadal or monthly time-steps
    that can be caught in order to store the state of the simulation for later use.

    Initializing the timer::

        timer = Timer(kiosk, start_date, end_date, mconf)
        current_date, delt = timer()

    **Signals sent or handled:**

        * "OUTPUT": sent when the condition for generating output is True
          which depends on the output type and interval.
        * "TERMINATE": sent when the end date is reached.
    """

    start_date = Instance(datetime.date)
    end_date = Instance(datetime.date)
    current_date = Instance(datetime.date)
    time_step = Instance(datetime.timedelta)
    interval_type = Enum(["daily", "weekly", "dekadal", "monthly"])
    output_weekday = Int()
    interval_days = Int()
    generate_output = Bool(False)
    day_counter = Int(0)
    first_call = Bool(True)

    def initialize(self, kiosk, start_date, end_date, mconf):
        """
        :param kiosk: Variable kiosk of the PMFRoot instance
        :param start_date: Start date of the simulation
        :param end_date: Final date of the simulation, as given by the agromanagement.
        :param mconf: A ConfigurationLoader object, the timer needs access to the
            configuration attributes mconf.OUTPUT_INTERVAL, mconf.OUTPUT_VARS,
            mconf.OUTPUT_WEEKDAY and mconf.OUTPUT_INTERVAL_DAYS
        """

        self.kiosk = kiosk
        self.start_date = start_date
        self.end_date = end_date
        self.current_date = start_date
        # No OUTPUT signals are generated when no OUTPUT_VARS are listed
        self.generate_output = bool(mconf.OUTPUT_VARS)
        self.interval_type = mconf.OUTPUT_INTERVAL.lower()
        self.output_weekday = mconf.OUTPUT_WEEKDAY
        self.interval_days = mconf.OUTPUT_INTERVAL_DAYS
        self.time_step = datetime.timedelta(days=1)

    def __call__(self):

        # On first call only return the current date, do not increase time
        if self.first_call is True:
            self.first_call = False
            self.logger.debug("Model time at first call: %s" % self.current_date)
        else:
            self.current_date += self.time_step
            self.day_counter += 1
            self.logger.debug("Model time updated to: %s" % self.current_date)

        output = False
        if self.generate_output:
            if self.interval_type == "daily":
                output = (self.day_counter % self.interval_days) == 0
            elif self.interval_type == "weekly":
                output = is_a_week(self.current_date, self.output_weekday)
            elif self.interval_type == "dekadal":
                output = is_a_dekad(self.current_date)
            elif self.interval_type == "monthly":
                output = is_a_month(self.current_date)

        if output:
            self._send_signal(signal=signals.output)

        if self.current_date >= self.end_date:
            msg = "Reached end of simulation period as specified by the agromanagement."
            self.logger.info(msg)
            self._send_signal(signal=signals.terminate)

        return self.current_date, float(self.time_step.days)
