# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""Implementation of AgroManager and related classes for management of the plant life cycle.

Available classes:

  * TimedEventsDispatcher: A class for handling timed events (e.g. sowing, emergence
    or harvest on a given date)
  * StateEventsDispatcher: A class for handling state events (e.g. events that happen
    when a state variable reaches a certain value)
  * AgroManager: A class for handling all agromanagement events which encapsulates
    the Timed/State events of a sequence of campaigns.
"""
from datetime import date
import logging
from collections import Counter

from .base import DispatcherObject, VariableKiosk, AncillaryObject
from .traitlets import HasTraits, Instance, Enum, List, Unicode
from . import exceptions as exc
from . import signals


def cmp2(x, y):
    """Compare two values and return sign
    """
    return (x > y) - (x < y)


def check_date_range(day, start, end):
    """returns True if start <= day < end

    Optionally, end may be None. in that case return True if start <= day

    :param day: the date that will be checked
    :param start: the start date of the range
    :param end: the end date of the range or None
    :return: True/False
    """

    if end is None:
        return start <= day
    else:
        return start <= day < end


def get_signal(event_signal):
    """Returns the signal with the given name from the signals module."""
    if not hasattr(signals, event_signal):
        msg = "Signal '%s' not defined in pmfroot.signals module."
        raise exc.PMFRootError(msg % event_signal)
    return getattr(signals, event_signal)


class TimedEventsDispatcher(HasTraits, DispatcherObject):
    """Takes care handling events that are connected to a date.

    Events are handled by dispatching a signal (taken from the `signals` module)
    and providing the relevant parameters with the signal. The following section
    (in YAML) provides the definition of two instances of TimedEventsDispatchers::

        TimedEvents:
        -   event_signal: sowing
            name:  Sowing of wheat
            comment: depth in mm, population in plants/m2
            events_table:
            - 2000-10-15: {plant_name: wheat, depth: 30., population: 150.}
        -   event_signal: remove_biomass
            name:  Harvest of wheat
            comment: fractions of the root biomass
            events_table:
            - 2001-07-20: {plant_name: wheat, fraction_to_residue: 0.3, fraction_removed: 0.0}

    Each TimedEventDispatcher is defined by an `event_signal`, an optional name,
    an optional comment and the events_table. The events_table is list which provides
    for each date the parameters that should be dispatched with the given
    event_signal.
    """
    event_signal = None
    events_table = List()
    days_with_events = Instance(Counter)
    kiosk = Instance(VariableKiosk)
    logger = Instance(logging.Logger)
    name = Unicode()
    comment = Unicode()

    def __init__(self, kiosk, event_signal, name=None, comment=None, events_table=None):
        """Initialising a TimedEventDispatcher

        :param kiosk: an instance of the VariableKiosk
        :param event_signal: the signal to be dispatched when the event occurs (from pmfroot.signals)
        :param name: the name of the event dispatcher
        :param comment: A comment that will be used in log message
        :param events_table: The events table, the structure here is a list of dicts, with each dict having only
            one key/value with the key being the date of the event and the value a dict of parameter values
            that should be dispatched with the signal.
        """
        HasTraits.__init__(self)

        loggername = "%s.%s" % (self.__class__.__module__,
                                self.__class__.__name__)
        self.logger = logging.getLogger(loggername)

        self.kiosk = kiosk
        self.events_table = events_table if events_table is not None else []
        self.name = name
        self.comment = comment
        self.event_signal = get_signal(event_signal)

        # Build a counter for the days with events.
        self.days_with_events = Counter()
        for ev in self.events_table:
            self.days_with_events.update(ev.keys())

        # Two or more events on the same day under the same signal are not allowed.
        multi_days = [day for day, count in self.days_with_events.items() if count > 1]
        if multi_days:
            msg = "Found days with more than 1 event for events table '%s' on days: %s"
            raise exc.PMFRootError(msg % (self.name, multi_days))

    def validate(self, campaign_start_date, next_campaign_start_date):
        """Validates the timed events given the campaign window

        :param campaign_start_date: Start date of the campaign
        :param next_campaign_start_date: Start date of the next campaign, can be None
        """
        for event in self.events_table:
            day = next(iter(event))
            r = check_date_range(day, campaign_start_date, next_campaign_start_date)
            if r is not True:
                msg = "Timed event at day %s not in campaign interval (%s - %s)" %\
                      (day, campaign_start_date, next_campaign_start_date)
                raise exc.PMFRootError(msg)

    def __call__(self, day):
        """Runs the TimedEventDispatcher to determine if any actions are needed.

        :param day: a date object for the current simulation day
        :return: None
        """
        if day not in self.days_with_events:
            return

        for event in self.events_table:
            if day in event:
                msg = "Time event dispatched from '%s' at day %s" % (self.name, day)
                self.logger.info(msg)
                kwargs = event[day]
                self._send_signal(signal=self.event_signal, **kwargs)

    def get_end_date(self):
        """Returns the last date for which a timed event is given
        """
        return max(self.days_with_events)


class StateEventsDispatcher(HasTraits, DispatcherObject):
    """Takes care handling events that are connected to a model state variable.

    Events are handled by dispatching a signal (taken from the `signals` module)
    and providing the relevant parameters with the signal. For example, the
    plant can be ended when the root weight reaches a given value::

        StateEvents:
        -   event_signal: plant_ending
            event_state: WRT
            zero_condition: rising
            name: End of plant at maximum root weight
            comment: root weight in g/m2
            events_table:
            - 120.: {plant_name: wheat}

    An event is triggered when (`model_state` - `event_state`) equals or
    crosses zero. The `zero_condition` defines how this crossing should take
    place:

    * `rising`: from a negative value towards zero or a positive value.
    * `falling`: from a positive value towards zero or a negative value.
    * `either`: crossing or reaching zero from any direction.
    """
    event_signal = None
    event_state = Unicode()
    zero_condition = Enum(['rising', 'falling', 'either'])
    events_table = List()
    kiosk = Instance(VariableKiosk)
    logger = Instance(logging.Logger)
    name = Unicode()
    comment = Unicode()
    previous_signs = List()

    def __init__(self, kiosk, event_signal, event_state, zero_condition, name=None,
                 comment=None, events_table=None):
        """Initialising a StateEventDispatcher

        :param kiosk: an instance of the VariableKiosk
        :param event_signal: the signal to be dispatched when the event occurs (from pmfroot.signals)
        :param event_state: the name of the state variable that should trigger the event
        :param zero_condition: the zero_condition, one of 'rising'|'falling'|'either'
        :param name: the name of the event dispatcher
        :param comment: A comment that will be used in log message
        :param events_table: The events table, a list of dicts, with each dict having only
               one key/value with the key being the value of the state that should trigger the event and the
               value a dict of parameter values that should be dispatched with the signal.
        """
        HasTraits.__init__(self)

        loggername = "%s.%s" % (self.__class__.__module__,
                                self.__class__.__name__)
        self.logger = logging.getLogger(loggername)

        self.kiosk = kiosk
        self.events_table = events_table if events_table is not None else []
        self.zero_condition = zero_condition
        self.event_state = event_state
        self.name = name
        self.comment = comment
        self.event_signal = get_signal(event_signal)

        # None signals that the signs have not yet been evaluated
        self.previous_signs = [None]*len(self.events_table)

        states_with_events = Counter()
        for ev in self.events_table:
            states_with_events.update(ev.keys())
        multi_states = [state for state, count in states_with_events.items() if count > 1]
        if multi_states:
            msg = "Found states with more than 1 event for events table '%s' for state: %s"
            raise exc.PMFRootError(msg % (self.name, multi_states))

    def __call__(self, day):
        """Runs the StateEventDispatcher to determine if any actions are needed.

        :param day: a date object for the current simulation day
        :return: None
        """
        if self.event_state not in self.kiosk:
            msg = "State variable '%s' not (yet) available in kiosk!" % self.event_state
            self.logger.warning(msg)
            return

        current_state = self.kiosk[self.event_state]
        zero_condition_signs = []
        for event, zero_condition_sign in zip(self.events_table, self.previous_signs):
            state, keywords = next(iter(event.items()))
            zcs = self._evaluate_state(current_state, state, keywords, zero_condition_sign)
            zero_condition_signs.append(zcs)
        self.previous_signs = zero_condition_signs

    def _is_triggered(self, previous_sign, sign):
        if previous_sign is None:
            return False
        rising = previous_sign == -1 and sign in [0, 1]
        falling = previous_sign == 1 and sign in [-1, 0]
        if self.zero_condition == "rising":
            return rising
        elif self.zero_condition == "falling":
            return falling
        return rising or falling

    def _evaluate_state(self, current_state, state, keywords, zero_condition_sign):
        sign = cmp2(current_state - state, 0)
        if self._is_triggered(zero_condition_sign, sign):
            msg = "State event dispatched from '%s' at model state %s" % (self.name, current_state)
            self.logger.info(msg)
            self._send_signal(signal=self.event_signal, **keywords)
        return sign


class AgroManager(AncillaryObject):
    """Class for the management of the plant life cycle as a sequence of campaigns.

    The agromanagement is implemented as a sequence of campaigns. Campaigns
    start on a prescribed calendar date and finalize when the next campaign
    starts. Each campaign holds zero or more timed events and zero or more
    state events. A campaign without events represents a period of bare soil.

    An example of an agromanagement definition (in YAML)::

        AgroManagement:
        - 2000-10-01:
            TimedEvents:
            -   event_signal: sowing
                name: Sowing
                comment: depth in mm
                events_table:
                - 2000-10-15: {plant_name: wheat, depth: 30., population: 150.}
            -   event_signal: crop_emerged
                name: Emergence
                comment:
                events_table:
                - 2000-10-25: {plant_name: wheat}
            -   event_signal: plant_ending
                name: End of the plant
                comment:
                events_table:
                - 2001-08-01: {plant_name: wheat}
            StateEvents:
        - 2001-09-01:

    The end date of the simulation is given by a trailing empty campaign
    (2001-09-01 in the example). Without a trailing campaign the last timed
    event determines the end date, which is not possible when the last
    campaign holds state events.

    **Signals send or handled**

    `AgroManager` sends the signals from the events tables, and TERMINATE after
    PLANT_ENDING when no further events are scheduled.
    """

    # campaign start dates
    campaign_start_dates = List()

    # Overall engine start date and end date
    _start_date = Instance(date)
    _end_date = Instance(date)

    # campaign definitions
    timed_event_dispatchers = List()
    state_event_dispatchers = List()

    _tmp_date = None  # Helper variable
    _icampaign = 0  # count the campaigns
    _current_day = None

    def initialize(self, kiosk, agromanagement):
        """Initialize the AgroManager.

        :param kiosk: A PMFRoot variable Kiosk
        :param agromanagement: the agromanagement definition, see the example above in YAML.
        """

        self.kiosk = kiosk
        self.timed_event_dispatchers = []
        self.state_event_dispatchers = []
        self.campaign_start_dates = []

        self._connect_signal(self._on_PLANT_ENDING, signals.plant_ending)

        if not agromanagement:
            msg = "Empty agromanagement definition: no campaigns provided!"
            raise exc.PMFRootError(msg)

        # First get and validate the dates of the different campaigns
        for campaign in agromanagement:
            campaign_start_date = next(iter(campaign))
            self._check_campaign_date(campaign_start_date)
            self.campaign_start_dates.append(campaign_start_date)

        # None signals the end of the sequence of campaigns
        self.campaign_start_dates.append(None)

        for campaign, campaign_start, next_campaign in \
                zip(agromanagement, self.campaign_start_dates[:-1], self.campaign_start_dates[1:]):

            campaign_def = campaign[campaign_start]

            if self._is_empty_campaign(campaign_def):  # e.g. bare soil
                self.timed_event_dispatchers.append(None)
                self.state_event_dispatchers.append(None)
                continue

            te_def = campaign_def.get('TimedEvents')
            if te_def is not None:
                te_dsp = self._build_TimedEventDispatchers(kiosk, te_def)
                for te in te_dsp:
                    te.validate(campaign_start, next_campaign)
                self.timed_event_dispatchers.append(te_dsp)
            else:
                self.timed_event_dispatchers.append(None)

            se_def = campaign_def.get('StateEvents')
            if se_def is not None:
                se_dsp = self._build_StateEventDispatchers(kiosk, se_def)
                self.state_event_dispatchers.append(se_dsp)
            else:
                self.state_event_dispatchers.append(None)

    def _is_empty_campaign(self, campaign_def):
        """"Check if the campaign definition is empty"""

        if campaign_def is None:
            return True

        for attr in ["TimedEvents", "StateEvents"]:
            if campaign_def.get(attr) is not None:
                return False
        return True

    @property
    def start_date(self):
        """Retrieves the start date of the agromanagement sequence, e.g. the first simulation date

        :return: a date object
        """
        if self._start_date is None:
            self._start_date = self.campaign_start_dates[0]

        return self._start_date

    @property
    def end_date(self):
        """Retrieves the end date of the agromanagement sequence, e.g. the last simulation date.

        :return: a date object

        The end date is the start date of a trailing empty campaign or, without
        a trailing campaign, the date of the last timed event.
        """
        if self._end_date is None:

            if self.timed_event_dispatchers[-1] is None and \
               self.state_event_dispatchers[-1] is None:
                # use -2 here because None is appended to campaign_start_dates
                self._end_date = self.campaign_start_dates[-2]
                return self._end_date

            if self.state_event_dispatchers[-1] is not None:
                msg = "In the AgroManagement definition, the last campaign with start date '%s' contains " \
                      "StateEvents. When specifying StateEvents, the end date of the campaign must be " \
                      "explicitly given by a trailing empty campaign." % self.campaign_start_dates[-2]
                raise exc.PMFRootError(msg)

            te_dates = []
            for teds in self.timed_event_dispatchers:
                if teds is not None:
                    te_dates.extend([t.get_end_date() for t in teds if t.days_with_events])

            if not te_dates:
                msg = "Empty agromanagement definition: no campaigns with timed events provided!"
                raise exc.PMFRootError(msg)
            self._end_date = max(te_dates)

        return self._end_date

    def _check_campaign_date(self, campaign_start_date):
        """
        :param campaign_start_date: Start date of the agricultural campaign
        :return: None
        """
        if not isinstance(campaign_start_date, date):
            msg = "Campaign start must be given as a date."
            raise exc.PMFRootError(msg)

        if self._tmp_date is None:
            self._tmp_date = campaign_start_date
        else:
            if campaign_start_date <= self._tmp_date:
                msg = "The agricultural campaigns are not sequential " \
                      "in the agromanagement definition."
                raise exc.PMFRootError(msg)
            self._tmp_date = campaign_start_date

    def _build_TimedEventDispatchers(self, kiosk, event_definitions):
        return [TimedEventsDispatcher(kiosk, **ev_def) for ev_def in event_definitions]

    def _build_StateEventDispatchers(self, kiosk, event_definitions):
        return [StateEventsDispatcher(kiosk, **ev_def) for ev_def in event_definitions]

    def __call__(self, day, drv):
        """Calls the AgroManager to execute timed or state events.

        :param day: The current simulation date
        :param drv: The driving variables for the current day
        :return: None
        """

        self._current_day = day

        # Switch to the next campaign and throw out the previous campaign definition
        if day == self.campaign_start_dates[self._icampaign+1]:
            self._icampaign += 1
            self.timed_event_dispatchers.pop(0)
            self.state_event_dispatchers.pop(0)

        if self.timed_event_dispatchers[0] is not None:
            for ev_dsp in self.timed_event_dispatchers[0]:
                ev_dsp(day)

        if self.state_event_dispatchers[0] is not None:
            for ev_dsp in self.state_event_dispatchers[0]:
                ev_dsp(day)

    def _on_PLANT_ENDING(self, plant_name=None):
        """Send signal to terminate after the plant ends.

        The simulation will be terminated when the following conditions are met:
        1. There are no campaigns defined after the current campaign
        2. There are no StateEvents active
        3. There are no TimedEvents scheduled after the current date.
        """
        if self.campaign_start_dates[self._icampaign+1] is not None:
            return

        if self.state_event_dispatchers[0] is not None:
            return

        if self.timed_event_dispatchers[0] is not None:
            end_dates = [t.get_end_date() for t in self.timed_event_dispatchers[0] if t.days_with_events]
            if end_dates and max(end_dates) > self._current_day:
                return
        self._send_signal(signal=signals.terminate)
