# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
import unittest
from datetime import date, timedelta

import yaml
from pydispatch import dispatcher

from .. import signals
from ..agromanager import AgroManager
from ..base import VariableKiosk
from ..exceptions import PMFRootError


# Template for agromanagement testing
class TestAgroManagerSimpleTestTemplate(unittest.TestCase):

    agmt_input = None
    start_date = None
    end_date = None

    def runTest(self):
        if self.agmt_input is None:
            self.skipTest("template without agromanagement input")
        d = yaml.safe_load(self.agmt_input)
        kiosk = VariableKiosk()
        amgt = AgroManager(kiosk, d["AgroManagement"])
        self.assertEqual(amgt.start_date, self.start_date)
        self.assertEqual(amgt.end_date, self.end_date)


class TestAgroManager1(TestAgroManagerSimpleTestTemplate):

    agmt_input = """
                AgroManagement:
                - 2000-10-01:
                    TimedEvents:
                    -   event_signal: sowing
                        name: Sowing
                        comment:
                        events_table:
                        - 2000-10-15: {plant_name: wheat, depth: 30., population: 150.}
                    StateEvents:
                - 2001-09-01:
                """
    start_date = date(2000, 10, 1)
    end_date = date(2001, 9, 1)


class TestAgroManager2(TestAgroManagerSimpleTestTemplate):

    agmt_input = """
                AgroManagement:
                - 2000-10-01:
                    TimedEvents:
                    -   event_signal: sowing
                        name: Sowing
                        comment:
                        events_table:
                        - 2000-10-15: {plant_name: wheat, depth: 30., population: 150.}
                    -   event_signal: plant_ending
                        name: End of the plant
                        comment:
                        events_table:
                        - 2001-08-01: {plant_name: wheat}
                    StateEvents:
                """
    start_date = date(2000, 10, 1)
    end_date = date(2001, 8, 1)


class TestAgroManager3(TestAgroManagerSimpleTestTemplate):

    agmt_input = """
                AgroManagement:
                - 2000-10-01:
                    TimedEvents:
                    -   event_signal: sowing
                        name: Sowing
                        comment:
                        events_table:
                        - 2000-10-15: {plant_name: wheat, depth: 30., population: 150.}
                    StateEvents:
                - 2001-09-01:
                    TimedEvents:
                    -   event_signal: sowing
                        name: Sowing
                        comment:
                        events_table:
                        - 2001-10-15: {plant_name: wheat, depth: 30., population: 150.}
                    -   event_signal: plant_ending
                        name: End of the plant
                        comment:
                        events_table:
                        - 2002-07-20: {plant_name: wheat}
                    StateEvents:
                """
    start_date = date(2000, 10, 1)
    end_date = date(2002, 7, 20)


class TestAgroManager4(unittest.TestCase):
    """State events in the last campaign need a trailing empty campaign."""

    agmt_input = """
                AgroManagement:
                - 2000-10-01:
                    TimedEvents:
                    StateEvents:
                    -   event_signal: plant_ending
                        event_state: WRT
                        zero_condition: rising
                        name: End of plant at maximum root weight
                        comment:
                        events_table:
                        - 120.: {plant_name: wheat}
                """

    def runTest(self):
        d = yaml.safe_load(self.agmt_input)
        amgt = AgroManager(VariableKiosk(), d['AgroManagement'])
        self.assertRaises(PMFRootError, getattr, amgt, "end_date")


class TestAgroManager5(unittest.TestCase):
    """Campaigns must be sequential."""

    agmt_input = """
                AgroManagement:
                - 2001-10-01:
                - 2000-10-01:
                """

    def runTest(self):
        d = yaml.safe_load(self.agmt_input)
        self.assertRaises(PMFRootError, AgroManager, VariableKiosk(), d['AgroManagement'])


class TestAgroManager6(unittest.TestCase):
    """Timed events must fall within their campaign."""

    agmt_input = """
                AgroManagement:
                - 2000-10-01:
                    TimedEvents:
                    -   event_signal: sowing
                        name: Sowing
                        comment:
                        events_table:
                        - 2001-10-15: {plant_name: wheat, depth: 30., population: 150.}
                    StateEvents:
                - 2001-09-01:
                """

    def runTest(self):
        d = yaml.safe_load(self.agmt_input)
        self.assertRaises(PMFRootError, AgroManager, VariableKiosk(), d['AgroManagement'])


class TestAgroManager7(unittest.TestCase):
    """Unknown signals are refused."""

    agmt_input = """
                AgroManagement:
                - 2000-10-01:
                    TimedEvents:
                    -   event_signal: fertilize
                        name: Fertilizer
                        comment:
                        events_table:
                        - 2000-10-15: {amount: 30.}
                    StateEvents:
                """

    def runTest(self):
        d = yaml.safe_load(self.agmt_input)
        self.assertRaises(PMFRootError, AgroManager, VariableKiosk(), d['AgroManagement'])


class TestAgroManagerEvents(unittest.TestCase):
    """Checks the dispatching of timed and state events and the TERMINATE
    signal after the plant ends.
    """

    agmt_input = """
                AgroManagement:
                - 2000-10-01:
                    TimedEvents:
                    -   event_signal: sowing
                        name: Sowing
                        comment:
                        events_table:
                        - 2000-10-03: {plant_name: wheat, depth: 30., population: 150.}
                    -   event_signal: plant_ending
                        name: End of the plant
                        comment:
                        events_table:
                        - 2000-10-10: {plant_name: wheat}
                    StateEvents:
                """

    def setUp(self):
        self.received = []
        self.kiosk = VariableKiosk()
        d = yaml.safe_load(self.agmt_input)
        self.amgt = AgroManager(self.kiosk, d['AgroManagement'])
        dispatcher.connect(self._on_SOWING, signals.sowing, sender=self.kiosk)
        dispatcher.connect(self._on_TERMINATE, signals.terminate, sender=self.kiosk)

    def _on_SOWING(self, plant_name=None, depth=None, population=None):
        self.received.append(("sowing", plant_name, depth, population))

    def _on_TERMINATE(self):
        self.received.append(("terminate",))

    def runTest(self):
        day = date(2000, 10, 1)
        while day <= date(2000, 10, 10):
            self.amgt(day, None)
            if day == date(2000, 10, 3):
                self.assertEqual(self.received, [("sowing", "wheat", 30., 150.)])
            day += timedelta(days=1)
        self.assertEqual(self.received[-1], ("terminate",))


class TestStateEvents(unittest.TestCase):

    agmt_input = """
                AgroManagement:
                - 2000-10-01:
                    TimedEvents:
                    StateEvents:
                    -   event_signal: plant_ending
                        event_state: WRT
                        zero_condition: rising
                        name: End of plant at maximum root weight
                        comment:
                        events_table:
                        - 2.0: {plant_name: wheat}
                - 2001-09-01:
                """

    def setUp(self):
        self.ended = []
        self.kiosk = VariableKiosk()
        self.kiosk.register_variable(1, "WRT", type="S", publish=True)
        d = yaml.safe_load(self.agmt_input)
        self.amgt = AgroManager(self.kiosk, d['AgroManagement'])
        dispatcher.connect(self._on_PLANT_ENDING, signals.plant_ending, sender=self.kiosk)

    def _on_PLANT_ENDING(self, plant_name=None):
        self.ended.append(plant_name)

    def runTest(self):
        day = date(2000, 10, 1)
        for wrt in [0.5, 1.0, 1.5, 2.5, 3.0]:
            self.kiosk.set_variable(1, "WRT", wrt)
            self.amgt(day, None)
            day += timedelta(days=1)
        self.assertEqual(self.ended, ["wheat"])


def suite():
    """ This defines all the tests of a module"""
    suite = unittest.TestSuite()
    loader = unittest.TestLoader()
    for testcase in [TestAgroManager1, TestAgroManager2, TestAgroManager3, TestAgroManager4,
                     TestAgroManager5, TestAgroManager6, TestAgroManager7, TestAgroManagerEvents,
                     TestStateEvents]:
        suite.addTest(loader.loadTestsFromTestCase(testcase))
    return suite


if __name__ == '__main__':
    unittest.TextTestRunner(verbosity=2).run(suite())
