# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
import unittest

import numpy as np
from pydispatch import dispatcher

from .. import signals
from ..base import VariableKiosk
from ..crop.root import Root
from ..soil.soil_water_n import SoilWaterN
from ..soil.soil_profile import SoilProfile
from ..crop.biomass import BiomassPoolType, BiomassAllocationType
from ..exceptions import RemovalFractionError, ZoneError, ParameterError, MissingUptakeError
from .helpers import make_root, make_parameterprovider, make_drivers, start_day, two_layer_soil
from .test_root_growth import run_days


class TestSowing(unittest.TestCase):

    def test_seeding_two_layers(self):
        kiosk, soil, root = make_root(two_layer_soil)
        dispatcher.send(signal=signals.sowing, sender=kiosk, plant_name="wheat", depth=150., population=150.)
        live = root.states.Live
        np.testing.assert_allclose(live.StructuralWt, [0.375, 0.375])
        np.testing.assert_allclose(live.StructuralN, [0.375 * 0.02, 0.375 * 0.02])
        self.assertAlmostEqual(root.states.RD, 150.)
        self.assertAlmostEqual(root.states.WRT, 0.75)
        self.assertAlmostEqual(kiosk["WRT"], 0.75)
        self.assertTrue(root.is_alive)
        self.assertFalse(root.is_emerged)

    def test_seeding_top_layer(self):
        kiosk, soil, root = make_root(two_layer_soil)
        dispatcher.send(signal=signals.sowing, sender=kiosk, plant_name="wheat", depth=30., population=150.)
        np.testing.assert_allclose(root.states.Live.StructuralWt, [0.75, 0.])

    def test_other_plant(self):
        kiosk, soil, root = make_root()
        dispatcher.send(signal=signals.sowing, sender=kiosk, plant_name="barley", depth=30., population=150.)
        self.assertFalse(root.is_alive)
        self.assertEqual(root.states.RD, 0.)

    def test_resowing_after_plant_ending(self):
        kiosk, soil, root = make_root()
        dispatcher.send(signal=signals.sowing, sender=kiosk, plant_name="wheat", depth=30., population=150.)
        dispatcher.send(signal=signals.plant_ending, sender=kiosk, plant_name="wheat")
        dispatcher.send(signal=signals.sowing, sender=kiosk, plant_name="wheat", depth=40., population=100.)
        self.assertAlmostEqual(root.states.RD, 40.)
        self.assertAlmostEqual(root.states.WRT, 0.5)

    def test_resowing_after_removal(self):
        kiosk, soil, root = make_root(two_layer_soil, RootFrontVelocity=40.)
        dispatcher.send(signal=signals.sowing, sender=kiosk, plant_name="wheat", depth=30., population=150.)
        # grow into the second layer and allocate to both layers
        run_days(root, 2)
        root.calc_rates(start_day, make_drivers())
        root.do_water_uptake(root.water_supply())
        demand = root.dm_demand(5.0)
        root.set_dm_potential_allocation(BiomassPoolType(structural=demand.structural))
        root.set_dm_allocation(BiomassAllocationType(structural=demand.structural))
        self.assertGreater(root.states.Live.StructuralWt[1], 0.)
        dispatcher.send(signal=signals.remove_biomass, sender=kiosk, plant_name="wheat",
                        fraction_to_residue=0.25, fraction_removed=0.25)

        dispatcher.send(signal=signals.sowing, sender=kiosk, plant_name="wheat", depth=30., population=150.)
        live = root.states.Live
        np.testing.assert_allclose(live.StructuralWt, [0.75, 0.])
        np.testing.assert_allclose(live.NonStructuralWt, [0., 0.])
        np.testing.assert_allclose(live.StructuralN, [0.75 * 0.02, 0.])
        self.assertAlmostEqual(root.states.WRT, 0.75)
        self.assertEqual(root.states.DWRT, 0.)
        self.assertAlmostEqual(root.states.RD, 30.)
        # uptake of the previous season is forgotten
        self.assertRaises(MissingUptakeError, root.set_dm_allocation, BiomassAllocationType(structural=1.))


class TestRemoveBiomass(unittest.TestCase):

    def setUp(self):
        self.kiosk, self.soil, self.root = make_root()
        dispatcher.send(signal=signals.sowing, sender=self.kiosk, plant_name="wheat", depth=150., population=150.)

    def _remove(self, to_residue, removed):
        dispatcher.send(signal=signals.remove_biomass, sender=self.kiosk, plant_name="wheat",
                        fraction_to_residue=to_residue, fraction_removed=removed)

    def test_fractions_too_large(self):
        self.assertRaises(RemovalFractionError, self._remove, 0.6, 0.5)
        self.assertAlmostEqual(self.root.states.WRT, 0.75)

    def test_removal(self):
        self._remove(0.2, 0.1)
        self.assertAlmostEqual(self.root.states.WRT, 0.75 * 0.7)
        self.assertAlmostEqual(self.root.states.NRT, 0.015 * 0.7)
        # the residue fraction goes to the soil as FOM (kg/ha)
        self.assertAlmostEqual(self.soil.rates.FOMIn.sum(), 0.75 * 0.2 * 10.)
        self.assertAlmostEqual(self.soil.rates.FOMNIn.sum(), 0.015 * 0.2 * 10.)
        self.soil.integrate(start_day, 1.0)
        self.assertAlmostEqual(self.soil.states.FOMTOT, 1.5)

    def test_nothing_removed(self):
        self._remove(0., 0.)
        self.assertAlmostEqual(self.root.states.WRT, 0.75)
        self.assertEqual(self.soil.rates.FOMIn.sum(), 0.)

    def test_root_keeps_depth(self):
        self._remove(0.5, 0.5)
        self.assertAlmostEqual(self.root.states.WRT, 0.)
        self.assertAlmostEqual(self.root.states.RD, 150.)


class TestPlantEnding(unittest.TestCase):

    def test_clear(self):
        kiosk, soil, root = make_root(two_layer_soil)
        dispatcher.send(signal=signals.sowing, sender=kiosk, plant_name="wheat", depth=150., population=150.)
        dispatcher.send(signal=signals.crop_emerged, sender=kiosk, plant_name="wheat")
        dispatcher.send(signal=signals.plant_ending, sender=kiosk, plant_name="wheat")

        self.assertEqual(root.phase, "cleared")
        self.assertFalse(root.is_alive)
        self.assertFalse(root.is_emerged)
        self.assertEqual(root.states.RD, 0.)
        self.assertEqual(root.states.WRT, 0.)
        self.assertEqual(root.states.NRT, 0.)
        np.testing.assert_allclose(soil.rates.FOMIn, [3.75, 3.75])
        np.testing.assert_allclose(soil.rates.FOMNIn, [0.075, 0.075])
        np.testing.assert_allclose(soil.rates.FOMCIn, [1.5, 1.5])

    def test_no_growth_after_ending(self):
        kiosk, soil, root = make_root()
        dispatcher.send(signal=signals.sowing, sender=kiosk, plant_name="wheat", depth=30., population=150.)
        dispatcher.send(signal=signals.plant_ending, sender=kiosk, plant_name="wheat")
        run_days(root, 3)
        self.assertEqual(root.states.RD, 0.)
        self.assertEqual(root.rates.RR, 0.)


class TestRootInitialisation(unittest.TestCase):

    def test_missing_zones(self):
        kiosk = VariableKiosk()
        parvalues = make_parameterprovider()
        profile = SoilProfile(parvalues)
        self.assertRaises(ZoneError, Root, start_day, kiosk, parvalues, profile)

    def test_wrong_zone(self):
        kiosk = VariableKiosk()
        parvalues = make_parameterprovider()
        soil = SoilWaterN(start_day, kiosk, parvalues)
        parvalues.set_override("ZoneName", "orchard")
        self.assertRaises(ZoneError, Root, start_day, kiosk, parvalues, soil.soil_profile)

    def test_required_functions(self):
        self.assertRaises(ParameterError, make_root, RootFrontVelocity=None)
        self.assertRaises(ParameterError, make_root, MaxDailyNUptake=None)


def suite():
    """ This defines all the tests of a module"""
    suite = unittest.TestSuite()
    loader = unittest.TestLoader()
    suite.addTest(loader.loadTestsFromTestCase(TestSowing))
    suite.addTest(loader.loadTestsFromTestCase(TestRemoveBiomass))
    suite.addTest(loader.loadTestsFromTestCase(TestPlantEnding))
    suite.addTest(loader.loadTestsFromTestCase(TestRootInitialisation))
    return suite


if __name__ == '__main__':
    unittest.TextTestRunner(verbosity=2).run(suite())
