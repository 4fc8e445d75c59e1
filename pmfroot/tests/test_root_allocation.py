# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
import unittest
from datetime import timedelta

import numpy as np
from pydispatch import dispatcher

from .. import signals
from ..base import VariableKiosk
from ..crop.biomass import BiomassPoolType, BiomassAllocationType
from ..crop.plant import Plant
from ..soil.soil_water_n import SoilWaterN
from ..exceptions import MissingUptakeError, AllocationError, ArbitrationOrderError
from .helpers import make_root, make_drivers, make_parameterprovider, start_day, two_layer_soil
from .test_root_growth import run_days


class TestAllocationPreconditions(unittest.TestCase):

    def test_potential_allocation_without_uptake(self):
        kiosk, soil, root = make_root()
        self.assertRaises(MissingUptakeError, root.set_dm_potential_allocation,
                          BiomassPoolType(structural=0.))

    def test_allocation_without_uptake(self):
        kiosk, soil, root = make_root()
        root._on_SOWING(plant_name="wheat", depth=30., population=150.)
        self.assertRaises(MissingUptakeError, root.set_dm_allocation,
                          BiomassAllocationType(structural=1.))

    def test_allocation_before_sowing(self):
        kiosk, soil, root = make_root()
        root.set_dm_allocation(BiomassAllocationType(structural=0.))
        self.assertEqual(root.rates.DMAllocated.sum(), 0.)

    def test_positive_allocation_before_sowing(self):
        kiosk, soil, root = make_root()
        root.do_water_uptake([0.])
        self.assertRaises(AllocationError, root.set_dm_allocation, BiomassAllocationType(structural=1.0))
        self.assertEqual(root.rates.TotalDMAllocated, 0.)
        self.assertEqual(root.rates.DMAllocated.sum(), 0.)
        self.assertEqual(root.states.WRT, 0.)

    def test_potential_allocation_without_demand(self):
        kiosk, soil, root = make_root()
        root._on_SOWING(plant_name="wheat", depth=30., population=150.)
        root.do_water_uptake(root.water_supply())
        # root front has not advanced below the sowing depth yet
        demand = root.dm_demand(5.0)
        self.assertEqual(demand.structural, 0.)
        self.assertRaises(AllocationError, root.set_dm_potential_allocation,
                          BiomassPoolType(structural=1.0))

    def test_allocation_without_demand(self):
        kiosk, soil, root = make_root()
        root._on_SOWING(plant_name="wheat", depth=30., population=150.)
        root.do_water_uptake(root.water_supply())
        self.assertEqual(root.dm_demand(5.0).structural, 0.)
        self.assertRaises(AllocationError, root.set_dm_allocation, BiomassAllocationType(structural=1.0))
        self.assertAlmostEqual(root.states.WRT, 0.75)
        self.assertEqual(root.rates.DMAllocated.sum(), 0.)

    def test_no_partition_fraction(self):
        kiosk, soil, root = make_root(PartitionFraction=None)
        root._on_SOWING(plant_name="wheat", depth=30., population=150.)
        run_days(root, 1)
        self.assertEqual(root.dm_demand(5.0).structural, 0.)


class TestAllocationOverLayers(unittest.TestCase):

    def setUp(self):
        self.kiosk, self.soil, self.root = make_root(two_layer_soil, RootFrontVelocity=40.)
        root = self.root
        root._on_SOWING(plant_name="wheat", depth=30., population=150.)
        # the front moves into the second layer, which has no biomass yet
        run_days(root, 2)
        root.calc_rates(start_day, make_drivers())
        root.do_water_uptake(root.water_supply())
        demand = root.dm_demand(5.0)
        root.set_dm_potential_allocation(BiomassPoolType(structural=demand.structural))

    def test_dm_allocation(self):
        r = self.root.rates
        self.root.n_demand()
        self.root.set_dm_allocation(BiomassAllocationType(structural=1.5))
        self.assertAlmostEqual(r.DMAllocated.sum(), 1.5, 9)
        # empty layer above the front takes the activity of the layer above
        self.assertAlmostEqual(r.DMAllocated[0], r.DMAllocated[1])
        self.assertAlmostEqual(self.root.states.WRT, 0.75 + 1.5)
        self.assertEqual(self.root.phase, "final_allocated")

    def test_root_activity(self):
        r = self.root.rates
        # uptake per unit of biomass times the thickness of the fully rooted top layer
        expected = r.WaterSupply[0] / 0.75 * 100.
        self.assertGreater(expected, 0.)
        np.testing.assert_allclose(r.WaterActivity, [expected, expected])
        np.testing.assert_allclose(r.NActivity, r.WaterActivity)

    def test_root_activity_floor(self):
        root = self.root
        root.do_water_uptake([0., 0.])
        root.set_dm_potential_allocation(BiomassPoolType(structural=0.))
        np.testing.assert_allclose(root.rates.WaterActivity, [1e-20, 1e-20])
        # the N activity is floored from the water activity
        np.testing.assert_allclose(root.rates.NActivity, [1e-10, 1e-10])

    def test_phase_sequence(self):
        root = self.root
        self.assertEqual(root.phase, "potential_allocated")
        root.n_demand()
        root.no3_supply()
        self.assertEqual(root.phase, "supply_reported")
        root.set_dm_allocation(BiomassAllocationType(structural=1.5))
        self.assertEqual(root.phase, "final_allocated")

        root.calc_rates(start_day, make_drivers())
        root.water_supply()
        self.assertEqual(root.phase, "dormant")
        root.dm_demand(5.0)
        self.assertEqual(root.phase, "demand_computed")

    def test_potential_allocation(self):
        live = self.root.states.Live
        self.assertAlmostEqual(live.PotentialDMAllocation.sum(), 1.5)
        self.assertAlmostEqual(live.PotentialDMAllocation[1], 0.75)

    def test_n_demand(self):
        d1 = self.root.n_demand()
        d2 = self.root.n_demand()
        self.assertEqual(d1, d2)
        # structural demand from potential DM at the minimum N concentration
        self.assertAlmostEqual(d1.structural, 1.5 * 0.01)
        self.assertAlmostEqual(d1.non_structural, 0.)

    def test_n_allocation(self):
        root = self.root
        root.n_demand()
        root.set_n_allocation(BiomassAllocationType(structural=0.006, uptake=0.006))
        live = root.states.Live
        self.assertAlmostEqual(live.StructuralN[0], 0.75 * 0.02 + 0.003)
        self.assertAlmostEqual(live.StructuralN[1], 0.003)
        self.assertAlmostEqual(root.states.NRT, 0.75 * 0.02 + 0.006)
        self.assertAlmostEqual(root.rates.TotalNAllocated, 0.006)

    def test_n_over_allocation(self):
        self.root.n_demand()
        self.assertRaises(AllocationError, self.root.set_n_allocation,
                          BiomassAllocationType(structural=0.02, uptake=0.02))

    def test_n_allocation_before_demand(self):
        self.root.calc_rates(start_day, make_drivers())
        self.assertRaises(ArbitrationOrderError, self.root.set_n_allocation,
                          BiomassAllocationType(structural=0.001))


class TestPlantArbitration(unittest.TestCase):
    """Runs the plant and the soil store together for a number of days and
    checks the conservation of water, N and dry matter.
    """
    ndays = 30

    def setUp(self):
        self.kiosk = kiosk = VariableKiosk()
        parvalues = make_parameterprovider(two_layer_soil, RootFrontVelocity=10., SenescenceRate=0.01)
        self.soil = SoilWaterN(start_day, kiosk, parvalues)
        self.plant = Plant(start_day, kiosk, parvalues)

    def test_conservation(self):
        plant, soil, kiosk = self.plant, self.soil, self.kiosk
        sw_initial = soil.states.SWTOT
        n_initial = soil.states.NO3TOT + soil.states.NH4TOT

        dispatcher.send(signal=signals.sowing, sender=kiosk, plant_name="wheat", depth=30., population=150.)
        dispatcher.send(signal=signals.crop_emerged, sender=kiosk, plant_name="wheat")
        self.assertTrue(plant.states.PlantAlive)

        day = start_day
        dm_allocated = 0.
        for i in range(self.ndays):
            drv = make_drivers(day, dmsupply=5.0, transpdemand=2.0)
            plant.calc_rates(day, drv)
            soil.calc_rates(day, drv)

            root = plant.root.rates
            self.assertLessEqual(root.TotalDMAllocated, drv.DMSUPPLY)
            self.assertLessEqual(root.TotalNAllocated, root.TotalNDemand + 1e-9)
            self.assertLessEqual(root.WaterUptake, drv.TRANSPDEMAND + 1e-9)
            dm_allocated += root.TotalDMAllocated

            plant.integrate(day, 1.0)
            soil.integrate(day, 1.0)
            plant.zerofy()
            soil.zerofy()
            day += timedelta(days=1)

        self.assertGreater(plant.states.TDMRT, 0.)
        self.assertAlmostEqual(plant.states.TDMRT, dm_allocated)
        self.assertAlmostEqual(soil.states.SWTOT, sw_initial - plant.states.TWUPT)
        self.assertAlmostEqual(soil.states.NO3TOT + soil.states.NH4TOT, n_initial - plant.states.TNUPT)
        self.assertGreater(soil.states.FOMTOT, 0.)
        self.assertAlmostEqual(kiosk["TDMRT"], plant.states.TDMRT)


def suite():
    """ This defines all the tests of a module"""
    suite = unittest.TestSuite()
    loader = unittest.TestLoader()
    suite.addTest(loader.loadTestsFromTestCase(TestAllocationPreconditions))
    suite.addTest(loader.loadTestsFromTestCase(TestAllocationOverLayers))
    suite.addTest(loader.loadTestsFromTestCase(TestPlantArbitration))
    return suite


if __name__ == '__main__':
    unittest.TextTestRunner(verbosity=2).run(suite())
