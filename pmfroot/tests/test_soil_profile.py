# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
import copy
import unittest

import numpy as np

from ..soil.soil_profile import SoilProfile
from ..soil.zone import ZoneWaterAndN, find_zone
from ..exceptions import SoilProfileError, SoilCropParameterError, ParameterError, ZoneError
from .helpers import two_layer_soil


class TestSoilProfileGeometry(unittest.TestCase):

    def setUp(self):
        self.profile = SoilProfile({"SoilProfileDescription": two_layer_soil})

    def test_arrays(self):
        p = self.profile
        self.assertEqual(p.nlayers, 2)
        self.assertAlmostEqual(p.total_depth, 300.)
        np.testing.assert_allclose(p.depth_bottom, [100., 300.])
        np.testing.assert_allclose(p.ll15mm, [12., 28.])
        np.testing.assert_allclose(p.dulmm, [32., 68.])

    def test_layer_index(self):
        p = self.profile
        self.assertEqual(p.layer_index(0.), 0)
        self.assertEqual(p.layer_index(50.), 0)
        # a depth on a layer boundary belongs to the layer above
        self.assertEqual(p.layer_index(100.), 0)
        self.assertEqual(p.layer_index(100.1), 1)
        self.assertEqual(p.layer_index(300.), 1)
        self.assertRaises(SoilProfileError, p.layer_index, 300.5)

    def test_root_proportion(self):
        p = self.profile
        self.assertAlmostEqual(p.root_proportion(0, 50.), 0.5)
        self.assertAlmostEqual(p.root_proportion(1, 50.), 0.)
        self.assertAlmostEqual(p.root_proportion(0, 300.), 1.)
        self.assertAlmostEqual(p.root_proportion(1, 200.), 0.5)
        np.testing.assert_allclose(p.root_proportions(200.), [1., 0.5])

    def test_layers_above(self):
        p = self.profile
        self.assertEqual(p.layers_above(0.), 0)
        self.assertEqual(p.layers_above(30.), 1)
        self.assertEqual(p.layers_above(100.), 1)
        self.assertEqual(p.layers_above(150.), 2)

    def test_max_penetrable_depth(self):
        desc = copy.deepcopy(two_layer_soil)
        desc["SoilCrops"]["wheat"]["XF"] = [1.0, 0.0]
        p = SoilProfile({"SoilProfileDescription": desc})
        self.assertAlmostEqual(p.max_penetrable_depth(p.crop("wheat")), 100.)
        self.assertAlmostEqual(self.profile.max_penetrable_depth(self.profile.crop("wheat")), 300.)

    def test_check_layered(self):
        self.assertRaises(SoilProfileError, self.profile.check_layered, "uptake", [1., 2., 3.])
        np.testing.assert_allclose(self.profile.check_layered("uptake", [1., 2.]), [1., 2.])


class TestSoilProfileValidation(unittest.TestCase):

    def _profile(self, desc):
        return SoilProfile({"SoilProfileDescription": desc})

    def test_missing_description(self):
        self.assertRaises(ParameterError, SoilProfile, {})

    def test_missing_soil_crop(self):
        p = self._profile(two_layer_soil)
        self.assertRaises(SoilCropParameterError, p.crop, "barley")

    def test_soil_crop_length(self):
        desc = copy.deepcopy(two_layer_soil)
        desc["SoilCrops"]["wheat"]["KL"] = [0.08]
        self.assertRaises(SoilProfileError, self._profile, desc)

    def test_xf_range(self):
        desc = copy.deepcopy(two_layer_soil)
        desc["SoilCrops"]["wheat"]["XF"] = [1.0, 1.5]
        self.assertRaises(SoilProfileError, self._profile, desc)

    def test_layer_limits(self):
        desc = copy.deepcopy(two_layer_soil)
        desc["SoilLayers"][0]["LL15"] = 0.40
        self.assertRaises(SoilProfileError, self._profile, desc)

    def test_missing_layer_property(self):
        desc = copy.deepcopy(two_layer_soil)
        desc["SoilLayers"][1].pop("BD")
        self.assertRaises(ParameterError, self._profile, desc)

    def test_defaults(self):
        desc = copy.deepcopy(two_layer_soil)
        for key in ("SWI", "NO3I", "NH4I"):
            desc["SoilLayers"][0].pop(key)
        p = self._profile(desc)
        self.assertAlmostEqual(p[0].SWI, p[0].DUL)
        self.assertAlmostEqual(p[0].NO3I, 0.)


class TestZones(unittest.TestCase):

    def test_find_zone(self):
        zone = ZoneWaterAndN("field", 2)
        self.assertIs(find_zone([zone], "field"), zone)
        self.assertRaises(ZoneError, find_zone, [zone], "orchard")
        self.assertRaises(ZoneError, find_zone, [], "field")
        self.assertRaises(ZoneError, find_zone, [zone, ZoneWaterAndN("field", 2)], "field")

    def test_update(self):
        zone = ZoneWaterAndN("field", 2)
        water = zone.Water
        zone.update([10., 20.], [1., 2.], [0.1, 0.2])
        self.assertIs(zone.Water, water)
        np.testing.assert_allclose(zone.Water, [10., 20.])
        self.assertRaises(SoilProfileError, zone.update, [10.], [1.], [0.1])


def suite():
    """ This defines all the tests of a module"""
    suite = unittest.TestSuite()
    loader = unittest.TestLoader()
    suite.addTest(loader.loadTestsFromTestCase(TestSoilProfileGeometry))
    suite.addTest(loader.loadTestsFromTestCase(TestSoilProfileValidation))
    suite.addTest(loader.loadTestsFromTestCase(TestZones))
    return suite


if __name__ == '__main__':
    unittest.TextTestRunner(verbosity=2).run(suite())
