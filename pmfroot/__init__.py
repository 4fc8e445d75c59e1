# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""
PMFRoot: a layered root organ for plant modelling frameworks.

PMFRoot provides a daily, layer-resolved simulation of a plant root system:
root front advance through a layered soil profile, senescence of root
biomass into fresh organic matter, per-layer supply of water, nitrate and
ammonium to a plant-wide arbitrator and the distribution of dry matter and
nitrogen allocations over the soil layers using root activity weights.

PMFRoot reuses the building blocks of a simulation environment in which
rate calculation and state integration are strictly separated, parameters
are passed through a ParameterProvider and state/rate variables are
registered and published through a VariableKiosk. Lifecycle events such as
sowing, emergence, harvest and plant ending are sent as signals by the
AgroManager.
"""
__author__ = "Wageningen Environmental Research"
__license__ = "European Union Public License"
__version__ = "1.0.0"
__stable__ = True

import sys, os


def setup():
    """
    Set up the .pmfroot folder and user settings file, add ~/.pmfroot to the
    sys.path.
    """

    user_home = os.path.expanduser("~")
    pmfroot_user_home = os.path.join(user_home, ".pmfroot")
    if not os.path.exists(pmfroot_user_home):
        os.mkdir(pmfroot_user_home)

    sys.path.append(pmfroot_user_home)

    # Check existence of user settings file. If not exists, create it with
    # all default settings commented out.
    user_settings_file = os.path.join(pmfroot_user_home, "pmfroot_user_settings.py")
    if not os.path.exists(user_settings_file):
        pmfroot_dir = os.path.dirname(__file__)
        default_settings_file = os.path.join(pmfroot_dir, "settings", "default_settings.py")
        with open(default_settings_file) as fp:
            lines = fp.readlines()
        with open(user_settings_file, "w") as fp:
            for line in lines:
                if line.startswith(("#", '"', "'", "import")):
                    cline = line
                elif len(line.strip()) == 0:
                    cline = line
                else:
                    cline = "# " + line
                fp.write(cline)


setup()

import logging.config
from .settings import settings
logging.config.dictConfig(settings.LOG_CONFIG)

from . import util
from . import fileinput
from . import soil
from . import crop
from .engine import Engine
from .models import LayeredRootModel


def test():
    """Run all available tests for PMFRoot."""
    from . import tests
    tests.test_all()
