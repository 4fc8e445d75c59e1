# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
import os
import importlib

from . import default_settings


class Settings(object):
    """
    Settings for PMFRoot.

    Default values will be read from the module pmfroot.settings.default_settings
    User settings are read from $HOME/.pmfroot/pmfroot_user_settings.py and
    override the default ones; see the default settings file for a list of all
    possible variables.
    """

    def __setattr__(self, name, value):
        if name == "LOG_DIR":
            if not os.path.exists(value):
                os.makedirs(value)
        object.__setattr__(self, name, value)

    def __init__(self):
        self._update_from_module(default_settings, "default_settings")

        try:
            mod = importlib.import_module("pmfroot_user_settings")
        except ImportError as e:
            raise ImportError(
                ("Could not import settings '%s' (Is it on sys.path? Is there an import" +
                 " error in the settings file?): %s") % ("$HOME/.pmfroot/pmfroot_user_settings.py", e)
            )
        self._update_from_module(mod, "user_settings")

    def _update_from_module(self, mod, label):
        # only ALL_CAPS settings are taken into account
        for setting in dir(mod):
            if setting.isupper():
                setattr(self, setting, getattr(mod, setting))
            elif setting.startswith("_"):
                pass
            else:
                msg = ("Warning: settings should be ALL_CAPS. Setting '%s' in %s " +
                       "will be ignored.") % (setting, label)
                print(msg)

# Initialize the settings from default_settings and user settings
settings = Settings()
