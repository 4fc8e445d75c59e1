# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""Settings for PMFRoot

Default values will be read from the file 'pmfroot/settings/default_settings.py'
User specific settings are read from '$HOME/.pmfroot/pmfroot_user_settings.py'.
Any settings defined in the user settings will override the default settings.

Settings must be defined as ALL-CAPS and can be accessed as attributes
from pmfroot.settings.settings

For example, to use the settings in a module under 'crop':

    from ..settings import settings
    print(settings.FLOAT_TOLERANCE)

Settings that are not ALL-CAPS will generate a warning. To avoid warnings
for everything that is not a setting (such as imported modules), prepend
and underscore to the name.
"""

import os as _os

PMFROOT_USER_HOME = _os.path.join(_os.path.expanduser("~"), ".pmfroot")

# PMFRoot sets all rate variables to zero after state integration for consistency.
# You can disable this behaviour for increased performance.
ZEROFY = True

# Absolute tolerance used when checking that per-layer allocations of dry
# matter and nitrogen add up to the totals given by the arbitrator.
FLOAT_TOLERANCE = 1e-9

# Range checks on driving variables (DMSUPPLY, TRANSPDEMAND, TEMP)
DRIVER_RANGE_CHECKS = True

# Configuration of logging
# Two log handlers are defined: one that sends log messages to the screen
# ('console') and one that sends message to a rotating file. The location and
# name of the log file is defined by LOG_DIR and LOG_FILE_NAME. By default,
# messages of level INFO and up go to the file and ERROR and up to the console.
# Setting the level to DEBUG shows the signal traffic between components.
LOG_DIR = _os.path.join(PMFROOT_USER_HOME, "logs")
LOG_FILE_NAME = _os.path.join(LOG_DIR, "pmfroot.log")
LOG_LEVEL_FILE = "INFO"
LOG_LEVEL_CONSOLE = "ERROR"
LOG_CONFIG = \
            {
                'version': 1,
                'disable_existing_loggers': True,
                'formatters': {
                    'standard': {
                        'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
                    },
                    'brief': {
                        'format': '[%(levelname)s] - %(message)s'
                    },
                },
                'handlers': {
                    'console': {
                        'level': LOG_LEVEL_CONSOLE,
                        'class': 'logging.StreamHandler',
                        'formatter': 'brief'
                    },
                    'file': {
                        'level': LOG_LEVEL_FILE,
                        'class': 'logging.handlers.RotatingFileHandler',
                        'formatter': 'standard',
                        'filename': LOG_FILE_NAME,
                        'maxBytes': 1024**2,
                        'backupCount': 7,
                        'mode': 'a',
                        'encoding': 'utf8'
                    },
                },
                'root': {
                         'handlers': ['console', 'file'],
                         'propagate': True,
                         'level': 'NOTSET'
                }
            }
