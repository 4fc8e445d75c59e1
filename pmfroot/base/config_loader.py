# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
import textwrap
from pathlib import Path

from .. import exceptions as exc


class ConfigurationLoader(object):
    """Class for loading the model configuration from a configuration file.

    :param config: file name (string or pathlib.Path) of the model configuration.
        A bare file name is looked up in the 'conf/' folder of the package.

    A configuration file is a python file defining ALL-CAPS names for the
    components (CROP, SOIL, AGROMANAGEMENT) and the output variables.
    """
    _required_attr = ("CROP", "SOIL", "AGROMANAGEMENT", "OUTPUT_VARS", "OUTPUT_INTERVAL",
                      "OUTPUT_INTERVAL_DAYS", "SUMMARY_OUTPUT_VARS")
    model_config_file = None
    description = None

    # defaults for optional configuration items
    OUTPUT_WEEKDAY = 0
    TERMINAL_OUTPUT_VARS = []

    def __init__(self, config):

        if not isinstance(config, (str, Path)):
            msg = ("Keyword 'config' should provide the name of the file (string or pathlib.Path) " +
                   "storing the configuration of the model.")
            raise exc.PMFRootError(msg)

        config = Path(config)
        if config.is_absolute() or str(config).startswith("."):
            mconf = config
        else:
            mconf = Path(__file__).parent.parent / "conf" / config
        model_config_file = mconf.resolve()

        if not model_config_file.exists():
            msg = "Model configuration file does not exist: %s" % model_config_file
            raise exc.PMFRootError(msg)
        self.model_config_file = model_config_file
        self.defined_attr = []

        try:
            loc = {}
            with open(model_config_file) as fp:
                bytecode = compile(fp.read(), str(model_config_file), 'exec')
            exec(bytecode, {}, loc)
        except Exception as e:
            msg = "Failed to load configuration from file '%s' due to: %s"
            msg = msg % (model_config_file, e)
            raise exc.PMFRootError(msg)

        if "__doc__" in loc:
            desc = loc.pop("__doc__")
            if len(desc) > 0:
                self.description = desc
                if self.description[-1] != "\n":
                    self.description += "\n"

        for key, value in list(loc.items()):
            if key.isupper():
                self.defined_attr.append(key)
                setattr(self, key, value)

        diff = set(self._required_attr).difference(set(self.defined_attr))
        if diff:
            msg = "One or more compulsory configuration items missing: %s" % sorted(diff)
            raise exc.PMFRootError(msg)

    def __str__(self):
        msg = "ConfigurationLoader from file:\n"
        msg += "  %s\n\n" % self.model_config_file
        if self.description is not None:
            msg += ("%s Header of configuration file %s\n" % ("-"*20, "-"*20))
            msg += self.description
            msg += ("%s Contents of configuration file %s\n" % ("-"*19, "-"*19))
        for k in self.defined_attr:
            r = "%s: %s" % (k, getattr(self, k))
            msg += (textwrap.fill(r, subsequent_indent="  ") + "\n")
        return msg
