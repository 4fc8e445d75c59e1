# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
import os

import yaml

from ..base import ParameterProvider, DriverDataProvider
from .. import exceptions as exc


def _load_yaml(fname, description):
    fname_fp = os.path.normpath(os.path.abspath(fname))
    if not os.path.exists(fname_fp):
        msg = "Cannot find %s file: %s" % (description, fname_fp)
        raise exc.PMFRootError(msg)

    with open(fname_fp) as fp:
        try:
            r = yaml.safe_load(fp)
        except yaml.YAMLError as e:
            msg = "Failed parsing %s file %s: %s" % (description, fname_fp, e)
            raise exc.PMFRootError(msg)
    return fname_fp, r


class YAMLAgroManagementReader(list):
    """Reads PMFRoot agromanagement files in the YAML format.

    :param fname: filename of the agromanagement file. If fname is not provided as a absolute or
        relative path the file is assumed to be in the current working directory.
    """

    def __init__(self, fname):
        fname_fp, r = _load_yaml(fname, "agromanagement")
        try:
            list.__init__(self, r["AgroManagement"])
        except (KeyError, TypeError):
            msg = "No 'AgroManagement' section found in file %s" % fname_fp
            raise exc.PMFRootError(msg)

    def __str__(self):
        return yaml.dump(list(self), default_flow_style=False)


class YAMLInputProvider(object):
    """Reads the complete input for a root simulation from a single YAML file.

    :param fname: filename of the YAML file.

    The file holds the following sections::

        SiteParameters:
            ZoneName: field
        SoilParameters:
            SoilProfileDescription: ...
        CropParameters:
            CropName: wheat
            ...
        AgroManagement:
        - 2000-10-01: ...
        Drivers:
        - {DAY: 2000-10-01, DMSUPPLY: 0., TRANSPDEMAND: 1.2, TEMP: 12.}

    The `Drivers` section is optional, driving variables can also be read
    with the `CSVDriverDataProvider`.
    """
    sections = ("SiteParameters", "SoilParameters", "CropParameters", "AgroManagement")

    def __init__(self, fname):
        self.fname, r = _load_yaml(fname, "input")
        if not isinstance(r, dict):
            msg = "Input file %s should contain a mapping of sections." % self.fname
            raise exc.PMFRootError(msg)

        missing = [s for s in self.sections if s not in r]
        if missing:
            msg = "Input file %s misses section(s): %s" % (self.fname, missing)
            raise exc.PMFRootError(msg)

        self.sitedata = dict(r["SiteParameters"] or {})
        self.soildata = dict(r["SoilParameters"] or {})
        self.cropdata = dict(r["CropParameters"] or {})
        self.agromanagement = list(r["AgroManagement"])
        self.drivers = list(r.get("Drivers") or [])

    def get_parameterprovider(self):
        """Returns a ParameterProvider for the site, soil and crop parameters."""
        return ParameterProvider(sitedata=self.sitedata, soildata=self.soildata,
                                 cropdata=self.cropdata)

    def get_driverdataprovider(self):
        """Returns a DriverDataProvider with the records of the `Drivers` section."""
        if not self.drivers:
            msg = "No 'Drivers' section defined in input file %s" % self.fname
            raise exc.DriverDataProviderError(msg)
        ddp = DriverDataProvider(self.drivers)
        ddp.description = ["Driving variables read from: %s" % self.fname]
        return ddp

    def __str__(self):
        msg = "YAMLInputProvider from file: %s\n" % self.fname
        msg += "Site parameters: %s\n" % sorted(self.sitedata)
        msg += "Soil parameters: %s\n" % sorted(self.soildata)
        msg += "Crop parameters: %s\n" % sorted(self.cropdata)
        msg += "Number of campaigns: %i\n" % len(self.agromanagement)
        msg += "Number of driver records: %i\n" % len(self.drivers)
        return msg
