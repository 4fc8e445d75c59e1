# -*- coding: utf-8 -*-
# Copyright (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
"""A driver data provider reading its data from CSV files.
"""
import os

import pandas as pd

from ..base import DriverDataProvider, DriverDataContainer
from .. import exceptions as exc


class CSVDriverDataProvider(DriverDataProvider):
    """Reads the daily driving variables of the root model from a CSV file.

    :param csv_fname: name of the CSV file to be read
    :param delimiter: CSV delimiter
    :param dateformat: the date format used to parse the DAY column, when
        None pandas infers the format.

    The CSV file should have a header row with the column DAY and the
    columns for the required driving variables (DMSUPPLY, TRANSPDEMAND).
    The column TEMP is optional, empty cells are treated as missing::

        DAY,DMSUPPLY,TRANSPDEMAND,TEMP
        2000-10-01,0.0,1.2,12.5
        2000-10-02,0.0,1.1,
    """

    def __init__(self, csv_fname, delimiter=",", dateformat=None):
        DriverDataProvider.__init__(self)

        csv_fname = os.path.normpath(os.path.abspath(csv_fname))
        if not os.path.exists(csv_fname):
            msg = "Cannot find driver data file: %s" % csv_fname
            raise exc.DriverDataProviderError(msg)

        df = pd.read_csv(csv_fname, delimiter=delimiter)
        df.columns = [c.strip() for c in df.columns]
        columns = ["DAY"] + DriverDataContainer.required
        missing = [c for c in columns if c not in df.columns]
        if missing:
            msg = "Column(s) %s missing in driver data file %s" % (missing, csv_fname)
            raise exc.DriverDataProviderError(msg)

        try:
            df["DAY"] = pd.to_datetime(df["DAY"], format=dateformat).dt.date
        except ValueError as e:
            msg = "Failed parsing dates in driver data file %s: %s" % (csv_fname, e)
            raise exc.DriverDataProviderError(msg)

        known = columns + DriverDataContainer.optional
        df = df[[c for c in df.columns if c in known]]
        df = df.astype(object).where(pd.notnull(df), None)
        for record in df.to_dict("records"):
            ddc = DriverDataContainer(**record)
            self._store_DriverDataContainer(ddc, ddc.DAY)

        self.description = ["Driving variables read from: %s" % csv_fname]
        self.logger.info("Read %i records from %s" % (len(self.store), csv_fname))
