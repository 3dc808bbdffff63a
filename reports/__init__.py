# -*- coding: utf-8 -*-

from . import label_analytics
from . import release_csv_export
