# -*- coding: utf-8 -*-

from . import artist_matching
from . import csv_heuristics
