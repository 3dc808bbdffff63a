# -*- coding: utf-8 -*-

from . import release_csv_import
from . import import_mapping_wizard
from . import artist_merge_wizard
