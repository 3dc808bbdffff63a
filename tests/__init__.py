# -*- coding: utf-8 -*-

from . import test_artist_matching
from . import test_csv_heuristics
from . import test_release_submission
from . import test_platform_request
from . import test_hr_employee
from . import test_artist_merge
from . import test_release_import
from . import test_release_export
from . import test_label_roles
from . import test_label_analytics
from . import test_controllers
from . import test_label_settings
