# -*- coding: utf-8 -*-

from . import res_partner
from . import res_users
from . import hr_employee
from . import label_audit_log
from . import label_field_permission
from . import music_release
from . import music_track
from . import music_artist_credit
from . import platform_channel
from . import platform_request
from . import release_import_session
from . import res_config_settings
