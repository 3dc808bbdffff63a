# -*- coding: utf-8 -*-

PLATFORMS = [
    ('youtube', 'YouTube'),
    ('facebook', 'Facebook'),
    ('tiktok', 'TikTok'),
    ('flow', 'Flow'),
    ('ringtunes', 'Ringtunes'),
    ('international_streaming', 'International Streaming'),
]

# Requests on these platforms are tracked per channel
CHANNEL_PLATFORMS = ('youtube', 'facebook')

REQUEST_STATUSES = [
    ('pending', 'Pending'),
    ('uploaded', 'Uploaded'),
    ('rejected', 'Rejected'),
]

RELEASE_TYPES = [
    ('single', 'Single'),
    ('album', 'Album'),
]

COPYRIGHT_STATUSES = [
    ('original', 'Original'),
    ('cover', 'Cover'),
    ('international', 'International'),
]

VIDEO_TYPES = [
    ('music_video', 'Music Video'),
    ('lyrics_video', 'Lyrics Video'),
    ('none', 'None'),
]

EMPLOYEE_STATUSES = [
    ('active', 'Active'),
    ('on_leave', 'On Leave'),
    ('probation', 'Probation'),
    ('suspended', 'Suspended'),
    ('resigned', 'Resigned'),
    ('terminated', 'Terminated'),
]

LABEL_ROLES = [
    ('admin', 'Administrator'),
    ('manager', 'Manager'),
    ('a_r', 'A&R'),
    ('data_team', 'Data Team'),
    ('client', 'Client'),
    ('platform_youtube', 'YouTube Team'),
    ('platform_facebook', 'Facebook Team'),
    ('platform_tiktok', 'TikTok Team'),
    ('platform_flow', 'Flow Team'),
    ('platform_ringtunes', 'Ringtunes Team'),
    ('platform_international_streaming', 'International Streaming Team'),
]

# Highest privilege first, the first group a user belongs to decides the role
ROLE_GROUPS = [
    ('admin', 'label_release_distribution.group_label_admin'),
    ('manager', 'label_release_distribution.group_label_manager'),
    ('a_r', 'label_release_distribution.group_label_ar'),
    ('data_team', 'label_release_distribution.group_label_data_team'),
    ('platform_youtube', 'label_release_distribution.group_platform_youtube'),
    ('platform_facebook', 'label_release_distribution.group_platform_facebook'),
    ('platform_tiktok', 'label_release_distribution.group_platform_tiktok'),
    ('platform_flow', 'label_release_distribution.group_platform_flow'),
    ('platform_ringtunes', 'label_release_distribution.group_platform_ringtunes'),
    ('platform_international_streaming',
     'label_release_distribution.group_platform_international_streaming'),
]

PLATFORM_ROLES = {
    'platform_youtube': 'youtube',
    'platform_facebook': 'facebook',
    'platform_tiktok': 'tiktok',
    'platform_flow': 'flow',
    'platform_ringtunes': 'ringtunes',
    'platform_international_streaming': 'international_streaming',
}

# Roles allowed to decide requests on every platform
PLATFORM_SUPERVISOR_ROLES = ('admin', 'manager', 'a_r')

ROLE_LANDING_PAGES = {
    'a_r': '/ar/releases',
    'platform_youtube': '/platforms/youtube',
    'platform_flow': '/platforms/flow',
    'platform_ringtunes': '/platforms/ringtunes',
    'platform_international_streaming': '/platforms/international-streaming',
    'platform_facebook': '/platforms/facebook',
    'platform_tiktok': '/platforms/tiktok',
    'admin': '/dashboard',
    'manager': '/dashboard',
    'data_team': '/dashboard',
    'client': '/submit',
}
DEFAULT_LANDING_PAGE = '/dashboard'

FIELD_PERMISSION_ENTITIES = [
    ('release', 'Release'),
    ('track', 'Track'),
    ('platform_request', 'Platform Request'),
]

CLIENT_VIEWABLE_FIELDS = (
    'title',
    'artists_chosen_date',
    'name',
    'performer',
    'composer',
    'band',
    'music_producer',
    'studio',
    'record_label',
    'genre',
)

PLATFORM_FIELD_KEYWORDS = {
    'platform_youtube': ('youtube', 'channel_name', 'channel_id', 'upload_link'),
    'platform_flow': ('flow',),
    'platform_ringtunes': ('ringtunes',),
    'platform_international_streaming': ('international_streaming',),
    'platform_facebook': ('facebook',),
    'platform_tiktok': ('tiktok',),
}

# CSV import: (request column, platform, status column, channel column)
IMPORT_PLATFORM_COLUMNS = [
    ('youtube_request', 'youtube', 'youtube_status', 'youtube_channel'),
    ('flow_request', 'flow', 'flow_status', 'flow_channel'),
    ('tiktok_request', 'tiktok', 'tiktok_status', 'tiktok_channel'),
    ('facebook_request', 'facebook', 'facebook_status', 'facebook_channel'),
    ('intl_streaming_request', 'international_streaming', 'intl_streaming_status', 'intl_streaming_channel'),
    ('ringtunes_request', 'ringtunes', 'ringtunes_status', 'ringtunes_channel'),
]

IMPORT_SESSION_STATES = [
    ('in_progress', 'In Progress'),
    ('paused', 'Paused'),
    ('completed', 'Completed'),
    ('failed', 'Failed'),
    ('cancelled', 'Cancelled'),
]

AUDIT_ACTIONS = [
    ('create', 'Create'),
    ('update', 'Update'),
    ('delete', 'Delete'),
    ('merge', 'Merge'),
    ('import', 'Import'),
]

DEFAULT_DUPLICATE_THRESHOLD = 0.85
DEFAULT_IMPORT_BATCH_SIZE = 20
DEFAULT_PLACEHOLDER_ARTIST = 'Unknown Artist'
