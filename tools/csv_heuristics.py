# -*- coding: utf-8 -*-
"""Column heuristics for release spreadsheets.

Submission exports come from form tools with loosely named columns
("Album/Single Name", "Song 3 Producer (Archived)", ...). The helpers here
parse such a file, guess what each column means and pull release and song
values out of a parsed row.
"""

import csv
import io
import re

from dateutil import parser as date_parser

_NORMALIZE_SEPARATORS_RE = re.compile(r'[_\s-]+')
_NORMALIZE_STRIP_RE = re.compile(r'[^a-z0-9_]')
_FEATURING_BRACKET_RE = re.compile(r'\([Ff][Tt]\.?\s*-\s*([^)]+)\)')
_FEATURING_RE = re.compile(r'\s*\b(?:ft|feat|featuring)\b\.?\s+', re.IGNORECASE)
_AMPERSAND_RE = re.compile(r'\s+&\s+')
_SLASH_RE = re.compile(r'\s+/\s+')
_LIST_SPLIT_RE = re.compile(r'[,|]+')
_LINK_RE = re.compile(r'\[https?://[^\]]+\]', re.IGNORECASE)
_PARENTHESIS_RE = re.compile(r'\([^)]*\)')
_SONG_NUMBER_RE = re.compile(r'song[_\s]*(\d+)', re.IGNORECASE)
_SONG_TEMPLATE_RE = re.compile(r'^(.*?song[_\s]*)(\d+)([_\s]*.+)$', re.IGNORECASE)

SUBMISSION = 'submission'
SONG = 'song'

TITLE_FALLBACK_COLUMNS = (
    'Album/Single Name',
    'Album/Single',
    'Release Title',
    'Title',
    'Album Name',
    'Single Name',
    'Release Name',
)

UPLOADED_KEYWORDS = ('uploaded', 'approved', 'checked', 'completed')
UPLOADED_VALUES = ('yes', 'y', '1', 'true')
TRUE_VALUES = ('true', 'yes', '1', 'y')

DATE_FIELDS = ('artists_chosen_date', 'released_date', 'legacy_release_date', 'lars_released_date')
DATETIME_FIELDS = ('submitted_at', 'created_time')

SONG_FIELDS = (
    'name', 'artist_name', 'composer', 'performer', 'band',
    'music_producer', 'studio', 'record_label', 'genre',
)

_S = r'[_\s]*'
_AR = r'a[&_]?r'
_PRODUCER = r'(?:music' + _S + r')?(?:song' + _S + r')?(?:produce|producer)'
_ARCHIVED = r'(?:' + _S + r'\(?' + _S + r'archived' + _S + r'\)?)?'

# Most specific first, the first matching pattern wins
FIELD_PATTERNS = [
    # Submission metadata
    (r'^submission' + _S + r'id$', 'submission_id', SUBMISSION),
    (r'^respondent' + _S + r'id$', 'respondent_id', SUBMISSION),
    (r'^submitted' + _S + r'at$', 'submitted_at', SUBMISSION),
    (r'^created' + _S + r'time$', 'created_time', SUBMISSION),
    (r'^created' + _S + r'by$', 'created_by', SUBMISSION),
    # Artist
    (r'^artist' + _S + r'name$', 'artist_name', SUBMISSION),
    (r'^legal' + _S + r'name$', 'legal_name', SUBMISSION),
    (r'^signature$', 'signature', SUBMISSION),
    (r'^royalty' + _S + r'receive' + _S + r'method$', 'royalty_receive_method', SUBMISSION),
    # Release
    (r'^(?:album|single)' + _S + r'(?:name|title)$', 'release_title', SUBMISSION),
    (r'^release' + _S + r'(?:title|name)$', 'release_title', SUBMISSION),
    (r'^album' + _S + r'/' + _S + r'single' + _S + r'name$', 'release_title', SUBMISSION),
    (r'^release' + _S + r'type$', 'release_type', SUBMISSION),
    (r'^(?:single|album)\??$', 'release_type', SUBMISSION),
    (r'^album' + _S + r'id$', 'album_id', SUBMISSION),
    # Dates
    (r"^artist(?:'?s)?" + _S + r'chosen' + _S + r'date$', 'artists_chosen_date', SUBMISSION),
    (r'^lars' + _S + r'released?' + _S + r'date$', 'lars_released_date', SUBMISSION),
    (r'^legacy' + _S + r'release' + _S + r'date$', 'legacy_release_date', SUBMISSION),
    (r'^released?' + _S + r'date$', 'released_date', SUBMISSION),
    # A&R
    (r'^assigned' + _S + _AR + r'(?:' + _S + r'name)?$', 'assigned_ar', SUBMISSION),
    (r'^' + _AR + r'(?:' + _S + r'(?:assigned|name|person|employee|staff|contact))?$', 'assigned_ar', SUBMISSION),
    # Platform requests
    (r'^(?:facebook|fb)' + _S + r'request$', 'facebook_request', SUBMISSION),
    (r'^flow' + _S + r'request$', 'flow_request', SUBMISSION),
    (r'^tiktok' + _S + r'request$', 'tiktok_request', SUBMISSION),
    (r'^youtube' + _S + r'request$', 'youtube_request', SUBMISSION),
    (r'^(?:international|intl)' + _S + r'streaming' + _S + r'request$', 'intl_streaming_request', SUBMISSION),
    (r'^ringtunes' + _S + r'request$', 'ringtunes_request', SUBMISSION),
    # Platform statuses
    (r'^(?:facebook|fb)' + _S + r'(?:status)?$', 'facebook_status', SUBMISSION),
    (r'^flow' + _S + r'(?:status)?$', 'flow_status', SUBMISSION),
    (r'^tiktok' + _S + r'(?:status)?$', 'tiktok_status', SUBMISSION),
    (r'^youtube' + _S + r'(?:status)?$', 'youtube_status', SUBMISSION),
    (r'^(?:international|intl)' + _S + r'streaming' + _S + r'(?:status)?$', 'intl_streaming_status', SUBMISSION),
    (r'^ringtunes' + _S + r'(?:status)?$', 'ringtunes_status', SUBMISSION),
    # Platform channels
    (r'^youtube' + _S + r'(?:request' + _S + r')?channel$', 'youtube_channel', SUBMISSION),
    (r'^(?:facebook|fb)' + _S + r'(?:request' + _S + r')?channel$', 'facebook_channel', SUBMISSION),
    (r'^tiktok' + _S + r'(?:request' + _S + r')?channel$', 'tiktok_channel', SUBMISSION),
    (r'^flow' + _S + r'(?:request' + _S + r')?channel$', 'flow_channel', SUBMISSION),
    (r'^ringtunes' + _S + r'(?:request' + _S + r')?channel$', 'ringtunes_channel', SUBMISSION),
    (r'^(?:international|intl)' + _S + r'streaming' + _S + r'(?:request' + _S + r')?channel$',
     'intl_streaming_channel', SUBMISSION),
    # Other metadata
    (r'^payment' + _S + r'remarks$', 'payment_remarks', SUBMISSION),
    (r'^notes$', 'notes', SUBMISSION),
    (r'^youtube' + _S + r'remarks$', 'youtube_remarks', SUBMISSION),
    (r'^vuclip$', 'vuclip', SUBMISSION),
    (r'^filezilla$', 'filezilla', SUBMISSION),
    (r'^upload' + _S + r'status$', 'upload_status', SUBMISSION),
    (r'^fully' + _S + r'uploaded$', 'fully_uploaded', SUBMISSION),
    (r'^permit' + _S + r'status$', 'permit_status', SUBMISSION),
    (r'^copyright' + _S + r'status$', 'copyright_status', SUBMISSION),
    (r'^video' + _S + r'type$', 'video_type', SUBMISSION),
    (r'^done$', 'done', SUBMISSION),
    (r'^more' + _S + r'tracks$', 'more_tracks', SUBMISSION),
    # Numbered songs
    (r'^song' + _S + r'\d+' + _S + r'name$', 'name', SONG),
    (r'^song' + _S + r'\d+' + _S + r'composer(?:' + _S + r'name)?$', 'composer', SONG),
    (r'^song' + _S + r'\d+' + _S + _PRODUCER + _ARCHIVED + r'(?:' + _S + r'name)?' + _ARCHIVED + r'$',
     'music_producer', SONG),
    (r'^song' + _S + r'\d+' + _S + r'band' + _S + r'/' + _S + r'music' + _S + r'producer$', 'music_producer', SONG),
    (r'^song' + _S + r'\d+' + _S + r'performer(?:' + _S + r'name)?$', 'performer', SONG),
    (r'^song' + _S + r'\d+' + _S + r'band(?:' + _S + r'name)?$', 'band', SONG),
    (r'^song' + _S + r'\d+' + _S + r'artist(?:' + _S + r'name)?$', 'artist_name', SONG),
    (r'^song' + _S + r'\d+' + _S + r'studio(?:' + _S + r'name)?$', 'studio', SONG),
    (r'^song' + _S + r'\d+' + _S + r'(?:record' + _S + r')?label(?:' + _S + r'name)?$', 'record_label', SONG),
    (r'^song' + _S + r'\d+' + _S + r'genre$', 'genre', SONG),
    # Single song per row
    (r'^(?:song|track)' + _S + r'name$', 'name', SONG),
    (r'^song' + _S + r'artist' + _S + r'name$', 'artist_name', SONG),
    (r'^band' + _S + r'name$', 'band', SONG),
    (r'^composer(?:' + _S + r'name)?$', 'composer', SONG),
    (r'^record' + _S + r'label' + _S + r'name$', 'record_label', SONG),
    (r'^studio(?:' + _S + r'name)?$', 'studio', SONG),
    (r'^genre$', 'genre', SONG),
    (r'^' + _PRODUCER + _ARCHIVED + r'(?:' + _S + r'name)?' + _ARCHIVED + r'$', 'music_producer', SONG),
    (r'^band' + _S + r'/' + _S + r'music' + _S + r'producer$', 'music_producer', SONG),
    (r'^performer(?:' + _S + r'name)?$', 'performer', SONG),
]
FIELD_PATTERNS = [(re.compile(pattern, re.IGNORECASE), field, field_type)
                  for pattern, field, field_type in FIELD_PATTERNS]


def normalize_column_name(name):
    """Lowercase, collapse separators into underscores and drop anything else."""
    name = (name or '').lower().strip()
    name = _NORMALIZE_SEPARATORS_RE.sub('_', name)
    return _NORMALIZE_STRIP_RE.sub('', name)


def _clean_header(header):
    return header.strip().strip('"\'')


def parse_csv(content, delimiter=','):
    """Parse CSV text into ``(headers, rows)``.

    Every row is a dict keyed by both the header and its normalized form so
    lookups work whatever spelling a mapping carries.
    """
    if not content or not content.strip():
        return [], []

    reader = csv.reader(io.StringIO(content), delimiter=delimiter)
    records = [record for record in reader if any(cell.strip() for cell in record)]
    if not records:
        return [], []

    headers = [_clean_header(header) for header in records[0]]
    rows = []
    for record in records[1:]:
        row = {}
        for index, header in enumerate(headers):
            value = record[index].strip() if index < len(record) else ''
            row[normalize_column_name(header)] = value
            row[header] = value
        rows.append(row)
    return headers, rows


def parse_artist_list(value):
    """Split an artist credit string into names, featured artists last.

    ``"42 (Ft - Phyo Lay, Bo Ae)"`` gives ``['42', 'Phyo Lay', 'Bo Ae']``.
    """
    if not value or not value.strip():
        return []

    featured = []
    for group in _FEATURING_BRACKET_RE.findall(value):
        featured.extend(name.strip() for name in group.split(',') if name.strip())

    normalized = _FEATURING_BRACKET_RE.sub('', value).strip()
    normalized = _FEATURING_RE.sub('|', normalized)
    normalized = _AMPERSAND_RE.sub('|', normalized)
    normalized = _SLASH_RE.sub('|', normalized)

    primary = [item.strip() for item in _LIST_SPLIT_RE.split(normalized) if item.strip()]
    return primary + featured


def clean_ar_name(name):
    """Drop ``[http...]`` links and parenthesised notes from an A&R cell."""
    if not name:
        return ''
    cleaned = _LINK_RE.sub('', name).strip()
    return _PARENTHESIS_RE.sub('', cleaned).strip()


def parse_boolean(value):
    if not value:
        return False
    return value.strip().lower() in TRUE_VALUES


def parse_date(value, with_time=False):
    """Parse a spreadsheet date, None when it is not a date."""
    if not value or not value.strip():
        return None
    try:
        parsed = date_parser.parse(value.strip())
    except (ValueError, OverflowError):
        return None
    return parsed if with_time else parsed.date()


def _song_index(header, normalized):
    match = re.match(r'^song[_\s]*(\d+)', header, re.IGNORECASE) \
        or _SONG_NUMBER_RE.search(header) \
        or _SONG_NUMBER_RE.search(normalized)
    return int(match.group(1)) if match else None


def auto_detect_mappings(headers):
    """Guess a target field for every header.

    Returns one dict per header with ``csv_column``, ``target_field`` (None
    when nothing matched), ``field_type`` and ``song_index`` for numbered
    song columns.
    """
    mappings = []
    for header in headers:
        normalized = normalize_column_name(header)
        mapping = {
            'csv_column': header,
            'target_field': None,
            'field_type': SUBMISSION,
            'song_index': None,
        }
        for pattern, field, field_type in FIELD_PATTERNS:
            if pattern.match(header) or pattern.match(normalized):
                mapping.update(target_field=field, field_type=field_type)
                if field_type == SONG:
                    mapping['song_index'] = _song_index(header, normalized)
                break
        mappings.append(mapping)
    return mappings


def build_song_patterns(mappings):
    """Return ``{target_field: template}`` with ``{n}`` in place of the song number."""
    patterns = {}
    for mapping in mappings:
        if mapping['field_type'] != SONG or mapping['target_field'] in patterns:
            continue
        column = mapping['csv_column']
        if not re.search(r'song[_\s]*\d+[_\s]*.+', column, re.IGNORECASE):
            continue
        match = _SONG_TEMPLATE_RE.match(column)
        if match:
            patterns[mapping['target_field']] = '%s{n}%s' % (match.group(1), match.group(3))
        else:
            patterns[mapping['target_field']] = re.sub(r'\d+', '{n}', column, count=1)
    return patterns


def _lookup(row, column):
    """Find a column value by exact name, normalized name, then any equivalent key."""
    value = row.get(column)
    if not value:
        value = row.get(normalize_column_name(column))
    if not value:
        target = normalize_column_name(column)
        for key, candidate in row.items():
            if candidate and normalize_column_name(key) == target:
                value = candidate
                break
    if not value and column.strip() != column:
        value = row.get(column.strip())
    return (value or '').strip()


# Targets stored on the release, anything else is preserved in the raw row
_KNOWN_SUBMISSION_FIELDS = {
    field for __, field, field_type in FIELD_PATTERNS if field_type == SUBMISSION
} - {'vuclip', 'filezilla', 'upload_status', 'fully_uploaded', 'permit_status', 'done', 'more_tracks',
     'youtube_remarks', 'signature', 'royalty_receive_method', 'album_id', 'respondent_id', 'created_by'}


def _copyright_status(value):
    value = value.lower()
    for keyword in ('original', 'cover', 'international'):
        if keyword in value:
            return keyword
    return None


def _video_type(value):
    value = value.lower()
    if 'music' in value or 'mv' in value:
        return 'music_video'
    if 'lyrics' in value:
        return 'lyrics_video'
    return 'none'


def extract_submission(row, mappings):
    """Build a submission dict from the mapped columns of ``row``.

    Targets without a dedicated meaning are kept under
    ``raw_row['unmapped_fields']``.
    """
    submission = {}
    unmapped = {}
    for mapping in mappings:
        target = mapping.get('target_field')
        if mapping.get('field_type') != SUBMISSION or not target:
            continue
        value = _lookup(row, mapping['csv_column'])

        if target == 'release_title':
            if not value:
                for column in TITLE_FALLBACK_COLUMNS:
                    value = (row.get(column) or row.get(normalize_column_name(column)) or '').strip()
                    if value:
                        break
            submission['release_title'] = value or None
        elif target == 'release_type':
            if value:
                submission['release_type'] = 'album' if 'album' in value.lower() else 'single'
        elif target == 'copyright_status':
            status = _copyright_status(value)
            if status:
                submission['copyright_status'] = status
        elif target == 'video_type':
            submission['video_type'] = _video_type(value)
        elif target in DATE_FIELDS:
            parsed = parse_date(value)
            if parsed:
                submission[target] = parsed
        elif target in DATETIME_FIELDS:
            parsed = parse_date(value, with_time=True)
            if parsed:
                submission[target] = parsed
        elif target in _KNOWN_SUBMISSION_FIELDS:
            submission[target] = value or None
        elif value:
            unmapped[target] = value

    raw_row = dict(row)
    if unmapped:
        raw_row['unmapped_fields'] = unmapped
    submission['raw_row'] = raw_row
    return submission


def extract_songs(row, mappings):
    """Return the songs of ``row`` ordered by song number; nameless songs are dropped."""
    song_mappings = [m for m in mappings if m.get('field_type') == SONG and m.get('target_field')]
    numbered = {}
    for mapping in song_mappings:
        match = _SONG_NUMBER_RE.search(mapping['csv_column'])
        if match:
            numbered.setdefault(int(match.group(1)), []).append(mapping)

    if numbered:
        groups = [numbered[number] for number in sorted(numbered)]
    else:
        groups = [song_mappings]

    songs = []
    for group in groups:
        song = {}
        for mapping in group:
            column = mapping['csv_column']
            value = (row.get(column) or row.get(normalize_column_name(column)) or '').strip()
            if value:
                song[mapping['target_field']] = value
        if song.get('name'):
            songs.append(song)
    return songs


def parse_platform_status(value):
    """Map a spreadsheet status cell onto a request status."""
    value = (value or '').strip().lower()
    if value in UPLOADED_VALUES or any(keyword in value for keyword in UPLOADED_KEYWORDS):
        return 'uploaded'
    if 'rejected' in value:
        return 'rejected'
    return 'pending'


def is_checked(value):
    value = (value or '').lower()
    return 'checked' in value or 'completed' in value
