# -*- coding: utf-8 -*-

import json

from odoo import api, fields, models, _
from odoo.exceptions import UserError

RELEASE_HEADERS = [
    'Release ID',
    'Release Type',
    'Release Title',
    'Artist Name',
    'Legal Name',
    "Artist's Chosen Date",
    'Legacy Release Date',
]

TRACK_HEADERS = [
    'Track Number',
    'Song Name',
    'Performer',
    'Composer',
    'Band/Music Producer',
    'Studio',
    'Record Label',
    'Genre',
]

# Column order of the platform Request/Status pairs
EXPORT_PLATFORMS = [
    ('youtube', 'YouTube'),
    ('flow', 'Flow'),
    ('ringtunes', 'Ringtunes'),
    ('international_streaming', 'International Streaming'),
    ('facebook', 'Facebook'),
    ('tiktok', 'TikTok'),
]

EXPORT_MODES = ('track', 'release')


def _quote(value):
    return '"%s"' % str(value).replace('"', '""')


class ReleaseCsvExport(models.AbstractModel):
    _name = 'label.release.export'
    _description = 'Release CSV Export'

    def _platform_headers(self):
        headers = []
        for __, label in EXPORT_PLATFORMS:
            headers += ['%s Request' % label, '%s Status' % label]
        return headers

    def _release_cells(self, release):
        return [
            release.id,
            release.release_type or '',
            release.title,
            release.primary_artist_id.name or '',
            release.primary_artist_id.legal_name or '',
            fields.Date.to_string(release.artists_chosen_date) or '',
            fields.Date.to_string(release.legacy_release_date) or '',
        ]

    def _platform_cells(self, release):
        cells = []
        for platform, __ in EXPORT_PLATFORMS:
            request = release.platform_request_ids.filtered(lambda r: r.platform == platform)[:1]
            cells += ['Yes' if request.requested else 'No', request.status or '']
        return cells

    @staticmethod
    def _track_cells(track):
        return [
            track.track_number or '',
            track.name,
            track.performer or '',
            track.composer or '',
            track.band or '',
            track.studio or '',
            track.record_label or '',
            track.genre or '',
        ]

    @staticmethod
    def _songs_json(release):
        return json.dumps([{
            'name': track.name,
            'performer': track.performer or None,
            'composer': track.composer or None,
            'band': track.band or None,
            'music_producer': track.music_producer or None,
            'studio': track.studio or None,
            'record_label': track.record_label or None,
            'genre': track.genre or None,
        } for track in release.track_ids.sorted('track_number')])

    @api.model
    def _get_rows(self, releases, mode='track'):
        if mode == 'track':
            rows = [RELEASE_HEADERS + TRACK_HEADERS + self._platform_headers()]
            for release in releases:
                base, platform = self._release_cells(release), self._platform_cells(release)
                tracks = release.track_ids.sorted('track_number')
                if not tracks:
                    rows.append(base + [''] * len(TRACK_HEADERS) + platform)
                for track in tracks:
                    rows.append(base + self._track_cells(track) + platform)
        else:
            rows = [RELEASE_HEADERS + ['Songs (JSON)'] + self._platform_headers()]
            for release in releases:
                rows.append(self._release_cells(release) + [self._songs_json(release)]
                            + self._platform_cells(release))
        return rows

    @api.model
    def get_csv(self, domain=None, mode='track'):
        """Export releases as CSV text, one row per track or per release"""
        if mode not in EXPORT_MODES:
            raise UserError(_('Export mode must be "track" or "release"'))
        releases = self.env['music.release'].search(domain or [], order='create_date desc, id desc')
        rows = self._get_rows(releases, mode)
        return '\n'.join(','.join(_quote(cell) for cell in row) for row in rows)

    @api.model
    def get_filename(self, mode='track'):
        prefix = 'tracks' if mode == 'track' else 'releases'
        return '%s-export-%s.csv' % (prefix, fields.Date.to_string(fields.Date.context_today(self)))
