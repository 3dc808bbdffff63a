# -*- coding: utf-8 -*-

import json
import logging

from odoo import models, fields, api, _
from odoo.exceptions import AccessError, UserError

from ..const import (
    CHANNEL_PLATFORMS, DEFAULT_IMPORT_BATCH_SIZE, DEFAULT_PLACEHOLDER_ARTIST,
    IMPORT_PLATFORM_COLUMNS, IMPORT_SESSION_STATES,
)
from ..tools import csv_heuristics

_logger = logging.getLogger(__name__)

# Submission targets copied onto the release as they are
RELEASE_TEXT_FIELDS = ('payment_remarks', 'notes', 'copyright_status', 'video_type')


class ReleaseImportSession(models.Model):
    _name = 'release.import.session'
    _description = 'Release Spreadsheet Import'
    _order = 'create_date desc, id desc'

    name = fields.Char(string='File Name', required=True)
    file_hash = fields.Char(string='File Hash', index=True)
    user_id = fields.Many2one('res.users', string='Imported By', required=True,
                              default=lambda self: self.env.user)
    state = fields.Selection(IMPORT_SESSION_STATES, string='State', default='in_progress',
                             required=True, index=True)

    # Source Data
    rows_data = fields.Text(string='Parsed Rows (JSON)')
    mapping_data = fields.Text(string='Column Mapping (JSON)')

    # Progress Tracking
    total_rows = fields.Integer(string='Total Rows', readonly=True)
    processed_rows = fields.Integer(string='Processed Rows', readonly=True)
    progress = fields.Float(string='Progress (%)', compute='_compute_progress')

    # Results
    releases_created = fields.Integer(string='Releases Created', readonly=True)
    releases_updated = fields.Integer(string='Releases Updated', readonly=True)
    tracks_created = fields.Integer(string='Tracks Created', readonly=True)
    rows_skipped = fields.Integer(string='Rows Skipped', readonly=True)
    failed_rows = fields.Text(string='Failed Rows (JSON)', default='[]')
    release_ids = fields.One2many('music.release', 'import_session_id', string='Imported Releases',
                                  context={'active_test': False})
    completed_at = fields.Datetime(string='Completed At', readonly=True)
    error_message = fields.Text(string='Error Message', readonly=True)

    @api.depends('total_rows', 'processed_rows')
    def _compute_progress(self):
        for session in self:
            if session.total_rows:
                session.progress = min(100.0, session.processed_rows / session.total_rows * 100)
            else:
                session.progress = 100.0 if session.state == 'completed' else 0.0

    def _get_rows(self):
        self.ensure_one()
        return json.loads(self.rows_data or '[]')

    def _get_mappings(self):
        self.ensure_one()
        return json.loads(self.mapping_data or '[]')

    def _get_failed_rows(self):
        self.ensure_one()
        return json.loads(self.failed_rows or '[]')

    @api.model
    def _get_batch_size(self):
        value = self.env['ir.config_parameter'].sudo().get_param(
            'label_release_distribution.import_batch_size', DEFAULT_IMPORT_BATCH_SIZE)
        return int(value) or DEFAULT_IMPORT_BATCH_SIZE

    @api.model
    def _get_placeholder_artist(self):
        return self.env['ir.config_parameter'].sudo().get_param(
            'label_release_distribution.placeholder_artist', DEFAULT_PLACEHOLDER_ARTIST) \
            or DEFAULT_PLACEHOLDER_ARTIST

    @api.model
    def _new_caches(self):
        return {'artists': {}, 'employees': {}, 'channels': {}}

    def _process_row(self, row, index, caches):
        """Create or update the release described by one spreadsheet row.

        Returns a dict with ``created``, ``updated`` and ``tracks`` counts.
        Raises UserError for rows that cannot be imported.
        """
        self.ensure_one()
        mappings = self._get_mappings()
        submission = csv_heuristics.extract_submission(row, mappings)
        title = (submission.get('release_title') or '').strip()
        if not title:
            raise UserError(_('Missing required field: release title'))

        songs = csv_heuristics.extract_songs(row, mappings)
        Partner = self.env['res.partner']

        artist_names = csv_heuristics.parse_artist_list(submission.get('artist_name'))
        placeholder = not artist_names
        if placeholder:
            artist_names = [self._get_placeholder_artist()]
        artists = Partner._find_or_create_artists(artist_names, cache=caches['artists'])
        primary_artist = artists[0]
        if not placeholder and submission.get('legal_name'):
            primary_artist.legal_name = submission['legal_name'].strip()

        Employee = self.env['hr.employee'].sudo()
        ar_employees = Employee
        if submission.get('assigned_ar'):
            ar_names = csv_heuristics.parse_artist_list(csv_heuristics.clean_ar_name(submission['assigned_ar']))
            for ar_name in ar_names:
                ar_employees |= Employee._find_or_create_by_name(
                    ar_name, cache=caches['employees'])

        release_type = submission.get('release_type') or ('album' if len(songs) >= 2 else 'single')
        values = {
            'title': title,
            'release_type': release_type,
            'primary_artist_id': primary_artist.id,
            'artists_chosen_date': submission.get('artists_chosen_date') or submission.get('released_date') or False,
            'legacy_release_date': submission.get('legacy_release_date') or False,
            'raw_row': json.dumps(submission['raw_row'], default=str),
            'import_session_id': self.id,
        }
        submitted_at = submission.get('submitted_at') or submission.get('created_time')
        if submitted_at:
            values['submitted_at'] = submitted_at
        for field_name in RELEASE_TEXT_FIELDS:
            values[field_name] = submission.get(field_name) or False
        if ar_employees:
            values['primary_ar_id'] = ar_employees[0].id
            values['ar_employee_ids'] = [(6, 0, ar_employees.ids)]

        Release = self.env['music.release'].with_context(active_test=False)
        if submission.get('submission_id'):
            release = Release.search([('submission_id', '=', submission['submission_id'])], limit=1)
        else:
            release = Release.search([('title', '=', title), ('primary_artist_id', '=', primary_artist.id)], limit=1)
        if release:
            release.write(values)
            created, updated = 0, 1
        else:
            if submission.get('submission_id'):
                values['submission_id'] = submission['submission_id']
            values.setdefault('submitted_at', fields.Datetime.now())
            release = Release.create(values)
            created, updated = 1, 0

        release.artist_credit_ids.unlink()
        self.env['music.artist.credit'].create([
            {'release_id': release.id, 'partner_id': artist.id, 'is_primary': position == 0}
            for position, artist in enumerate(artists)
        ])

        tracks_created = 0
        if songs:
            release.track_ids.unlink()
            for number, song in enumerate(songs, start=1):
                song_artists = Partner._find_or_create_artists(
                    csv_heuristics.parse_artist_list(song.get('artist_name')), cache=caches['artists'])
                if not song_artists:
                    song_artists = primary_artist
                track_values = {
                    'release_id': release.id,
                    'track_number': number,
                    'name': song['name'].strip(),
                    'artist_credit_ids': [
                        (0, 0, {'partner_id': artist.id, 'is_primary': position == 0})
                        for position, artist in enumerate(song_artists)
                    ],
                }
                for field_name in ('composer', 'performer', 'band', 'music_producer', 'studio',
                                   'record_label', 'genre'):
                    track_values[field_name] = song.get(field_name) or False
                self.env['music.track'].create(track_values)
                tracks_created += 1

        self._rebuild_platform_requests(release, submission, caches)
        return {'created': created, 'updated': updated, 'tracks': tracks_created}

    def _rebuild_platform_requests(self, release, submission, caches):
        """Replace the release requests of every platform present in the row"""
        Request = self.env['platform.request']
        Channel = self.env['platform.channel']
        for request_key, platform, status_key, channel_key in IMPORT_PLATFORM_COLUMNS:
            requested = bool((submission.get(request_key) or '').strip())
            status_value = (submission.get(status_key) or '').strip()
            if not requested and not status_value:
                continue

            status = csv_heuristics.parse_platform_status(status_value)
            if csv_heuristics.is_checked(status_value):
                status = 'uploaded'
            base_values = {
                'release_id': release.id,
                'platform': platform,
                'requested': requested,
                'status': status,
                'uploaded_at': fields.Datetime.now() if status == 'uploaded' else False,
            }

            release.platform_request_ids.filtered(lambda r: r.platform == platform).unlink()
            channel_names = csv_heuristics.parse_artist_list(submission.get(channel_key))
            if channel_names:
                if platform not in CHANNEL_PLATFORMS:
                    _logger.warning("Row lists channels for %s which has no channels, keeping them by name",
                                    platform)
                for channel_name in channel_names:
                    channel = Channel._find_or_create(platform, channel_name, cache=caches['channels'])
                    Request.create(dict(base_values, channel_id=channel.id, channel_name=channel.name))
            else:
                Request.create(base_values)

    def _append_failures(self, failures):
        self.ensure_one()
        self.failed_rows = json.dumps(self._get_failed_rows() + failures)

    def action_process_batch(self, batch_size=None):
        """Process the next rows of the file, completes the session on the last batch"""
        for session in self:
            if session.state != 'in_progress':
                continue
            try:
                session._process_next_batch(batch_size or self._get_batch_size())
            except Exception as e:
                _logger.exception("Import session %s failed", session.id)
                session.write({'state': 'failed', 'error_message': str(e)})
        return True

    def _process_next_batch(self, batch_size):
        self.ensure_one()
        rows = self._get_rows()
        start = self.processed_rows
        end = min(start + batch_size, len(rows))
        caches = self._new_caches()
        counters = {'created': 0, 'updated': 0, 'tracks': 0, 'skipped': 0}
        failures = []

        for index in range(start, end):
            try:
                with self.env.cr.savepoint():
                    result = self._process_row(rows[index], index, caches)
            except Exception as e:
                # Records cached during the failed row may have been rolled back
                caches = self._new_caches()
                failures.append({'row': index + 1, 'message': str(e)})
                counters['skipped'] += 1
                continue
            counters['created'] += result['created']
            counters['updated'] += result['updated']
            counters['tracks'] += result['tracks']

        values = {
            'processed_rows': end,
            'releases_created': self.releases_created + counters['created'],
            'releases_updated': self.releases_updated + counters['updated'],
            'tracks_created': self.tracks_created + counters['tracks'],
            'rows_skipped': self.rows_skipped + counters['skipped'],
        }
        if end >= len(rows):
            values.update(state='completed', completed_at=fields.Datetime.now())
        self.write(values)
        if failures:
            self._append_failures(failures)
        _logger.info("Import session %s processed rows %s-%s of %s (%s failed)",
                     self.id, start + 1, end, len(rows), len(failures))

    def action_process_all(self):
        """Run batches until the session stops being in progress"""
        for session in self:
            while session.state == 'in_progress':
                session.action_process_batch()
        return True

    def action_pause(self):
        for session in self:
            if session.state != 'in_progress':
                raise UserError(_('Only running imports can be paused.'))
        self.write({'state': 'paused'})

    def action_resume(self):
        for session in self:
            if session.state not in ('paused', 'failed'):
                raise UserError(_('Only paused or failed imports can be resumed.'))
        self.write({'state': 'in_progress', 'error_message': False})

    def action_cancel(self):
        for session in self:
            if session.state == 'completed':
                raise UserError(_('A completed import cannot be cancelled.'))
        self.write({'state': 'cancelled'})

    def action_retry_failed_rows(self):
        """Queue the failed rows again in a new session"""
        self.ensure_one()
        failed = self._get_failed_rows()
        if not failed:
            raise UserError(_('This import has no failed rows.'))
        rows = self._get_rows()
        retry_rows = [rows[failure['row'] - 1] for failure in failed if 0 < failure['row'] <= len(rows)]
        return self.create({
            'name': _('%s (retry)', self.name),
            'file_hash': self.file_hash,
            'rows_data': json.dumps(retry_rows),
            'mapping_data': self.mapping_data,
            'total_rows': len(retry_rows),
        })

    def action_delete_imported_releases(self):
        """Remove every release created or updated by these imports"""
        if not self.env.user._is_label_manager():
            raise AccessError(_('Only administrators and managers can delete imported releases.'))
        releases = self.with_context(active_test=False).release_ids
        count = len(releases)
        for release in releases:
            self.env['label.audit.log']._log('release', release.id, 'delete', old_value=release.display_name)
        releases.unlink()
        _logger.info("Deleted %s releases from import sessions %s", count, self.ids)
        return count

    @api.model
    def _cron_process_sessions(self):
        """Scheduled action: one batch for each running import"""
        sessions = self.search([('state', '=', 'in_progress')], order='create_date, id')
        sessions.action_process_batch()
