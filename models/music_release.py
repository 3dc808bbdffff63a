# -*- coding: utf-8 -*-

import json
import logging

from odoo import models, fields, api, _
from odoo.exceptions import UserError

from ..const import COPYRIGHT_STATUSES, PLATFORMS, RELEASE_TYPES, VIDEO_TYPES
from ..tools.csv_heuristics import parse_artist_list, parse_date

_logger = logging.getLogger(__name__)

TRACK_TEXT_FIELDS = ('performer', 'composer', 'band', 'music_producer', 'studio', 'record_label', 'genre')


class MusicRelease(models.Model):
    _name = 'music.release'
    _description = 'Music Release'
    _inherit = ['mail.thread', 'mail.activity.mixin']
    _order = 'submitted_at desc, id desc'

    # Basic Information
    title = fields.Char(string='Release Title', required=True, tracking=True, index=True)
    release_type = fields.Selection(RELEASE_TYPES, string='Release Type', required=True,
                                    default='single', tracking=True)

    # Artists
    primary_artist_id = fields.Many2one('res.partner', string='Primary Artist', required=True,
                                        index=True, ondelete='restrict', tracking=True,
                                        domain=[('is_artist', '=', True)])
    artist_credit_ids = fields.One2many('music.artist.credit', 'release_id', string='Artists')
    artist_ids = fields.Many2many('res.partner', string='All Artists', compute='_compute_artist_ids')

    # Tracklist
    track_ids = fields.One2many('music.track', 'release_id', string='Tracks')
    track_count = fields.Integer(string='Track Count', compute='_compute_track_count', store=True)

    # Submission
    submission_id = fields.Char(string='Submission ID', index=True, copy=False)
    submitted_at = fields.Datetime(string='Submitted At', default=fields.Datetime.now)
    contact_email = fields.Char(string='Contact Email')
    contact_phone = fields.Char(string='Contact Phone')
    raw_row = fields.Text(string='Raw Import Row', help='Original spreadsheet row as JSON')
    import_session_id = fields.Many2one('release.import.session', string='Import Session',
                                        index=True, ondelete='set null')

    # Release Details
    artists_chosen_date = fields.Date(string="Artist's Chosen Date", tracking=True)
    legacy_release_date = fields.Date(string='Legacy Release Date')
    copyright_status = fields.Selection(COPYRIGHT_STATUSES, string='Copyright Status')
    video_type = fields.Selection(VIDEO_TYPES, string='Video Type')
    payment_remarks = fields.Text(string='Payment Remarks')
    notes = fields.Text(string='Notes')

    # A&R
    ar_employee_ids = fields.Many2many('hr.employee', 'music_release_ar_employee_rel',
                                       'release_id', 'employee_id', string='Assigned A&R')
    primary_ar_id = fields.Many2one('hr.employee', string='Primary A&R', index=True, tracking=True)

    # Distribution
    platform_request_ids = fields.One2many('platform.request', 'release_id', string='Platform Requests')

    active = fields.Boolean(string='Active', default=True)

    @api.depends('track_ids')
    def _compute_track_count(self):
        for release in self:
            release.track_count = len(release.track_ids)

    @api.depends('primary_artist_id', 'artist_credit_ids.partner_id')
    def _compute_artist_ids(self):
        for release in self:
            release.artist_ids = release.primary_artist_id | release.artist_credit_ids.partner_id

    @api.depends('title', 'primary_artist_id.name')
    def _compute_display_name(self):
        for release in self:
            if release.primary_artist_id:
                release.display_name = f"{release.primary_artist_id.name} - {release.title or ''}"
            else:
                release.display_name = release.title or ''

    @api.model
    def _rec_names_search(self):
        return ['title', 'submission_id', 'primary_artist_id.name']

    @api.model
    def _resolve_submission_artists(self, payload, cache):
        """Artists of a submission, primary first"""
        Partner = self.env['res.partner']
        if payload.get('artist_ids'):
            ids = [int(artist_id) for artist_id in payload['artist_ids']]
            found = Partner.browse(ids).exists().filtered('is_artist')
            return Partner.browse([artist_id for artist_id in ids if artist_id in found.ids])

        names = []
        if isinstance(payload.get('artist_names'), list):
            names = payload['artist_names']
        elif payload.get('artist_name'):
            names = parse_artist_list(payload['artist_name'])
        elif payload.get('artist_id'):
            artist = Partner.browse(int(payload['artist_id'])).exists()
            names = artist.mapped('name')
        return Partner._find_or_create_artists(names, cache=cache)

    @api.model
    def create_from_submission(self, payload):
        """Create a release with its tracks from a public submission form.

        ``payload`` keys: release_title, release_type, artist_ids or
        artist_names or artist_name or artist_id, legal_name,
        artists_chosen_date, contact_email, contact_phone and songs (dicts
        with name, the track text fields and optional artist_names or
        artist_name).
        """
        title = (payload.get('release_title') or '').strip()
        if not title:
            raise UserError(_('Release title is required'))

        cache = {}
        artists = self._resolve_submission_artists(payload, cache)
        if not artists:
            raise UserError(_('At least one artist is required'))

        primary_artist = artists[0]
        legal_name = (payload.get('legal_name') or '').strip()
        if legal_name:
            primary_artist.legal_name = legal_name

        songs = payload.get('songs') or []
        valid_songs = [song for song in songs if (song.get('name') or '').strip()]
        if len(valid_songs) == 1:
            release_type = 'single'
        else:
            release_type = 'album' if (payload.get('release_type') or '').lower() == 'album' else 'single'

        chosen_date = payload.get('artists_chosen_date')
        if isinstance(chosen_date, str):
            chosen_date = parse_date(chosen_date)

        release = self.create({
            'title': title,
            'release_type': release_type,
            'primary_artist_id': primary_artist.id,
            'artists_chosen_date': chosen_date or False,
            'contact_email': payload.get('contact_email') or False,
            'contact_phone': payload.get('contact_phone') or False,
            'artist_credit_ids': [
                (0, 0, {'partner_id': artist.id, 'is_primary': index == 0})
                for index, artist in enumerate(artists)
            ],
        })

        AuditLog = self.env['label.audit.log']
        Partner = self.env['res.partner']
        for number, song in enumerate(valid_songs, start=1):
            if isinstance(song.get('artist_names'), list):
                track_artists = Partner._find_or_create_artists(song['artist_names'], cache=cache)
            else:
                track_artists = Partner._find_or_create_artists(
                    parse_artist_list(song.get('artist_name')), cache=cache)
            if not track_artists:
                track_artists = artists

            values = {
                'release_id': release.id,
                'name': song['name'].strip(),
                'track_number': number,
                'artist_credit_ids': [
                    (0, 0, {'partner_id': artist.id, 'is_primary': index == 0})
                    for index, artist in enumerate(track_artists)
                ],
            }
            for field_name in TRACK_TEXT_FIELDS:
                values[field_name] = song.get(field_name) or False
            track = self.env['music.track'].create(values)
            AuditLog._log('track', track.id, 'create', release=release,
                          new_value=json.dumps({'name': track.name, 'track_number': track.track_number}))

        AuditLog._log('release', release.id, 'create', release=release)
        _logger.info("Submission created release %s with %s tracks", release.id, len(valid_songs))
        return release

    def _get_status_overview(self):
        """Per platform distribution status, used by the public status page"""
        self.ensure_one()
        overview = {
            'release_id': self.id,
            'title': self.title,
            'artist': self.primary_artist_id.name,
            'release_type': self.release_type,
            'platforms': {},
        }
        for platform, __ in PLATFORMS:
            requests = self.platform_request_ids.filtered(lambda r: r.platform == platform)
            overview['platforms'][platform] = [{
                'status': request.status,
                'channel': request.channel_name or request.channel_id.name or None,
                'upload_link': request.upload_link or None,
                'uploaded_at': fields.Datetime.to_string(request.uploaded_at) if request.uploaded_at else None,
            } for request in requests.sorted('id')]
        return overview

    def action_view_tracks(self):
        """Smart button to view tracks"""
        return {
            'name': _('Tracks'),
            'type': 'ir.actions.act_window',
            'res_model': 'music.track',
            'view_mode': 'list,form',
            'domain': [('release_id', 'in', self.ids)],
        }

    def copy_data(self, default=None):
        vals_list = super().copy_data(default=default)
        if default and 'title' in default:
            return vals_list
        return [dict(vals, title=_("%s (Copy)", release.title)) for release, vals in zip(self, vals_list)]
