# -*- coding: utf-8 -*-

from odoo import models, fields, api, _
from odoo.exceptions import UserError
from odoo.tools import escape_psql

from ..tools import artist_matching


class Partner(models.Model):
    _inherit = 'res.partner'

    # Artist
    is_artist = fields.Boolean(string='Is Artist', default=False, index=True)
    legal_name = fields.Char(string='Legal Name')

    # Catalog
    artist_credit_ids = fields.One2many('music.artist.credit', 'partner_id', string='Artist Credits')
    primary_release_ids = fields.One2many('music.release', 'primary_artist_id', string='Primary Releases')

    # Counts for Smart Buttons
    release_count = fields.Integer(string='Releases Count', compute='_compute_release_count')
    track_count = fields.Integer(string='Tracks Count', compute='_compute_track_count')

    @api.depends('primary_release_ids', 'artist_credit_ids.release_id')
    def _compute_release_count(self):
        for partner in self:
            partner.release_count = len(partner._get_artist_releases())

    @api.depends('artist_credit_ids.track_id')
    def _compute_track_count(self):
        for partner in self:
            partner.track_count = len(partner.artist_credit_ids.track_id)

    def _get_artist_releases(self):
        """Releases where the artist is primary or credited"""
        self.ensure_one()
        return self.primary_release_ids | self.artist_credit_ids.release_id

    @api.model
    def _find_or_create_artists(self, names, cache=None):
        """Resolve artist names to partners, creating the missing ones.

        Names are matched case-insensitively against existing artists and
        returned in input order. ``cache`` maps lowercased names to partners
        and is filled as names get resolved.
        """
        if cache is None:
            cache = {}
        artists = self.browse()
        for name in names or []:
            name = (name or '').strip()
            if not name:
                continue
            key = name.lower()
            artist = cache.get(key)
            if not artist:
                artist = self.search([('is_artist', '=', True), ('name', '=ilike', escape_psql(name))], limit=1)
                if not artist:
                    artist = self.create({'name': name, 'is_artist': True})
                cache[key] = artist
            artists |= artist
        return artists

    @api.model
    def _get_duplicate_threshold(self):
        return float(self.env['ir.config_parameter'].sudo().get_param(
            'label_release_distribution.duplicate_threshold', 0.85))

    def _artist_matching_data(self):
        return [{'id': artist.id, 'name': artist.name or '', 'legal_name': artist.legal_name or None}
                for artist in self]

    @api.model
    def find_duplicate_artists(self, threshold=None):
        """Pairs of artists that look like the same person, best matches first"""
        if threshold is None:
            threshold = self._get_duplicate_threshold()
        artists = self.search([('is_artist', '=', True)], order='name, id')
        return artist_matching.find_duplicate_artists(artists._artist_matching_data(), threshold)

    def action_find_duplicates(self, threshold=None):
        """Duplicates of this artist among all other artists"""
        self.ensure_one()
        if not self.is_artist:
            raise UserError(_('%s is not an artist.') % self.display_name)
        if threshold is None:
            threshold = self._get_duplicate_threshold()
        others = self.search([('is_artist', '=', True), ('id', '!=', self.id)], order='name, id')
        return artist_matching.find_duplicates_for_artist(
            self._artist_matching_data()[0], others._artist_matching_data(), threshold)

    def _get_merge_preview(self):
        """Releases and tracks touched when this artist is merged away"""
        self.ensure_one()
        releases = self._get_artist_releases()
        tracks = self.artist_credit_ids.track_id | releases.track_ids

        def _credits(credits):
            return [{
                'artist_id': credit.partner_id.id,
                'artist_name': credit.partner_id.name,
                'is_primary': credit.is_primary,
            } for credit in credits]

        return {
            'artist': {'id': self.id, 'name': self.name, 'legal_name': self.legal_name or None},
            'releases': [{
                'id': release.id,
                'title': release.title,
                'release_type': release.release_type,
                'primary_artist_id': release.primary_artist_id.id,
                'is_primary': release.primary_artist_id == self,
                'artists': _credits(release.artist_credit_ids),
            } for release in releases.sorted('id')],
            'tracks': [{
                'id': track.id,
                'name': track.name,
                'release_id': track.release_id.id,
                'release_title': track.release_id.title,
                'track_number': track.track_number,
                'artists': _credits(track.artist_credit_ids),
            } for track in tracks.sorted(lambda t: (t.release_id.id, t.track_number, t.id))],
        }

    def action_view_releases(self):
        """Smart button to view releases"""
        self.ensure_one()
        return {
            'name': _('Releases'),
            'type': 'ir.actions.act_window',
            'res_model': 'music.release',
            'view_mode': 'list,form',
            'domain': [('id', 'in', self._get_artist_releases().ids)],
        }
