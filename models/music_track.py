# -*- coding: utf-8 -*-

from odoo import models, fields, api, _
from odoo.exceptions import ValidationError


class MusicTrack(models.Model):
    _name = 'music.track'
    _description = 'Release Track'
    _order = 'release_id, track_number, id'

    release_id = fields.Many2one('music.release', string='Release', required=True,
                                 index=True, ondelete='cascade')
    track_number = fields.Integer(string='Track Number', default=1)
    name = fields.Char(string='Song Name', required=True)

    # Credits
    performer = fields.Char(string='Performer')
    composer = fields.Char(string='Composer')
    band = fields.Char(string='Band')
    music_producer = fields.Char(string='Music Producer')
    studio = fields.Char(string='Studio')
    record_label = fields.Char(string='Record Label')
    genre = fields.Char(string='Genre', index=True)

    artist_credit_ids = fields.One2many('music.artist.credit', 'track_id', string='Artists')
    primary_artist_id = fields.Many2one('res.partner', string='Primary Artist',
                                        compute='_compute_primary_artist_id')

    @api.depends('artist_credit_ids.is_primary', 'artist_credit_ids.partner_id')
    def _compute_primary_artist_id(self):
        for track in self:
            primary = track.artist_credit_ids.filtered('is_primary')[:1]
            track.primary_artist_id = primary.partner_id or track.release_id.primary_artist_id

    @api.constrains('track_number')
    def _check_track_number(self):
        """Track numbers start at 1"""
        for track in self:
            if track.track_number < 1:
                raise ValidationError(_('Track number must be positive'))
