# -*- coding: utf-8 -*-

from odoo import models, fields, api, _
from odoo.exceptions import ValidationError


class MusicArtistCredit(models.Model):
    _name = 'music.artist.credit'
    _description = 'Artist Credit'
    _order = 'is_primary desc, id'

    partner_id = fields.Many2one('res.partner', string='Artist', required=True,
                                 index=True, ondelete='cascade', domain=[('is_artist', '=', True)])
    release_id = fields.Many2one('music.release', string='Release', index=True, ondelete='cascade')
    track_id = fields.Many2one('music.track', string='Track', index=True, ondelete='cascade')
    is_primary = fields.Boolean(string='Primary Artist', default=False)

    @api.constrains('release_id', 'track_id')
    def _check_credit_target(self):
        """A credit belongs to exactly one release or one track"""
        for credit in self:
            if bool(credit.release_id) == bool(credit.track_id):
                raise ValidationError(_('An artist credit must belong to either a release or a track.'))

    @api.constrains('partner_id', 'release_id', 'track_id')
    def _check_unique_credit(self):
        """Validate an artist is credited once per release and per track"""
        for credit in self:
            if credit.release_id:
                domain = [('release_id', '=', credit.release_id.id)]
                target = credit.release_id.display_name
            else:
                domain = [('track_id', '=', credit.track_id.id)]
                target = credit.track_id.name
            duplicate = self.search_count(domain + [
                ('partner_id', '=', credit.partner_id.id),
                ('id', '!=', credit.id),
            ])
            if duplicate:
                raise ValidationError(_('%(artist)s is already credited on %(target)s.',
                                        artist=credit.partner_id.name, target=target))
