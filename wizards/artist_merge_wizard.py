# -*- coding: utf-8 -*-

import json
import logging

from odoo import models, fields, api, _
from odoo.exceptions import AccessError, UserError, ValidationError

_logger = logging.getLogger(__name__)


class ArtistMergeWizard(models.TransientModel):
    _name = 'artist.merge.wizard'
    _description = 'Merge Duplicate Artists'

    source_artist_id = fields.Many2one('res.partner', string='Merge Artist', required=True,
                                       domain=[('is_artist', '=', True)], ondelete='cascade',
                                       help='Artist removed by the merge')
    target_artist_id = fields.Many2one('res.partner', string='Into Artist', required=True,
                                       domain=[('is_artist', '=', True)], ondelete='cascade')

    # Secondary Artist
    secondary_artist_id = fields.Many2one('res.partner', string='Secondary Artist',
                                          domain=[('is_artist', '=', True)], ondelete='set null')
    secondary_artist_name = fields.Char(string='New Secondary Artist',
                                        help='Created when no existing secondary artist is selected')

    # Primary flag overrides, JSON objects keyed by release / track id
    release_overrides = fields.Text(string='Release Primary Overrides', default='{}')
    track_overrides = fields.Text(string='Track Primary Overrides', default='{}')

    preview_data = fields.Text(string='Merge Preview', compute='_compute_preview_data')

    @api.depends('source_artist_id')
    def _compute_preview_data(self):
        for wizard in self:
            if wizard.source_artist_id:
                wizard.preview_data = json.dumps(wizard.source_artist_id._get_merge_preview(), indent=2)
            else:
                wizard.preview_data = False

    @api.constrains('source_artist_id', 'target_artist_id')
    def _check_distinct_artists(self):
        """Validate an artist is not merged into itself"""
        for wizard in self:
            if wizard.source_artist_id == wizard.target_artist_id:
                raise ValidationError(_('Source and target artists must be different'))

    def _load_overrides(self, value):
        return {int(key): bool(flag) for key, flag in json.loads(value or '{}').items()}

    def _get_secondary_artist(self):
        self.ensure_one()
        if self.secondary_artist_id:
            return self.secondary_artist_id
        name = (self.secondary_artist_name or '').strip()
        if name:
            return self.env['res.partner'].create({'name': name, 'is_artist': True})
        return self.env['res.partner']

    def action_merge(self):
        """Move every release, track and credit of the source artist to the target and delete the source"""
        self.ensure_one()
        if not self.env.user._is_label_manager():
            raise AccessError(_('Only administrators and managers can merge artists.'))
        source, target = self.source_artist_id, self.target_artist_id
        if source == target:
            raise UserError(_('Source and target artists must be different'))

        release_overrides = self._load_overrides(self.release_overrides)
        track_overrides = self._load_overrides(self.track_overrides)
        secondary = self._get_secondary_artist()
        Credit = self.env['music.artist.credit']
        affected_tracks = self.env['music.track']

        # 1. Releases owned by the source
        releases = source.with_context(active_test=False).primary_release_ids
        source_name, source_legal_name = source.name, source.legal_name
        for release in releases:
            affected_tracks |= release.track_ids
            for track in release.track_ids:
                if target not in track.artist_credit_ids.partner_id:
                    Credit.create({
                        'track_id': track.id,
                        'partner_id': target.id,
                        'is_primary': track_overrides.get(track.id, True),
                    })
        releases.write({'primary_artist_id': target.id})

        # 2. Track credits
        track_credits = source.artist_credit_ids.filtered('track_id')
        track_credit_count = len(track_credits)
        affected_tracks |= track_credits.track_id
        for credit in track_credits:
            track = credit.track_id
            is_primary = track_overrides.get(track.id, credit.is_primary)
            if target in track.artist_credit_ids.partner_id:
                credit.unlink()
            else:
                credit.write({'partner_id': target.id, 'is_primary': is_primary})

        # 3. Release credits
        release_credits = source.artist_credit_ids.filtered('release_id')
        release_credit_count = len(release_credits)
        for credit in release_credits:
            release = credit.release_id
            affected_tracks |= release.track_ids
            is_primary = release_overrides.get(release.id, credit.is_primary)
            if target in release.artist_credit_ids.partner_id:
                credit.unlink()
            else:
                credit.write({'partner_id': target.id, 'is_primary': is_primary})

        # 4. Secondary artist on tracks that have a primary credit
        secondary_added = 0
        if secondary:
            for track in affected_tracks:
                credits = track.artist_credit_ids
                if credits.filtered('is_primary') and secondary not in credits.partner_id:
                    Credit.create({'track_id': track.id, 'partner_id': secondary.id, 'is_primary': False})
                    secondary_added += 1

        # 5. Audit and removal
        new_value = _('Merged into artist: %(name)s (%(id)s)', name=target.name, id=target.id)
        if secondary:
            new_value += _(' with secondary artist added to %s tracks', len(affected_tracks))
        self.env['label.audit.log']._log(
            'artist', source.id, 'merge',
            old_value=json.dumps({
                'name': source_name,
                'legal_name': source_legal_name or None,
                'releases_count': len(releases),
                'track_credits_count': track_credit_count,
            }),
            new_value=new_value)
        source.unlink()
        _logger.info("Merged artist %s into %s (%s releases, %s tracks)",
                     source_name, target.name, len(releases), len(affected_tracks))

        return {
            'releases_transferred': len(releases),
            'track_credits_transferred': track_credit_count,
            'release_credits_transferred': release_credit_count,
            'tracks_affected': len(affected_tracks),
            'secondary_artist_added': secondary_added,
        }
