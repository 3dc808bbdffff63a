# -*- coding: utf-8 -*-

from odoo import models, fields, api, _
from odoo.exceptions import ValidationError

from ..tools import csv_heuristics


class ReleaseImportMappingLine(models.TransientModel):
    _name = 'release.import.mapping.line'
    _description = 'Release Import Column Mapping'
    _order = 'sequence, id'

    wizard_id = fields.Many2one('release.csv.import', string='Import Wizard', required=True,
                                ondelete='cascade')
    sequence = fields.Integer(string='Sequence', default=10)
    csv_column = fields.Char(string='CSV Column', required=True)
    target_field = fields.Char(string='Target Field', help='Leave empty to ignore the column')
    field_type = fields.Selection([
        (csv_heuristics.SUBMISSION, 'Release'),
        (csv_heuristics.SONG, 'Song'),
    ], string='Field Type', default=csv_heuristics.SUBMISSION, required=True)
    song_index = fields.Integer(string='Song Number')

    @api.constrains('target_field', 'field_type')
    def _check_target_field(self):
        """Validate song columns map onto a song field"""
        for line in self:
            if line.field_type == csv_heuristics.SONG and line.target_field \
                    and line.target_field not in csv_heuristics.SONG_FIELDS:
                raise ValidationError(_('%(field)s is not a song field (column %(column)s).',
                                        field=line.target_field, column=line.csv_column))

    def _to_mapping(self):
        """Mapping dict in the shape the column heuristics work with"""
        return [{
            'csv_column': line.csv_column,
            'target_field': line.target_field or None,
            'field_type': line.field_type,
            'song_index': line.song_index or None,
        } for line in self]
