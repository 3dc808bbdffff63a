# -*- coding: utf-8 -*-

from odoo import models, fields, api, _
from odoo.exceptions import ValidationError


class ResConfigSettings(models.TransientModel):
    _inherit = 'res.config.settings'

    # Artist Matching
    label_duplicate_threshold = fields.Float(
        string='Duplicate Artist Threshold',
        default=0.85,
        config_parameter='label_release_distribution.duplicate_threshold',
        help='Minimum name similarity for two artists to be reported as duplicates (0.0 - 1.0)'
    )

    # File Import Settings
    label_import_batch_size = fields.Integer(
        string='Import Batch Size',
        default=20,
        config_parameter='label_release_distribution.import_batch_size',
        help='Number of spreadsheet rows processed per batch'
    )

    label_import_synchronous = fields.Boolean(
        string='Process Imports Immediately',
        default=False,
        config_parameter='label_release_distribution.import_synchronous',
        help='Process the whole file when the import starts instead of leaving it to the scheduler'
    )

    label_placeholder_artist = fields.Char(
        string='Placeholder Artist',
        default='Unknown Artist',
        config_parameter='label_release_distribution.placeholder_artist',
        help='Artist used for imported rows without an artist name'
    )

    @api.constrains('label_duplicate_threshold')
    def _check_threshold_values(self):
        """Validate threshold values are between 0 and 1"""
        for record in self:
            if not (0 <= record.label_duplicate_threshold <= 1):
                raise ValidationError(_('Duplicate artist threshold must be between 0.0 and 1.0'))

    @api.constrains('label_import_batch_size')
    def _check_import_batch_size(self):
        for record in self:
            if record.label_import_batch_size <= 0:
                raise ValidationError(_('Import batch size must be positive'))
