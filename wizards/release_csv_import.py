# -*- coding: utf-8 -*-

import base64
import hashlib
import json
import logging

from odoo import models, fields, api, _
from odoo.exceptions import UserError

from ..tools import csv_heuristics

_logger = logging.getLogger(__name__)


class ReleaseCsvImport(models.TransientModel):
    _name = 'release.csv.import'
    _description = 'Release Spreadsheet Import Wizard'

    # File Upload
    file_data = fields.Binary(string='Spreadsheet', required=True,
                              help='CSV export of the release submission form')
    filename = fields.Char(string='File Name')

    # File Analysis
    file_delimiter = fields.Selection([
        (',', 'Comma (,)'),
        (';', 'Semicolon (;)'),
        ('\t', 'Tab'),
        ('|', 'Pipe (|)')
    ], string='Delimiter', default=',')
    encoding = fields.Selection([
        ('utf-8', 'UTF-8'),
        ('latin-1', 'Latin-1'),
        ('cp1252', 'Windows-1252')
    ], string='File Encoding', default='utf-8')

    # Preview & Mapping
    preview_data = fields.Text(string='Preview Data', readonly=True)
    mapping_line_ids = fields.One2many('release.import.mapping.line', 'wizard_id', string='Column Mappings')
    state = fields.Selection([
        ('draft', 'Upload'),
        ('preview', 'Preview'),
        ('started', 'Started'),
    ], string='State', default='draft')

    session_id = fields.Many2one('release.import.session', string='Import Session', readonly=True)

    def _decode_file(self):
        self.ensure_one()
        if not self.file_data:
            raise UserError(_('Please upload a file first'))
        raw = base64.b64decode(self.file_data)
        try:
            content = raw.decode(self.encoding or 'utf-8')
        except UnicodeDecodeError as e:
            raise UserError(_('Could not read the file as %(encoding)s: %(error)s',
                              encoding=self.encoding, error=e))
        return raw, content.lstrip('\ufeff')

    def _parse_file(self):
        raw, content = self._decode_file()
        headers, rows = csv_heuristics.parse_csv(content, delimiter=self.file_delimiter or ',')
        if not headers:
            raise UserError(_('File appears to be empty'))
        return raw, headers, rows

    def action_preview(self):
        """Read the header and first rows and guess the column mapping"""
        self.ensure_one()
        __, headers, rows = self._parse_file()
        mappings = csv_heuristics.auto_detect_mappings(headers)
        preview = {
            'header': headers,
            'sample_rows': [[row.get(header, '') for header in headers] for row in rows[:5]],
            'total_rows': len(rows),
            'mappings': mappings,
            'song_patterns': csv_heuristics.build_song_patterns(mappings),
        }
        self.mapping_line_ids.unlink()
        self.write({
            'preview_data': json.dumps(preview, indent=2, default=str),
            'state': 'preview',
            'mapping_line_ids': [(0, 0, {
                'sequence': position,
                'csv_column': mapping['csv_column'],
                'target_field': mapping['target_field'] or False,
                'field_type': mapping['field_type'],
                'song_index': mapping['song_index'] or 0,
            }) for position, mapping in enumerate(mappings)],
        })
        return preview

    def action_start_import(self):
        """Create the import session from the reviewed mapping"""
        self.ensure_one()
        raw, headers, rows = self._parse_file()
        if self.mapping_line_ids:
            mappings = self.mapping_line_ids._to_mapping()
        else:
            mappings = csv_heuristics.auto_detect_mappings(headers)
        if not any(mapping['target_field'] == 'release_title' for mapping in mappings):
            raise UserError(_('Map a column to the release title before importing.'))

        session = self.env['release.import.session'].create({
            'name': self.filename or _('Release import'),
            'file_hash': hashlib.sha256(raw).hexdigest(),
            'rows_data': json.dumps(rows),
            'mapping_data': json.dumps(mappings),
            'total_rows': len(rows),
        })
        self.write({'session_id': session.id, 'state': 'started'})
        _logger.info("Import session %s started for %s (%s rows)", session.id, session.name, len(rows))

        synchronous = self.env['ir.config_parameter'].sudo().get_param(
            'label_release_distribution.import_synchronous')
        if synchronous and synchronous not in ('False', '0'):
            session.action_process_all()
        return session
