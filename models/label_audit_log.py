# -*- coding: utf-8 -*-

import logging

from odoo import models, fields, api

from ..const import AUDIT_ACTIONS

_logger = logging.getLogger(__name__)


class LabelAuditLog(models.Model):
    _name = 'label.audit.log'
    _description = 'Label Audit Log'
    _order = 'timestamp desc, id desc'

    user_id = fields.Many2one('res.users', string='User', required=True, index=True, ondelete='cascade')
    release_id = fields.Many2one('music.release', string='Release', index=True, ondelete='set null')
    entity_type = fields.Char(string='Entity Type', required=True, index=True)
    entity_id = fields.Integer(string='Entity ID', index=True)
    action = fields.Selection(AUDIT_ACTIONS, string='Action', required=True)
    field_name = fields.Char(string='Field')
    old_value = fields.Text(string='Old Value')
    new_value = fields.Text(string='New Value')
    timestamp = fields.Datetime(string='Timestamp', default=fields.Datetime.now, required=True, index=True)

    @api.model
    def _log(self, entity_type, entity_id, action, release=None, field_name=None,
             old_value=None, new_value=None):
        """Record a change made by the current user.

        Anonymous changes (public submissions) are not recorded. A failing
        entry is logged and never breaks the change it describes.
        """
        user = self.env.user
        if not user or user._is_public():
            return self.browse()
        values = {
            'user_id': user.id,
            'release_id': release.id if release else False,
            'entity_type': entity_type,
            'entity_id': entity_id,
            'action': action,
            'field_name': field_name or False,
            'old_value': False if old_value is None else str(old_value),
            'new_value': False if new_value is None else str(new_value),
        }
        try:
            with self.env.cr.savepoint():
                return self.sudo().create(values)
        except Exception:
            _logger.warning("Could not write audit entry for %s %s", entity_type, entity_id, exc_info=True)
            return self.browse()
