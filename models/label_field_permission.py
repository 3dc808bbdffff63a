# -*- coding: utf-8 -*-

from odoo import models, fields, api, _
from odoo.exceptions import ValidationError

from ..const import (
    CLIENT_VIEWABLE_FIELDS, FIELD_PERMISSION_ENTITIES, LABEL_ROLES, PLATFORM_FIELD_KEYWORDS,
)


class LabelFieldPermission(models.Model):
    _name = 'label.field.permission'
    _description = 'Field Permission Override'
    _order = 'entity_type, field_name, role'

    field_name = fields.Char(string='Field', required=True)
    entity_type = fields.Selection(FIELD_PERMISSION_ENTITIES, string='Entity', required=True)
    role = fields.Selection(LABEL_ROLES, string='Role', required=True)
    can_view = fields.Boolean(string='Can View', default=True)
    can_edit = fields.Boolean(string='Can Edit', default=False)
    is_required = fields.Boolean(string='Required', default=False)

    @api.constrains('field_name', 'entity_type', 'role')
    def _check_unique_override(self):
        """One override per field, entity and role"""
        for permission in self:
            duplicate = self.search_count([
                ('field_name', '=', permission.field_name),
                ('entity_type', '=', permission.entity_type),
                ('role', '=', permission.role),
                ('id', '!=', permission.id),
            ])
            if duplicate:
                raise ValidationError(_('A permission for %(field)s on %(entity)s already exists for this role.',
                                        field=permission.field_name, entity=permission.entity_type))

    @api.model
    def _default_permission(self, field_name, role):
        if role in ('admin', 'manager', 'a_r', 'data_team'):
            return {'can_view': True, 'can_edit': True, 'is_required': False}
        if role == 'client':
            return {'can_view': field_name in CLIENT_VIEWABLE_FIELDS, 'can_edit': False, 'is_required': False}
        if role in PLATFORM_FIELD_KEYWORDS:
            lowered = field_name.lower()
            if any(keyword in lowered for keyword in PLATFORM_FIELD_KEYWORDS[role]):
                return {'can_view': True, 'can_edit': True, 'is_required': False}
        return {'can_view': True, 'can_edit': False, 'is_required': False}

    @api.model
    def get_permission(self, field_name, entity_type, role):
        """Stored override for the field, else the role default"""
        override = self.search([
            ('field_name', '=', field_name),
            ('entity_type', '=', entity_type),
            ('role', '=', role),
        ], limit=1)
        if override:
            return {
                'can_view': override.can_view,
                'can_edit': override.can_edit,
                'is_required': override.is_required,
            }
        return self._default_permission(field_name, role)
