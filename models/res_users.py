# -*- coding: utf-8 -*-

from odoo import models, fields

from ..const import (
    DEFAULT_LANDING_PAGE, LABEL_ROLES, PLATFORM_ROLES, PLATFORM_SUPERVISOR_ROLES,
    ROLE_GROUPS, ROLE_LANDING_PAGES,
)


class ResUsers(models.Model):
    _inherit = 'res.users'

    label_role = fields.Selection(LABEL_ROLES, string='Label Role', compute='_compute_label_role')

    def _compute_label_role(self):
        for user in self:
            user.label_role = user._get_label_role()

    def _get_label_role(self):
        """Role of the user in the label, highest privilege first"""
        self.ensure_one()
        if self._is_public() or self.share:
            return 'client'
        for role, xmlid in ROLE_GROUPS:
            if self.has_group(xmlid):
                return role
        return False

    def _get_landing_page(self):
        self.ensure_one()
        return ROLE_LANDING_PAGES.get(self._get_label_role(), DEFAULT_LANDING_PAGE)

    def _is_platform_team_member(self):
        self.ensure_one()
        return self._get_label_role() in PLATFORM_ROLES

    def _can_update_platform(self, platform):
        """Supervisors decide every platform, platform teams only their own"""
        self.ensure_one()
        role = self._get_label_role()
        if role in PLATFORM_SUPERVISOR_ROLES:
            return True
        return PLATFORM_ROLES.get(role) == platform

    def _is_label_admin(self):
        self.ensure_one()
        return self._get_label_role() == 'admin'

    def _is_label_manager(self):
        """Admins and managers"""
        self.ensure_one()
        return self._get_label_role() in ('admin', 'manager')
