# -*- coding: utf-8 -*-

from odoo.exceptions import ValidationError
from odoo.tests import new_test_user, tagged

from .common import LabelDistributionCase


@tagged('post_install', '-at_install')
class TestLabelRoles(LabelDistributionCase):

    def test_roles_and_landing_pages(self):
        self.assertEqual(self.env.user.label_role, 'admin')
        self.assertEqual(self.manager_user.label_role, 'manager')
        self.assertEqual(self.ar_user.label_role, 'a_r')
        self.assertEqual(self.data_user.label_role, 'data_team')
        self.assertEqual(self.youtube_user.label_role, 'platform_youtube')

        self.assertEqual(self.ar_user._get_landing_page(), '/ar/releases')
        self.assertEqual(self.youtube_user._get_landing_page(), '/platforms/youtube')
        self.assertEqual(self.manager_user._get_landing_page(), '/dashboard')

        portal = new_test_user(self.env, login='label_client', groups='base.group_portal')
        self.assertEqual(portal.label_role, 'client')
        self.assertEqual(portal._get_landing_page(), '/submit')

        plain = new_test_user(self.env, login='label_plain', groups='base.group_user')
        self.assertFalse(plain.label_role)
        self.assertEqual(plain._get_landing_page(), '/dashboard')

    def test_platform_permissions(self):
        self.assertTrue(self.youtube_user._can_update_platform('youtube'))
        self.assertFalse(self.youtube_user._can_update_platform('flow'))
        self.assertTrue(self.ar_user._can_update_platform('flow'))
        self.assertTrue(self.manager_user._is_label_manager())
        self.assertFalse(self.manager_user._is_label_admin())
        self.assertTrue(self.env.user._is_label_admin())

    def test_default_field_permissions(self):
        Permission = self.env['label.field.permission']
        full = {'can_view': True, 'can_edit': True, 'is_required': False}
        view_only = {'can_view': True, 'can_edit': False, 'is_required': False}

        self.assertEqual(Permission.get_permission('title', 'release', 'data_team'), full)
        self.assertEqual(Permission.get_permission('genre', 'track', 'client')['can_view'], True)
        self.assertEqual(Permission.get_permission('payment_remarks', 'release', 'client'),
                         {'can_view': False, 'can_edit': False, 'is_required': False})
        self.assertEqual(Permission.get_permission('channel_name', 'platform_request', 'platform_youtube'), full)
        self.assertEqual(Permission.get_permission('youtube_status', 'release', 'platform_youtube'), full)
        self.assertEqual(Permission.get_permission('title', 'release', 'platform_youtube'), view_only)
        self.assertEqual(Permission.get_permission('tiktok_status', 'release', 'platform_flow'), view_only)

    def test_field_permission_override(self):
        Permission = self.env['label.field.permission']
        Permission.create({
            'field_name': 'notes', 'entity_type': 'release', 'role': 'a_r',
            'can_view': True, 'can_edit': False, 'is_required': True,
        })
        self.assertEqual(Permission.get_permission('notes', 'release', 'a_r'),
                         {'can_view': True, 'can_edit': False, 'is_required': True})
        self.assertTrue(Permission.get_permission('notes', 'release', 'manager')['can_edit'])
        with self.assertRaises(ValidationError):
            Permission.create({'field_name': 'notes', 'entity_type': 'release', 'role': 'a_r'})

    def test_audit_log_skips_public_user(self):
        public = self.env.ref('base.public_user')
        self.assertFalse(self.AuditLog.with_user(public)._log('release', 1, 'update'))
        entry = self.AuditLog._log('release', 1, 'update', field_name='title', old_value=None, new_value=3)
        self.assertEqual(entry.user_id, self.env.user)
        self.assertFalse(entry.old_value)
        self.assertEqual(entry.new_value, '3')
