# -*- coding: utf-8 -*-

from odoo.exceptions import ValidationError
from odoo.tests import tagged

from .common import LabelDistributionCase


@tagged('post_install', '-at_install')
class TestLabelSettings(LabelDistributionCase):

    def test_threshold_range(self):
        Settings = self.env['res.config.settings']
        for value in (-0.1, 1.5):
            with self.assertRaises(ValidationError):
                Settings.create({'label_duplicate_threshold': value})

        Settings.create({'label_duplicate_threshold': 0.7, 'label_import_batch_size': 5}).execute()
        params = self.env['ir.config_parameter'].sudo()
        self.assertEqual(float(params.get_param('label_release_distribution.duplicate_threshold')), 0.7)
        self.assertEqual(self.env['release.import.session']._get_batch_size(), 5)

    def test_batch_size_must_be_positive(self):
        Settings = self.env['res.config.settings']
        for value in (0, -3):
            with self.assertRaises(ValidationError):
                Settings.create({'label_import_batch_size': value})
