# -*- coding: utf-8 -*-

from odoo import fields
from odoo.exceptions import UserError
from odoo.tests import tagged

from .common import LabelDistributionCase


@tagged('post_install', '-at_install')
class TestLabelAnalytics(LabelDistributionCase):

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        cls.Analytics = cls.env['label.analytics']
        cls.ar_employee = cls.env['hr.employee'].create({'name': 'Analytics A&R', 'is_ar': True})

    def setUp(self):
        super().setUp()
        self.album = self._create_release('Album', tracks=2)
        self.single = self._create_release('Single', artist=self.artist_b, tracks=1,
                                           primary_ar_id=self.ar_employee.id, copyright_status='cover')
        self._create_request(self.album, 'youtube', 'uploaded', channel=self.channel_main,
                             uploaded_at=fields.Datetime.now())
        self._create_request(self.album, 'flow', 'pending')
        self._create_request(self.single, 'tiktok', 'rejected')

    def test_kpis(self):
        kpi = self.Analytics.get_dashboard_data(widget='kpi')
        self.assertEqual(kpi['total_releases'], 2)
        self.assertEqual(kpi['total_tracks'], 3)
        self.assertEqual(kpi['upload_success_rate'], 33.33)
        self.assertEqual(kpi['active_artists'], 2)
        self.assertEqual(kpi['platform_coverage'], 1.5)
        self.assertEqual(kpi['processing_velocity'], 0)
        self.assertEqual(kpi['pending_releases'], 1)
        self.assertEqual(kpi['rejected_releases'], 1)

    def test_velocity_defaults_to_thirty_days(self):
        today = fields.Date.today()
        kpi = self.Analytics.get_dashboard_data({'date_to': fields.Date.to_string(today)}, widget='kpi')
        self.assertEqual(kpi['processing_velocity'], round(2 / 30, 2))

    def test_filters(self):
        kpi = self.Analytics.get_dashboard_data({'release_type': 'album'}, widget='kpi')
        self.assertEqual(kpi['total_releases'], 1)
        kpi = self.Analytics.get_dashboard_data({'artist_ids': [self.artist_b.id]}, widget='kpi')
        self.assertEqual(kpi['total_tracks'], 1)
        platforms = self.Analytics.get_dashboard_data({'platform': 'flow,tiktok'}, widget='platform')
        self.assertEqual({metrics['platform'] for metrics in platforms}, {'flow', 'tiktok'})

    def test_dashboard_sections(self):
        data = self.Analytics.get_dashboard_data()
        self.assertEqual(set(data), {'kpi', 'distribution', 'platform', 'artist', 'ar_efficiency',
                                     'content', 'pipeline', 'trends'})

        youtube = next(m for m in data['platform'] if m['platform'] == 'youtube')
        self.assertEqual(youtube['success_rate'], 100.0)
        self.assertEqual(youtube['uploaded'], 1)

        self.assertEqual(data['pipeline']['pending'], 1)
        self.assertEqual(data['pipeline']['bottleneck_platforms'], [{'platform': 'flow', 'pending_count': 1}])

        self.assertEqual(len(data['artist']), 2)
        self.assertEqual(data['ar_efficiency'][0]['employee_id'], self.ar_employee.id)
        self.assertEqual(data['ar_efficiency'][0]['release_count'], 1)

        content = data['content']
        self.assertEqual({item['type']: item['count'] for item in content['release_types']},
                         {'album': 1, 'single': 1})
        self.assertEqual(content['genres'], [{'genre': 'Pop', 'count': 3}])
        self.assertIn({'status': 'cover', 'count': 1}, content['copyright_status'])

        self.assertEqual(len(data['distribution']), 1)
        point = data['distribution'][0]
        self.assertEqual((point['releases'], point['tracks'], point['uploaded']), (2, 3, 1))

        self.assertEqual(len(data['trends']), 1)
        self.assertEqual(data['trends'][0]['growth_rate'], 0.0)

    def test_invalid_widget(self):
        with self.assertRaises(UserError):
            self.Analytics.get_dashboard_data(widget='revenue')
        with self.assertRaises(UserError):
            self.Analytics.get_dashboard_data(widget='trends', period='year')
