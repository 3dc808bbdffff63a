# -*- coding: utf-8 -*-

import json
from datetime import datetime

from odoo.exceptions import AccessError, UserError
from odoo.tests import tagged

from .common import LabelDistributionCase

HEADER = ('Submission ID,Album/Single Name,Artist Name,Legal Name,Release Type,A&R,'
          'Song 1 Name,Song 1 Genre,Song 2 Name,YouTube Request,YouTube,YouTube Channel,Flow Request,Flow')
ROWS = [
    'S-1,Rain,Phyo Lay ft. Bo Ae,U Phyo,,Ko Ko [https://example.com/ko] (lead),First,Pop,Second,'
    'yes,Checked,"Label Main, Label Kids",yes,',
    'S-2,,Nobody,,,,,,,,,,,',
    'S-3,Solo,,,Single,,Only,,,,,,,Rejected',
]


@tagged('post_install', '-at_install')
class TestReleaseImport(LabelDistributionCase):

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        cls.Wizard = cls.env['release.csv.import']
        cls.Session = cls.env['release.import.session']
        cls.params = cls.env['ir.config_parameter'].sudo()

    def _start(self, lines, synchronous=True, filename='submissions.csv'):
        self.params.set_param('label_release_distribution.import_synchronous', 'True' if synchronous else 'False')
        wizard = self.Wizard.create({'file_data': self._encode_csv(lines), 'filename': filename})
        return wizard.action_start_import()

    def test_preview_creates_mapping_lines(self):
        wizard = self.Wizard.create({'file_data': self._encode_csv([HEADER] + ROWS), 'filename': 'a.csv'})
        preview = wizard.action_preview()
        self.assertEqual(wizard.state, 'preview')
        self.assertEqual(preview['total_rows'], 3)
        self.assertEqual(len(preview['sample_rows']), 3)
        self.assertEqual(len(wizard.mapping_line_ids), len(HEADER.split(',')))
        title_line = wizard.mapping_line_ids.filtered(lambda l: l.csv_column == 'Album/Single Name')
        self.assertEqual(title_line.target_field, 'release_title')
        self.assertEqual(preview['song_patterns']['name'], 'Song {n} Name')

    def test_import_requires_title_mapping(self):
        wizard = self.Wizard.create({'file_data': self._encode_csv(['Artist Name', 'Bo Ae']), 'filename': 'x.csv'})
        with self.assertRaises(UserError):
            wizard.action_start_import()

    def test_import_creates_releases(self):
        session = self._start([HEADER] + ROWS)
        self.assertEqual(session.state, 'completed')
        self.assertEqual(session.total_rows, 3)
        self.assertEqual(session.processed_rows, 3)
        self.assertEqual(session.releases_created, 2)
        self.assertEqual(session.tracks_created, 3)
        self.assertEqual(session.rows_skipped, 1)
        self.assertEqual(session.progress, 100.0)
        self.assertTrue(session.completed_at)
        failures = json.loads(session.failed_rows)
        self.assertEqual([failure['row'] for failure in failures], [2])

        rain = self.Release.search([('submission_id', '=', 'S-1')])
        self.assertEqual(rain.title, 'Rain')
        self.assertEqual(rain.release_type, 'album')
        self.assertEqual(rain.primary_artist_id, self.artist_a)
        self.assertEqual(self.artist_a.legal_name, 'U Phyo')
        self.assertEqual(rain.artist_credit_ids.partner_id, self.artist_a | self.artist_b)
        self.assertEqual(rain.artist_credit_ids.filtered('is_primary').partner_id, self.artist_a)
        self.assertEqual(rain.primary_ar_id.name, 'Ko Ko')
        self.assertEqual(rain.track_ids.sorted('track_number').mapped('name'), ['First', 'Second'])
        self.assertEqual(rain.import_session_id, session)

        youtube = rain.platform_request_ids.filtered(lambda r: r.platform == 'youtube')
        self.assertEqual(youtube.channel_id, self.channel_main | self.channel_kids)
        self.assertEqual(set(youtube.mapped('status')), {'uploaded'})
        flow = rain.platform_request_ids.filtered(lambda r: r.platform == 'flow')
        self.assertEqual(flow.status, 'pending')
        self.assertTrue(flow.requested)
        self.assertFalse(flow.channel_id)

        solo = self.Release.search([('submission_id', '=', 'S-3')])
        self.assertEqual(solo.primary_artist_id.name, 'Unknown Artist')
        self.assertEqual(solo.release_type, 'single')
        self.assertEqual(solo.platform_request_ids.status, 'rejected')
        self.assertFalse(solo.platform_request_ids.requested)

    def test_reimport_updates_by_submission_id(self):
        self._start([HEADER] + ROWS)
        session = self._start([HEADER] + ROWS, filename='again.csv')
        self.assertEqual(session.releases_created, 0)
        self.assertEqual(session.releases_updated, 2)
        rain = self.Release.search([('submission_id', '=', 'S-1')])
        self.assertEqual(len(rain), 1)
        self.assertEqual(len(rain.track_ids), 2)
        self.assertEqual(len(rain.platform_request_ids.filtered(lambda r: r.platform == 'youtube')), 2)

    def test_batches_and_scheduler(self):
        self.params.set_param('label_release_distribution.import_batch_size', '1')
        session = self._start([HEADER] + ROWS, synchronous=False)
        self.assertEqual(session.state, 'in_progress')
        self.assertEqual(session.processed_rows, 0)

        session.action_process_batch()
        self.assertEqual(session.processed_rows, 1)
        self.assertAlmostEqual(session.progress, 100 / 3, places=2)

        session.action_pause()
        self.Session._cron_process_sessions()
        self.assertEqual(session.processed_rows, 1)

        session.action_resume()
        self.Session._cron_process_sessions()
        self.Session._cron_process_sessions()
        self.assertEqual(session.state, 'completed')
        with self.assertRaises(UserError):
            session.action_cancel()

    def test_cancel(self):
        session = self._start([HEADER] + ROWS, synchronous=False)
        session.action_cancel()
        session.action_process_batch()
        self.assertEqual(session.state, 'cancelled')
        self.assertEqual(session.processed_rows, 0)

    def test_retry_failed_rows(self):
        session = self._start([HEADER] + ROWS)
        retry = session.action_retry_failed_rows()
        self.assertEqual(retry.total_rows, 1)
        self.assertEqual(retry.state, 'in_progress')
        self.assertEqual(json.loads(retry.rows_data)[0]['Submission ID'], 'S-2')

        clean = self._start([HEADER, ROWS[0]])
        with self.assertRaises(UserError):
            clean.action_retry_failed_rows()

    def test_delete_imported_releases(self):
        session = self._start([HEADER] + ROWS)
        with self.assertRaises(AccessError):
            session.with_user(self.data_user).action_delete_imported_releases()
        self.assertEqual(session.action_delete_imported_releases(), 2)
        self.assertFalse(self.Release.search([('submission_id', 'in', ['S-1', 'S-3'])]))

    def test_data_team_import_creates_ar_employees(self):
        self.params.set_param('label_release_distribution.import_synchronous', 'True')
        wizard = self.Wizard.with_user(self.data_user).create({
            'file_data': self._encode_csv([HEADER] + ROWS),
            'filename': 'team.csv',
        })
        session = wizard.action_start_import()
        self.assertEqual(session.state, 'completed')
        self.assertEqual(session.user_id, self.data_user)
        self.assertEqual(session.releases_created, 2)
        self.assertEqual([failure['row'] for failure in json.loads(session.failed_rows)], [2])

        rain = self.Release.search([('submission_id', '=', 'S-1')])
        self.assertEqual(rain.primary_ar_id.name, 'Ko Ko')
        self.assertTrue(rain.primary_ar_id.is_ar)
        self.assertEqual(len(rain.platform_request_ids), 3)

    def test_reimport_keeps_submission_date(self):
        self._start([HEADER] + ROWS)
        rain = self.Release.search([('submission_id', '=', 'S-1')])
        submitted = datetime(2023, 5, 1, 9, 0)
        rain.submitted_at = submitted
        self._start([HEADER] + ROWS, filename='again.csv')
        self.assertEqual(rain.submitted_at, submitted)
