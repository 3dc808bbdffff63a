# -*- coding: utf-8 -*-

from datetime import date

from odoo.tests import tagged
from odoo.tests.common import TransactionCase

from ..tools import csv_heuristics


@tagged('post_install', '-at_install')
class TestCsvHeuristics(TransactionCase):

    def test_normalize_column_name(self):
        self.assertEqual(csv_heuristics.normalize_column_name("Artist's Chosen Date"), 'artists_chosen_date')
        self.assertEqual(csv_heuristics.normalize_column_name(' Song 1 - Name '), 'song_1_name')

    def test_parse_csv_keys_rows_by_both_spellings(self):
        headers, rows = csv_heuristics.parse_csv('Release Title,Artist Name\n"Hello, World",Bo Ae\n\n')
        self.assertEqual(headers, ['Release Title', 'Artist Name'])
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]['Release Title'], 'Hello, World')
        self.assertEqual(rows[0]['release_title'], 'Hello, World')

    def test_parse_csv_empty(self):
        self.assertEqual(csv_heuristics.parse_csv('  \n'), ([], []))

    def test_parse_artist_list(self):
        self.assertEqual(csv_heuristics.parse_artist_list('42 (Ft - Phyo Lay, Bo Ae)'), ['42', 'Phyo Lay', 'Bo Ae'])
        self.assertEqual(csv_heuristics.parse_artist_list('A feat. B & C / D'), ['A', 'B', 'C', 'D'])
        self.assertEqual(csv_heuristics.parse_artist_list('X | Y, Z'), ['X', 'Y', 'Z'])
        self.assertEqual(csv_heuristics.parse_artist_list('Swift Band'), ['Swift Band'])
        self.assertEqual(csv_heuristics.parse_artist_list('  '), [])

    def test_clean_ar_name(self):
        self.assertEqual(csv_heuristics.clean_ar_name('Ko Ko [https://example.com/profile] (lead)'), 'Ko Ko')
        self.assertEqual(csv_heuristics.clean_ar_name(None), '')

    def test_parse_date(self):
        self.assertEqual(csv_heuristics.parse_date('2024-03-05'), date(2024, 3, 5))
        self.assertIsNone(csv_heuristics.parse_date('not a date'))
        self.assertIsNone(csv_heuristics.parse_date(''))
        self.assertEqual(csv_heuristics.parse_date('2024-03-05 10:30', with_time=True).hour, 10)

    def test_auto_detect_mappings(self):
        mappings = csv_heuristics.auto_detect_mappings([
            'Submission ID', 'Album/Single Name', 'Artist Name', 'Song 1 Name', 'Song 2 Composer',
            'YouTube Request', 'YouTube', 'YouTube Channel', 'A&R', 'Mystery Column',
        ])
        by_column = {mapping['csv_column']: mapping for mapping in mappings}
        self.assertEqual(by_column['Submission ID']['target_field'], 'submission_id')
        self.assertEqual(by_column['Album/Single Name']['target_field'], 'release_title')
        self.assertEqual(by_column['Artist Name']['target_field'], 'artist_name')
        self.assertEqual(by_column['Song 1 Name']['target_field'], 'name')
        self.assertEqual(by_column['Song 1 Name']['field_type'], csv_heuristics.SONG)
        self.assertEqual(by_column['Song 1 Name']['song_index'], 1)
        self.assertEqual(by_column['Song 2 Composer']['target_field'], 'composer')
        self.assertEqual(by_column['Song 2 Composer']['song_index'], 2)
        self.assertEqual(by_column['YouTube Request']['target_field'], 'youtube_request')
        self.assertEqual(by_column['YouTube']['target_field'], 'youtube_status')
        self.assertEqual(by_column['YouTube Channel']['target_field'], 'youtube_channel')
        self.assertEqual(by_column['A&R']['target_field'], 'assigned_ar')
        self.assertIsNone(by_column['Mystery Column']['target_field'])

    def test_build_song_patterns(self):
        mappings = csv_heuristics.auto_detect_mappings(['Song 1 Name', 'Song 2 Name', 'Song 1 Genre'])
        patterns = csv_heuristics.build_song_patterns(mappings)
        self.assertEqual(patterns['name'], 'Song {n} Name')
        self.assertEqual(patterns['genre'], 'Song {n} Genre')

    def test_extract_submission_and_songs(self):
        headers, rows = csv_heuristics.parse_csv('\n'.join([
            'Album/Single Name,Release Type,Artist\'s Chosen Date,Copyright Status,Vuclip,'
            'Song 1 Name,Song 1 Genre,Song 2 Name,Song 3 Name',
            'Rain,,2024-01-02,Original Song,yes,First,Pop,Second,',
        ]))
        mappings = csv_heuristics.auto_detect_mappings(headers)
        submission = csv_heuristics.extract_submission(rows[0], mappings)
        self.assertEqual(submission['release_title'], 'Rain')
        self.assertNotIn('release_type', submission)
        self.assertEqual(submission['artists_chosen_date'], date(2024, 1, 2))
        self.assertEqual(submission['copyright_status'], 'original')
        self.assertEqual(submission['raw_row']['unmapped_fields'], {'vuclip': 'yes'})

        songs = csv_heuristics.extract_songs(rows[0], mappings)
        self.assertEqual([song['name'] for song in songs], ['First', 'Second'])
        self.assertEqual(songs[0]['genre'], 'Pop')

    def test_parse_platform_status(self):
        self.assertEqual(csv_heuristics.parse_platform_status('Uploaded'), 'uploaded')
        self.assertEqual(csv_heuristics.parse_platform_status('yes'), 'uploaded')
        self.assertEqual(csv_heuristics.parse_platform_status('Approved by team'), 'uploaded')
        self.assertEqual(csv_heuristics.parse_platform_status('Rejected'), 'rejected')
        self.assertEqual(csv_heuristics.parse_platform_status(''), 'pending')
        self.assertTrue(csv_heuristics.is_checked('Checked'))
        self.assertFalse(csv_heuristics.is_checked('pending'))
