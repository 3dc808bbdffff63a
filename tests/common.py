# -*- coding: utf-8 -*-

import base64

from odoo.tests import new_test_user
from odoo.tests.common import TransactionCase

MODULE = 'label_release_distribution'


class LabelDistributionCase(TransactionCase):

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        cls.env = cls.env(context=dict(cls.env.context, tracking_disable=True))
        cls.Partner = cls.env['res.partner']
        cls.Release = cls.env['music.release']
        cls.Track = cls.env['music.track']
        cls.Request = cls.env['platform.request']
        cls.Channel = cls.env['platform.channel']
        cls.Employee = cls.env['hr.employee']
        cls.AuditLog = cls.env['label.audit.log']

        cls.artist_a = cls.Partner.create({'name': 'Phyo Lay', 'is_artist': True, 'legal_name': 'Phyo Lay Aung'})
        cls.artist_b = cls.Partner.create({'name': 'Bo Ae', 'is_artist': True})

        cls.manager_user = cls._create_user('label_manager', 'group_label_manager')
        cls.ar_user = cls._create_user('label_ar', 'group_label_ar')
        cls.data_user = cls._create_user('label_data', 'group_label_data_team')
        cls.youtube_user = cls._create_user('youtube_team', 'group_platform_youtube')
        cls.flow_user = cls._create_user('flow_team', 'group_platform_flow')

        cls.channel_main = cls.Channel.create({'name': 'Label Main', 'platform': 'youtube'})
        cls.channel_kids = cls.Channel.create({'name': 'Label Kids', 'platform': 'youtube'})

    @classmethod
    def _create_user(cls, login, group):
        return new_test_user(cls.env, login=login, groups='base.group_user,%s.%s' % (MODULE, group))

    def _create_release(self, title='Golden Hour', artist=None, tracks=1, **values):
        artist = artist or self.artist_a
        release = self.Release.create(dict({
            'title': title,
            'release_type': 'single' if tracks <= 1 else 'album',
            'primary_artist_id': artist.id,
            'artist_credit_ids': [(0, 0, {'partner_id': artist.id, 'is_primary': True})],
        }, **values))
        for number in range(1, tracks + 1):
            self.Track.create({
                'release_id': release.id,
                'track_number': number,
                'name': '%s %s' % (title, number),
                'genre': 'Pop',
                'artist_credit_ids': [(0, 0, {'partner_id': artist.id, 'is_primary': True})],
            })
        return release

    def _create_request(self, release, platform='youtube', status='pending', channel=None, **values):
        vals = dict({
            'release_id': release.id,
            'platform': platform,
            'requested': True,
            'status': status,
        }, **values)
        if channel:
            vals.update(channel_id=channel.id, channel_name=channel.name)
        return self.Request.create(vals)

    @staticmethod
    def _encode_csv(lines):
        return base64.b64encode('\n'.join(lines).encode('utf-8'))
