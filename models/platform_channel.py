# -*- coding: utf-8 -*-

from odoo import models, fields, api
from odoo.tools import escape_psql

from ..const import PLATFORMS


class PlatformChannel(models.Model):
    _name = 'platform.channel'
    _description = 'Distribution Channel'
    _order = 'platform, name'

    name = fields.Char(string='Channel Name', required=True)
    platform = fields.Selection(PLATFORMS, string='Platform', required=True, index=True)
    external_channel_id = fields.Char(string='External Channel ID',
                                      help='Identifier of the channel on the platform itself')
    request_ids = fields.One2many('platform.request', 'channel_id', string='Requests')

    active = fields.Boolean(string='Active', default=True)

    @api.model
    def _find_or_create(self, platform, name, cache=None):
        """Channel of ``platform`` named ``name``, created when missing"""
        name = (name or '').strip()
        if not name:
            return self.browse()
        key = (platform, name.lower())
        if cache is not None and key in cache:
            return cache[key]
        channel = self.with_context(active_test=False).search([
            ('platform', '=', platform),
            ('name', '=ilike', escape_psql(name)),
        ], limit=1)
        if not channel:
            channel = self.create({'platform': platform, 'name': name, 'active': True})
        if cache is not None:
            cache[key] = channel
        return channel
