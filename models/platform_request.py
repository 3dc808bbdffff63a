# -*- coding: utf-8 -*-

import logging

from odoo import models, fields, api, _
from odoo.exceptions import AccessError, UserError

from ..const import CHANNEL_PLATFORMS, PLATFORMS, REQUEST_STATUSES

_logger = logging.getLogger(__name__)

STATUS_KEYS = [status for status, __ in REQUEST_STATUSES]


class PlatformRequest(models.Model):
    _name = 'platform.request'
    _description = 'Platform Distribution Request'
    _order = 'release_id, platform, id'

    release_id = fields.Many2one('music.release', string='Release', required=True,
                                 index=True, ondelete='cascade')
    platform = fields.Selection(PLATFORMS, string='Platform', required=True, index=True)
    requested = fields.Boolean(string='Requested', default=False)
    status = fields.Selection(REQUEST_STATUSES, string='Status', required=True,
                              default='pending', index=True)

    # Channel
    channel_id = fields.Many2one('platform.channel', string='Channel', index=True, ondelete='set null')
    channel_name = fields.Char(string='Channel Name')

    upload_link = fields.Char(string='Upload Link')
    uploaded_at = fields.Datetime(string='Uploaded At')
    notes = fields.Text(string='Notes')

    decision_ids = fields.One2many('platform.decision', 'request_id', string='Decisions')

    @api.depends('release_id', 'platform', 'channel_name')
    def _compute_display_name(self):
        labels = dict(PLATFORMS)
        for request in self:
            name = f"{request.release_id.display_name} / {labels.get(request.platform, '')}"
            if request.channel_name:
                name = f"{name} ({request.channel_name})"
            request.display_name = name

    def _has_channel(self):
        self.ensure_one()
        return bool(self.channel_id or self.channel_name)

    @api.model
    def _check_platform_access(self, platform):
        """Raise unless the current user may decide requests of ``platform``"""
        if not self.env.user._can_update_platform(platform):
            raise AccessError(_('You are not allowed to update %s requests.') % dict(PLATFORMS)[platform])

    @api.model
    def _is_platform_team_member(self):
        return self.env.user._is_platform_team_member()

    @api.model
    def _resolve_channel(self, platform, channel):
        """Channel record of ``platform`` from a record, a database id or an external channel id"""
        Channel = self.env['platform.channel']
        if isinstance(channel, models.BaseModel):
            return channel.filtered(lambda c: c.platform == platform)[:1]
        domain = [('platform', '=', platform), ('external_channel_id', '=', str(channel))]
        if str(channel).isdigit():
            domain = ['&', ('platform', '=', platform), '|',
                      ('id', '=', int(channel)), ('external_channel_id', '=', str(channel))]
        return Channel.with_context(active_test=False).search(domain, limit=1)

    def _record_decision(self, status, notes, old_status):
        """Write the decision trail and the audit entry of a status change"""
        self.ensure_one()
        self.env['platform.decision'].create({
            'request_id': self.id,
            'user_id': self.env.user.id,
            'status': status,
            'notes': notes or False,
        })
        self.env['label.audit.log']._log(
            'platform_request', self.id, 'update', release=self.release_id,
            field_name='status', old_value=old_status, new_value=status)

    def action_update_status(self, status, channel=None, upload_link=None, notes=None, uploaded_at=None):
        """Decide one request and cascade uploads to its sibling requests.

        ``channel`` is a ``platform.channel`` record or identifier, False to
        clear the channel, None to leave it as it is.
        """
        self.ensure_one()
        if status not in STATUS_KEYS:
            raise UserError(_('Valid status is required'))
        self._check_platform_access(self.platform)

        if (self._is_platform_team_member() and self.platform in CHANNEL_PLATFORMS
                and not self._has_channel() and not channel):
            raise AccessError(_('Platform employees can only approve/reject requests for specific channels. '
                                'Please assign a channel first.'))

        old_status = self.status
        values = {'status': status}
        if channel is not None:
            if channel:
                record = self._resolve_channel(self.platform, channel)
                if record:
                    values.update(channel_id=record.id, channel_name=record.name)
            else:
                values.update(channel_id=False, channel_name=False)
        if upload_link is not None:
            values['upload_link'] = upload_link or False
        if status == 'uploaded':
            values['uploaded_at'] = uploaded_at or fields.Datetime.now()
        else:
            values['uploaded_at'] = False
        self.write(values)

        if status == 'uploaded':
            siblings = self.search([
                ('release_id', '=', self.release_id.id),
                ('platform', '=', self.platform),
                ('id', '!=', self.id),
            ])
            if self.channel_id:
                siblings = siblings.filtered(lambda r: r.channel_id == self.channel_id)
            else:
                siblings = siblings.filtered(lambda r: not r.channel_id and not r.channel_name)
            if siblings:
                siblings.write({'status': status, 'uploaded_at': self.uploaded_at})

        self._record_decision(status, notes, old_status)
        return True

    @api.model
    def bulk_update_status(self, request_ids, status, channel_ids=None, notes=None):
        """Decide several requests of one platform at once, returns the number updated"""
        if not request_ids or not isinstance(request_ids, (list, tuple)):
            raise UserError(_('Request IDs array is required'))
        if not status or status not in STATUS_KEYS:
            raise UserError(_('Valid status is required'))

        request_ids = [int(request_id) for request_id in request_ids]
        requests = self.browse(request_ids).exists()
        if len(requests) != len(set(request_ids)):
            raise UserError(_('Some requests not found'))
        platforms = set(requests.mapped('platform'))
        if len(platforms) > 1:
            raise UserError(_('All requests must be for the same platform'))
        platform = platforms.pop()
        self._check_platform_access(platform)

        channels = self.env['platform.channel']
        if channel_ids:
            channels = channels.search([
                ('id', 'in', [int(channel_id) for channel_id in channel_ids]),
                ('platform', '=', platform),
                ('active', '=', True),
            ])

        if self._is_platform_team_member() and platform in CHANNEL_PLATFORMS:
            if any(not request._has_channel() for request in requests):
                raise AccessError(_('Platform employees can only approve/reject requests for specific channels. '
                                    'All selected requests must have a channel assigned.'))
            if channel_ids:
                allowed = set(channels.mapped('name'))
                if any(request.channel_name and request.channel_name not in allowed for request in requests):
                    raise AccessError(_('Some selected requests are for channels you do not have access to.'))

        values = {
            'status': status,
            'uploaded_at': fields.Datetime.now() if status == 'uploaded' else False,
        }
        old_statuses = {request.id: request.status for request in requests}
        requests.write(values)

        if channels:
            for request in requests:
                for channel in channels:
                    channel_request = self.search([
                        ('release_id', '=', request.release_id.id),
                        ('platform', '=', platform),
                        ('channel_id', '=', channel.id),
                    ], limit=1)
                    if channel_request:
                        channel_request.write(dict(values, channel_name=channel.name))
                    else:
                        self.create(dict(
                            values,
                            release_id=request.release_id.id,
                            platform=platform,
                            channel_id=channel.id,
                            channel_name=channel.name,
                            requested=True,
                        ))

        for request in requests:
            request._record_decision(status, notes, old_statuses[request.id])
        _logger.info("Bulk update set %s %s requests to %s", len(requests), platform, status)
        return len(requests)


class PlatformDecision(models.Model):
    _name = 'platform.decision'
    _description = 'Platform Request Decision'
    _order = 'decided_at desc, id desc'

    request_id = fields.Many2one('platform.request', string='Request', required=True,
                                 index=True, ondelete='cascade')
    user_id = fields.Many2one('res.users', string='Decided By', default=lambda self: self.env.user)
    status = fields.Selection(REQUEST_STATUSES, string='Status', required=True)
    notes = fields.Text(string='Notes')
    decided_at = fields.Datetime(string='Decided At', default=fields.Datetime.now, required=True)
