# -*- coding: utf-8 -*-

import json
import logging

from dateutil import parser as date_parser, tz

from odoo import fields, http, _
from odoo.http import request
from odoo.exceptions import AccessError, MissingError, UserError

_logger = logging.getLogger(__name__)

WRITE_METHODS = ['PATCH', 'POST']


class LabelDistributionController(http.Controller):

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _json_error(self, message, status):
        return request.make_json_response({'error': message}, status=status)

    def _read_json(self):
        body = request.httprequest.get_data(as_text=True)
        if not body or not body.strip():
            return {}
        payload = json.loads(body)
        if not isinstance(payload, dict):
            raise UserError(_('Request body must be a JSON object'))
        return payload

    def _dispatch(self, handler, status=200):
        """Run ``handler`` in a savepoint and turn its result or error into JSON"""
        try:
            with request.env.cr.savepoint():
                result = handler()
        except MissingError as e:
            return self._json_error(str(e), 404)
        except AccessError as e:
            return self._json_error(str(e), 403)
        except UserError as e:
            return self._json_error(str(e), 400)
        except ValueError as e:
            return self._json_error(_('Invalid request: %s', e), 400)
        except Exception:
            _logger.exception("Label API request %s failed", request.httprequest.path)
            return self._json_error(_('Internal server error'), 500)
        return request.make_json_response(result, status=status)

    def _parse_datetime(self, value):
        """Naive UTC datetime from an ISO string, None when empty"""
        if not value:
            return None
        try:
            parsed = date_parser.isoparse(value)
        except (TypeError, ValueError):
            raise UserError(_('Invalid date: %s', value))
        if parsed.tzinfo:
            parsed = parsed.astimezone(tz.UTC).replace(tzinfo=None)
        return parsed

    def _get_record(self, model, record_id):
        record = request.env[model].browse(record_id).exists()
        if not record:
            raise MissingError(_('Record not found'))
        return record

    # ------------------------------------------------------------------
    # Public submission form
    # ------------------------------------------------------------------

    @http.route('/label/api/submissions', type='http', auth='public', methods=['POST'], csrf=False)
    def submit_release(self, **kw):
        def handler():
            release = request.env['music.release'].sudo().create_from_submission(self._read_json())
            return {'releaseId': release.id}
        return self._dispatch(handler, status=201)

    @http.route('/label/api/releases/<int:release_id>/status', type='http', auth='public', methods=['GET'])
    def release_status(self, release_id, **kw):
        def handler():
            release = request.env['music.release'].sudo().browse(release_id).exists()
            if not release:
                raise MissingError(_('Release not found'))
            return release._get_status_overview()
        return self._dispatch(handler)

    # ------------------------------------------------------------------
    # Platform requests
    # ------------------------------------------------------------------

    @http.route('/label/api/platform-requests/bulk', type='http', auth='user', methods=WRITE_METHODS, csrf=False)
    def bulk_update_requests(self, **kw):
        def handler():
            payload = self._read_json()
            count = request.env['platform.request'].bulk_update_status(
                payload.get('request_ids'), payload.get('status'),
                channel_ids=payload.get('channel_ids'), notes=payload.get('notes'))
            return {'success': True, 'updated': count}
        return self._dispatch(handler)

    @http.route('/label/api/platform-requests/<int:request_id>', type='http', auth='user',
                methods=WRITE_METHODS, csrf=False)
    def update_request(self, request_id, **kw):
        def handler():
            payload = self._read_json()
            platform_request = self._get_record('platform.request', request_id)
            channel = None
            if 'channel' in payload:
                channel = payload['channel'] or False
            platform_request.action_update_status(
                payload.get('status'),
                channel=channel,
                upload_link=payload.get('upload_link'),
                notes=payload.get('notes'),
                uploaded_at=self._parse_datetime(payload.get('uploaded_at')))
            return {
                'id': platform_request.id,
                'platform': platform_request.platform,
                'status': platform_request.status,
                'channel': platform_request.channel_name or None,
                'uploaded_at': fields.Datetime.to_string(platform_request.uploaded_at) or None,
            }
        return self._dispatch(handler)

    # ------------------------------------------------------------------
    # Employees
    # ------------------------------------------------------------------

    @http.route('/label/api/employees/org-chart', type='http', auth='user', methods=['GET'])
    def org_chart(self, **kw):
        return self._dispatch(lambda: request.env['hr.employee'].get_org_chart())

    @http.route('/label/api/employees/<int:employee_id>/reporting', type='http', auth='user',
                methods=WRITE_METHODS, csrf=False)
    def set_reporting_manager(self, employee_id, **kw):
        def handler():
            employee = self._get_record('hr.employee', employee_id)
            employee.action_set_reporting_manager(self._read_json().get('manager_id'))
            return {'id': employee.id, 'manager_id': employee.parent_id.id or None}
        return self._dispatch(handler)

    @http.route('/label/api/employees/<int:employee_id>/status', type='http', auth='user',
                methods=WRITE_METHODS, csrf=False)
    def set_employment_status(self, employee_id, **kw):
        def handler():
            payload = self._read_json()
            employee = self._get_record('hr.employee', employee_id)
            employee.action_set_employment_status(payload.get('status'), notes=payload.get('notes'))
            return {'id': employee.id, 'status': employee.employment_status}
        return self._dispatch(handler)

    @http.route('/label/api/employees/<int:employee_id>/department', type='http', auth='user',
                methods=WRITE_METHODS, csrf=False)
    def assign_department(self, employee_id, **kw):
        def handler():
            department_id = self._read_json().get('department_id')
            employee = self._get_record('hr.employee', employee_id)
            employee.action_assign_department(int(department_id) if department_id else False)
            return {'id': employee.id, 'department_id': employee.department_id.id or None}
        return self._dispatch(handler)

    # ------------------------------------------------------------------
    # Artists
    # ------------------------------------------------------------------

    @http.route('/label/api/artists/duplicates', type='http', auth='user', methods=['GET'])
    def duplicate_artists(self, threshold=None, **kw):
        def handler():
            value = float(threshold) if threshold else None
            return {'duplicates': request.env['res.partner'].find_duplicate_artists(threshold=value)}
        return self._dispatch(handler)

    @http.route('/label/api/artists/<int:artist_id>/merge-preview', type='http', auth='user', methods=['GET'])
    def merge_preview(self, artist_id, **kw):
        def handler():
            artist = self._get_record('res.partner', artist_id)
            if not artist.is_artist:
                raise MissingError(_('Artist not found'))
            return artist._get_merge_preview()
        return self._dispatch(handler)

    @http.route('/label/api/artists/merge', type='http', auth='user', methods=['POST'], csrf=False)
    def merge_artists(self, **kw):
        def handler():
            payload = self._read_json()
            if not payload.get('source_artist_id') or not payload.get('target_artist_id'):
                raise UserError(_('Source and target artist IDs are required'))
            source = self._get_record('res.partner', int(payload['source_artist_id']))
            target = self._get_record('res.partner', int(payload['target_artist_id']))
            wizard = request.env['artist.merge.wizard'].create({
                'source_artist_id': source.id,
                'target_artist_id': target.id,
                'secondary_artist_id': int(payload['secondary_artist_id']) if payload.get('secondary_artist_id') else False,
                'secondary_artist_name': payload.get('secondary_artist_name') or False,
                'release_overrides': json.dumps(payload.get('release_overrides') or {}),
                'track_overrides': json.dumps(payload.get('track_overrides') or {}),
            })
            return dict(wizard.action_merge(), success=True)
        return self._dispatch(handler)

    # ------------------------------------------------------------------
    # Analytics, landing page and export
    # ------------------------------------------------------------------

    @http.route('/label/api/analytics', type='http', auth='user', methods=['GET'])
    def analytics(self, widget='all', granularity='day', period='month', limit='10', **kw):
        def handler():
            filters = {key: kw.get(key) for key in (
                'date_from', 'date_to', 'platform', 'release_type', 'status', 'artist_id', 'ar_id')}
            return request.env['label.analytics'].get_dashboard_data(
                filters, widget=widget, granularity=granularity, period=period, limit=int(limit))
        return self._dispatch(handler)

    @http.route('/label/api/me/landing', type='http', auth='user', methods=['GET'])
    def landing_page(self, **kw):
        def handler():
            user = request.env.user
            return {'role': user.label_role or None, 'redirect': user._get_landing_page()}
        return self._dispatch(handler)

    @http.route('/label/export/csv', type='http', auth='user', methods=['GET'])
    def export_csv(self, mode='track', release_type=None, artist_id=None, **kw):
        domain = []
        if release_type:
            domain.append(('release_type', '=', release_type))
        if artist_id:
            try:
                domain.append(('primary_artist_id', '=', int(artist_id)))
            except ValueError:
                return self._json_error(_('Invalid artist id'), 400)
        Export = request.env['label.release.export']
        try:
            content = Export.get_csv(domain, mode=mode)
        except AccessError as e:
            return self._json_error(str(e), 403)
        except UserError as e:
            return self._json_error(str(e), 400)
        return request.make_response(
            content,
            headers=[
                ('Content-Type', 'text/csv'),
                ('Content-Disposition', f'attachment; filename="{Export.get_filename(mode)}"'),
            ]
        )
