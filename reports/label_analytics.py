# -*- coding: utf-8 -*-

from collections import defaultdict
from datetime import datetime, time

from dateutil.relativedelta import relativedelta, MO

from odoo import api, fields, models, _
from odoo.exceptions import UserError

WIDGETS = ('kpi', 'distribution', 'platform', 'artist', 'ar_efficiency', 'content', 'pipeline', 'trends', 'all')
PERIODS = ('day', 'week', 'month')


def _as_list(value):
    if not value:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(',') if item.strip()]
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def _hours_between(start, end):
    return int((end - start).total_seconds() // 3600)


def _average(values):
    return sum(values) / len(values) if values else 0.0


class LabelAnalytics(models.AbstractModel):
    _name = 'label.analytics'
    _description = 'Label Distribution Analytics'

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def _parse_filters(self, filters):
        filters = dict(filters or {})
        return {
            'date_from': fields.Date.to_date(filters.get('date_from')) or None,
            'date_to': fields.Date.to_date(filters.get('date_to')) or None,
            'platforms': _as_list(filters.get('platforms') or filters.get('platform')),
            'release_types': _as_list(filters.get('release_types') or filters.get('release_type')),
            'statuses': _as_list(filters.get('statuses') or filters.get('status')),
            'artist_ids': [int(x) for x in _as_list(filters.get('artist_ids') or filters.get('artist_id'))],
            'ar_ids': [int(x) for x in _as_list(filters.get('ar_ids') or filters.get('ar_id'))],
        }

    def _date_domain(self, filters):
        domain = []
        if filters['date_from']:
            domain.append(('create_date', '>=', datetime.combine(filters['date_from'], time.min)))
        if filters['date_to']:
            domain.append(('create_date', '<=', datetime.combine(filters['date_to'], time.max)))
        return domain

    def _release_domain(self, filters):
        domain = self._date_domain(filters)
        if filters['release_types']:
            domain.append(('release_type', 'in', filters['release_types']))
        if filters['artist_ids']:
            domain.append(('primary_artist_id', 'in', filters['artist_ids']))
        if filters['ar_ids']:
            domain.append(('primary_ar_id', 'in', filters['ar_ids']))
        return domain

    def _request_domain(self, filters):
        domain = self._date_domain(filters)
        if filters['platforms']:
            domain.append(('platform', 'in', filters['platforms']))
        if filters['statuses']:
            domain.append(('status', 'in', filters['statuses']))
        return domain

    @staticmethod
    def _period_key(moment, period):
        day = moment.date()
        if period == 'week':
            return (day + relativedelta(weekday=MO(-1))).isoformat()
        if period == 'month':
            return day.strftime('%Y-%m')
        return day.isoformat()

    # ------------------------------------------------------------------
    # Widgets
    # ------------------------------------------------------------------

    def _get_kpi_metrics(self, filters):
        Release = self.env['music.release']
        Request = self.env['platform.request']
        release_domain = self._release_domain(filters)
        request_domain = self._request_domain(filters)

        releases = Release.search(release_domain)
        total_requests = Request.search_count(request_domain)
        uploaded_requests = Request.search_count(request_domain + [('status', '=', 'uploaded')])
        upload_success_rate = uploaded_requests / total_requests * 100 if total_requests else 0.0
        coverage = _average([len(set(release.platform_request_ids.mapped('platform'))) for release in releases])

        velocity = 0.0
        if filters['date_to']:
            date_from = filters['date_from'] or filters['date_to'] - relativedelta(days=30)
            days = (filters['date_to'] - date_from).days or 1
            velocity = len(releases) / days

        return {
            'total_releases': len(releases),
            'total_tracks': self.env['music.track'].search_count([('release_id', 'in', releases.ids)]),
            'upload_success_rate': round(upload_success_rate, 2),
            'active_artists': len(releases.primary_artist_id),
            'platform_coverage': round(coverage, 2),
            'processing_velocity': round(velocity, 2),
            'pending_releases': Release.search_count(release_domain + [('platform_request_ids.status', '=', 'pending')]),
            'rejected_releases': Release.search_count(release_domain + [('platform_request_ids.status', '=', 'rejected')]),
        }

    def _get_distribution_metrics(self, filters, granularity='day'):
        releases = self.env['music.release'].search(self._release_domain(filters), order='create_date asc, id asc')
        request_domain = self._request_domain(filters)
        requests = self.env['platform.request'].search(request_domain + [('release_id', 'in', releases.ids)])
        requests_by_release = defaultdict(list)
        for request in requests:
            requests_by_release[request.release_id.id].append(request)

        points = {}
        for release in releases:
            key = self._period_key(release.create_date, granularity)
            point = points.setdefault(key, {
                'date': key, 'releases': 0, 'tracks': 0, 'uploaded': 0, 'pending': 0, 'rejected': 0,
            })
            point['releases'] += 1
            point['tracks'] += len(release.track_ids)
            for request in requests_by_release[release.id]:
                point[request.status] += 1
        return [points[key] for key in sorted(points)]

    def _get_platform_metrics(self, filters):
        requests = self.env['platform.request'].search(self._request_domain(filters))
        stats = {}
        processing_hours = defaultdict(list)
        for request in requests:
            metrics = stats.setdefault(request.platform, {
                'platform': request.platform,
                'total_requests': 0,
                'uploaded': 0,
                'pending': 0,
                'rejected': 0,
                'success_rate': 0.0,
                'average_processing_hours': 0.0,
            })
            metrics['total_requests'] += 1
            metrics[request.status] += 1
            if request.uploaded_at:
                processing_hours[request.platform].append(_hours_between(request.create_date, request.uploaded_at))

        for platform, metrics in stats.items():
            metrics['success_rate'] = round(metrics['uploaded'] / metrics['total_requests'] * 100, 2)
            metrics['average_processing_hours'] = round(_average(processing_hours[platform]), 2)
        return sorted(stats.values(), key=lambda m: m['total_requests'], reverse=True)

    def _get_artist_leaderboard(self, filters, limit=10):
        releases = self.env['music.release'].search(self._release_domain(filters), order='create_date desc, id desc')
        leaderboard = {}
        for release in releases:
            artist = release.primary_artist_id
            metrics = leaderboard.setdefault(artist.id, {
                'artist_id': artist.id,
                'artist_name': artist.name,
                'release_count': 0,
                'track_count': 0,
                'platform_count': 0,
                'recent_activity': release.create_date,
            })
            metrics['release_count'] += 1
            metrics['track_count'] += len(release.track_ids)
            metrics['platform_count'] = max(metrics['platform_count'],
                                            len(set(release.platform_request_ids.mapped('platform'))))
            metrics['recent_activity'] = max(metrics['recent_activity'], release.create_date)

        ranked = sorted(leaderboard.values(), key=lambda m: m['release_count'], reverse=True)[:limit]
        for metrics in ranked:
            metrics['recent_activity'] = fields.Datetime.to_string(metrics['recent_activity'])
        return ranked

    def _get_ar_efficiency(self, filters):
        releases = self.env['music.release'].search(self._release_domain(filters) + [('primary_ar_id', '!=', False)])
        efficiency = {}
        for release in releases:
            employee = release.primary_ar_id
            metrics = efficiency.setdefault(employee.id, {
                'employee_id': employee.id,
                'employee_name': employee.name or _('Unknown'),
                'release_count': 0,
                'uploaded_count': 0,
                'pending_count': 0,
                'processing_hours': [],
            })
            metrics['release_count'] += 1
            uploaded = release.platform_request_ids.filtered(lambda r: r.status == 'uploaded')
            metrics['uploaded_count'] += len(uploaded)
            metrics['pending_count'] += len(release.platform_request_ids.filtered(lambda r: r.status == 'pending'))
            metrics['processing_hours'].extend(
                _hours_between(request.create_date, request.uploaded_at)
                for request in uploaded if request.uploaded_at
            )

        result = []
        for metrics in efficiency.values():
            hours = metrics.pop('processing_hours')
            metrics['average_processing_hours'] = round(_average(hours), 2)
            result.append(metrics)
        return sorted(result, key=lambda m: m['release_count'], reverse=True)

    def _get_content_breakdown(self, filters):
        releases = self.env['music.release'].search(self._release_domain(filters))
        release_types = defaultdict(int)
        copyright_statuses = defaultdict(int)
        video_types = defaultdict(int)
        for release in releases:
            release_types[release.release_type] += 1
            copyright_statuses[release.copyright_status or None] += 1
            video_types[release.video_type or None] += 1

        genres = defaultdict(int)
        for track in releases.track_ids:
            if track.genre:
                genres[track.genre] += 1
        top_genres = sorted(genres.items(), key=lambda item: item[1], reverse=True)[:10]

        return {
            'release_types': [{'type': key, 'count': count} for key, count in release_types.items()],
            'copyright_status': [{'status': key, 'count': count} for key, count in copyright_statuses.items()],
            'video_types': [{'type': key, 'count': count} for key, count in video_types.items()],
            'genres': [{'genre': genre, 'count': count} for genre, count in top_genres],
        }

    def _get_pipeline_health(self, filters):
        requests = self.env['platform.request'].search(self._request_domain(filters))
        now = fields.Datetime.now()
        counts = defaultdict(int)
        bottlenecks = defaultdict(int)
        pending_hours, uploaded_hours = [], []
        for request in requests:
            counts[request.status] += 1
            if request.status == 'pending':
                bottlenecks[request.platform] += 1
                pending_hours.append(_hours_between(request.create_date, now))
            elif request.status == 'uploaded' and request.uploaded_at:
                hours = _hours_between(request.create_date, request.uploaded_at)
                if hours > 0:
                    uploaded_hours.append(hours)

        top = sorted(bottlenecks.items(), key=lambda item: item[1], reverse=True)[:5]
        return {
            'pending': counts['pending'],
            'uploaded': counts['uploaded'],
            'rejected': counts['rejected'],
            'average_hours_pending': round(_average(pending_hours), 2),
            'average_hours_to_upload': round(_average(uploaded_hours), 2),
            'bottleneck_platforms': [{'platform': platform, 'pending_count': count} for platform, count in top],
        }

    def _get_time_trends(self, filters, period='month'):
        releases = self.env['music.release'].search(self._release_domain(filters), order='create_date asc, id asc')
        buckets = {}
        for release in releases:
            key = self._period_key(release.create_date, period)
            bucket = buckets.setdefault(key, {'period': key, 'releases': 0, 'tracks': 0, 'growth_rate': 0.0})
            bucket['releases'] += 1
            bucket['tracks'] += len(release.track_ids)

        trends = [buckets[key] for key in sorted(buckets)]
        for previous, current in zip(trends, trends[1:]):
            if previous['releases']:
                growth = (current['releases'] - previous['releases']) / previous['releases'] * 100
                current['growth_rate'] = round(growth, 2)
        return trends

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    @api.model
    def get_dashboard_data(self, filters=None, widget='all', granularity='day', period='month', limit=10):
        """Compute the analytics dashboard.

        ``filters`` accepts ``date_from``, ``date_to``, ``platforms``,
        ``release_types``, ``statuses``, ``artist_ids`` and ``ar_ids``. Lists
        may also be given as comma separated strings. ``widget`` selects a
        single section or ``'all'``.
        """
        if widget not in WIDGETS:
            raise UserError(_('Invalid widget %(widget)s. Use one of: %(widgets)s',
                              widget=widget, widgets=', '.join(WIDGETS)))
        if granularity not in PERIODS or period not in PERIODS:
            raise UserError(_('Periods must be one of: %s', ', '.join(PERIODS)))

        filters = self._parse_filters(filters)
        sections = {
            'kpi': lambda: self._get_kpi_metrics(filters),
            'distribution': lambda: self._get_distribution_metrics(filters, granularity),
            'platform': lambda: self._get_platform_metrics(filters),
            'artist': lambda: self._get_artist_leaderboard(filters, limit),
            'ar_efficiency': lambda: self._get_ar_efficiency(filters),
            'content': lambda: self._get_content_breakdown(filters),
            'pipeline': lambda: self._get_pipeline_health(filters),
            'trends': lambda: self._get_time_trends(filters, period),
        }
        if widget != 'all':
            return sections[widget]()
        return {name: compute() for name, compute in sections.items()}
