# -*- coding: utf-8 -*-

import uuid

from odoo import models, fields, api, _
from odoo.exceptions import AccessError, UserError, ValidationError
from odoo.tools import escape_psql

from ..const import EMPLOYEE_STATUSES

EMPLOYEE_STATUS_KEYS = [status for status, __ in EMPLOYEE_STATUSES]


class HrEmployee(models.Model):
    _inherit = 'hr.employee'

    # Label Staff
    employment_status = fields.Selection(EMPLOYEE_STATUSES, string='Employment Status',
                                         default='active', required=True, tracking=True)
    status_notes = fields.Text(string='Status Notes')
    is_ar = fields.Boolean(string='Is A&R', default=False)
    label_employee_code = fields.Char(string='Label Employee Code', copy=False, index=True)
    ar_release_ids = fields.Many2many('music.release', 'music_release_ar_employee_rel',
                                      'employee_id', 'release_id', string='A&R Releases')

    def _would_create_reporting_cycle(self, manager):
        """True when ``manager`` reports, directly or not, to this employee"""
        self.ensure_one()
        visited = {self.id}
        current = manager
        while current:
            if current.id in visited:
                return True
            visited.add(current.id)
            current = current.parent_id
        return False

    @api.constrains('parent_id')
    def _check_reporting_cycle(self):
        """Validate the reporting structure has no loops"""
        for employee in self:
            if employee.parent_id == employee:
                raise ValidationError(_('Employee cannot report to themselves'))
            if employee.parent_id and employee._would_create_reporting_cycle(employee.parent_id):
                raise ValidationError(_('Circular reference detected in reporting structure'))

    def _check_label_manager(self):
        if not self.env.user._is_label_manager():
            raise AccessError(_('Only administrators and managers can change employee records.'))

    def action_set_reporting_manager(self, manager):
        """Change who the employee reports to; empty or "none" clears it"""
        self.ensure_one()
        self._check_label_manager()

        if isinstance(manager, str):
            manager = manager.strip()
            manager = False if manager in ('', 'none') else int(manager)
        if isinstance(manager, int) and not isinstance(manager, bool):
            manager = self.browse(manager)
        manager = manager or self.browse()

        if manager and manager.id == self.id:
            raise UserError(_('Employee cannot report to themselves'))
        if manager:
            if not manager.exists():
                raise UserError(_('Selected manager not found'))
            if self._would_create_reporting_cycle(manager):
                raise UserError(_('Circular reference detected in reporting structure'))

        old_manager = self.parent_id
        self.parent_id = manager
        self.env['label.audit.log']._log(
            'employee', self.id, 'update', field_name='parent_id',
            old_value=old_manager.id or None, new_value=manager.id or None)
        return True

    def action_set_employment_status(self, status, notes=None):
        self.ensure_one()
        self._check_label_manager()
        if status not in EMPLOYEE_STATUS_KEYS:
            raise UserError(_('Invalid employee status'))
        if (self.employment_status in ('terminated', 'resigned') and status == 'active'
                and not self.env.user._is_label_admin()):
            raise AccessError(_('Only administrators can reactivate terminated or resigned employees'))

        old_status, old_notes = self.employment_status, self.status_notes
        values = {'employment_status': status}
        if notes is not None:
            values['status_notes'] = notes or False
        self.write(values)

        AuditLog = self.env['label.audit.log']
        AuditLog._log('employee', self.id, 'update', field_name='employment_status',
                      old_value=old_status, new_value=status)
        if notes is not None and (notes or False) != old_notes:
            AuditLog._log('employee', self.id, 'update', field_name='status_notes',
                          old_value=old_notes or None, new_value=notes or None)
        return True

    def action_assign_department(self, department):
        """Move the employee to ``department`` (record, id or False)"""
        self._check_label_manager()
        if isinstance(department, int) and not isinstance(department, bool):
            department = self.env['hr.department'].browse(department)
        department = department or self.env['hr.department']
        if department and not department.exists():
            raise UserError(_('Selected department not found'))
        for employee in self:
            old_department = employee.department_id
            employee.department_id = department
            self.env['label.audit.log']._log(
                'employee', employee.id, 'update', field_name='department_id',
                old_value=old_department.id or None, new_value=department.id or None)
        return True

    @api.model
    def _generate_label_employee_code(self):
        while True:
            code = 'EMP-%s' % uuid.uuid4().hex[:8].upper()
            if not self.with_context(active_test=False).search_count([('label_employee_code', '=', code)]):
                return code

    @api.model
    def _find_or_create_by_name(self, name, cache=None):
        """A&R employee named ``name``, created when nobody matches"""
        name = (name or '').strip()
        if not name:
            return self.browse()
        key = name.lower()
        if cache is not None and key in cache:
            return cache[key]
        employee = self.search([('name', '=ilike', escape_psql(name))], limit=1)
        if not employee:
            employee = self.create({
                'name': name,
                'is_ar': True,
                'label_employee_code': self._generate_label_employee_code(),
            })
        if cache is not None:
            cache[key] = employee
        return employee

    @api.model
    def get_org_chart(self):
        """Reporting tree of the active employees"""
        employees = self.search([], order='name, id')
        children = {}
        roots = []
        for employee in employees:
            if employee.parent_id and employee.parent_id in employees:
                children.setdefault(employee.parent_id.id, []).append(employee)
            else:
                roots.append(employee)

        def _node(employee):
            return {
                'id': employee.id,
                'name': employee.name,
                'job_title': employee.job_title or None,
                'department': employee.department_id.name or None,
                'status': employee.employment_status,
                'children': [_node(child) for child in children.get(employee.id, [])],
            }

        return [_node(root) for root in roots]
