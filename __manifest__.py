# -*- coding: utf-8 -*-
{
    'name': 'Label Release Distribution',
    'version': '19.0.1.0.0',
    'category': 'Industries',
    'summary': 'Record label release intake, platform distribution tracking and artist catalog',
    'description': """
        Odoo 19 module for a record label distribution desk:

        * Release intake: public submission form and bulk spreadsheet import
        * Platform distribution: per platform and per channel upload requests with decision history
        * Artist catalog: duplicate detection and artist merging
        * Label staff: A&R assignment, reporting hierarchy and employment status
        * Role based landing pages, field permissions, analytics and CSV export
    """,
    'author': 'Contaura LLC',
    'website': 'https://www.contaura.com',
    'depends': [
        'base',
        'mail',
        'hr',
    ],
    'external_dependencies': {
        'python': ['rapidfuzz', 'dateutil'],
    },
    'data': [
        # Security
        'security/security.xml',
        'security/ir.model.access.csv',

        # Data
        'data/ir_cron_data.xml',
    ],
    'installable': True,
    'auto_install': False,
    'application': True,
    'license': 'LGPL-3',
}
