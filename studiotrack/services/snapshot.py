"""Snapshot service - demo seed data and full JSON dumps of users and projects."""
import json
import logging
from datetime import date, timedelta

from werkzeug.security import generate_password_hash

from studiotrack.domain.constants import ADMIN, ASSISTANT, EDITOR
from studiotrack.domain.records import avatar_url
from studiotrack.models import db, Project, User
from studiotrack.services.projects import commit

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {'id': 'u1', 'name': 'Carlos Manager', 'email': 'admin@dummy.com', 'role': ADMIN},
    {'id': 'u2', 'name': 'Ana Editor', 'email': 'ana@dummy.com', 'role': EDITOR},
    {'id': 'u3', 'name': 'Joao Assistant', 'email': 'joao@dummy.com', 'role': ASSISTANT},
]


def demo_projects(today=None):
    """One project of each structure, dated relative to ``today``."""
    today = today or date.today()

    def day(offset):
        return (today + timedelta(days=offset)).isoformat()

    return [
        {
            'id': 'p1',
            'name': 'Summer Campaign',
            'client': 'Coca-Cola',
            'type': 'TV commercial',
            'structure': 'Simple',
            'status': 'In Progress',
            'priority': 'High',
            'description': '30s commercial edit for broadcast TV.',
            'start_date': day(-20),
            'deadline': day(10),
            'version_deadlines': {'v1': day(-5), 'v2': day(3), 'final': day(10)},
            'hours_budgeted': 40,
            'hours_used': 8,
            'editor_ids': ['u2', 'u3'],
            'deliverables': [{
                'id': 'd1',
                'title': 'Main commercial 30s',
                'group': None,
                'status': 'In Progress',
                'description': None,
                'versions': [{
                    'id': 'v1',
                    'version_type': 'V1',
                    'link': 'https://dropbox.com/file/v1',
                    'submitted_at': day(-5) + 'T14:00:00',
                    'notes': 'First cut, waiting on color approval.',
                }],
            }],
            'comments': [{
                'id': 'c1',
                'user_id': 'u1',
                'user_name': 'Carlos Manager',
                'text': 'Watch the V2 deadline, the client is anxious.',
                'created_at': day(-4) + 'T09:00:00',
            }],
            'time_logs': [{
                'id': 't1',
                'user_id': 'u2',
                'user_name': 'Ana Editor',
                'hours': 8,
                'date': day(-19),
                'description': 'Ingest and footage organization.',
            }],
        },
        {
            'id': 'p2',
            'name': 'Personal Finance Course',
            'client': 'Itau Bank',
            'type': 'Educational',
            'structure': 'Course',
            'status': 'Paused',
            'priority': 'Medium',
            'description': 'Online course with two modules on investing.',
            'start_date': day(-30),
            'deadline': day(20),
            'version_deadlines': {'v1': day(-10), 'final': day(20)},
            'hours_budgeted': 80,
            'hours_used': 0,
            'editor_ids': ['u2'],
            'deliverables': [
                {'id': 'd2', 'title': 'Lesson 01: Introduction', 'group': 'Module 1: Basics',
                 'status': 'Finished', 'description': None, 'versions': [{
                     'id': 'v2',
                     'version_type': 'Final',
                     'link': 'https://drive.com/lesson01_final',
                     'submitted_at': day(-25) + 'T10:00:00',
                     'notes': 'Approved by the client.',
                 }]},
                {'id': 'd3', 'title': 'Lesson 02: Fixed income', 'group': 'Module 1: Basics',
                 'status': 'Paused', 'description': None, 'versions': []},
                {'id': 'd4', 'title': 'Lesson 03: Stocks', 'group': 'Module 2: Advanced',
                 'status': 'In Progress', 'description': None, 'versions': []},
            ],
            'comments': [],
            'time_logs': [],
        },
        {
            'id': 'p3',
            'name': 'Product X Launch',
            'client': 'Nike',
            'type': 'Social media',
            'structure': 'Campaign',
            'status': 'In Progress',
            'priority': 'Urgent',
            'description': 'Instagram asset pack.',
            'start_date': day(-7),
            'deadline': day(-1),
            'version_deadlines': {'v1': day(-4), 'final': day(-1)},
            'hours_budgeted': 10,
            'hours_used': 9.5,
            'editor_ids': ['u3'],
            'deliverables': [
                {'id': 'd5', 'title': 'Reels teaser', 'group': 'Instagram',
                 'status': 'In Progress', 'description': None, 'versions': []},
                {'id': 'd6', 'title': 'Story 15s', 'group': 'Instagram',
                 'status': 'In Progress', 'description': None, 'versions': []},
            ],
            'comments': [],
            'time_logs': [{
                'id': 't2',
                'user_id': 'u3',
                'user_name': 'Joao Assistant',
                'hours': 9.5,
                'date': day(-3),
                'description': 'Reels rough cut.',
            }],
        },
    ]


def seed_demo(password):
    """Insert the demo team and projects, skipping anything already present."""
    added = {'users': 0, 'projects': 0}
    for data in DEMO_USERS:
        if db.session.get(User, data['id']) or User.query.filter_by(email=data['email']).first():
            continue
        db.session.add(User(
            avatar=avatar_url(data['name']),
            password_hash=generate_password_hash(password),
            **data
        ))
        added['users'] += 1
    for record in demo_projects():
        if db.session.get(Project, record['id']):
            continue
        db.session.add(Project.from_record(record))
        added['projects'] += 1
    commit('seed demo data')
    return added


def export_snapshot(path):
    users = []
    for user in User.query.order_by(User.created_at).all():
        data = user.to_dict()
        data['password_hash'] = user.password_hash
        users.append(data)
    projects = [p.to_dict() for p in Project.query.order_by(Project.created_at).all()]
    with open(path, 'w', encoding='utf-8') as f:
        json.dump({'users': users, 'projects': projects}, f, ensure_ascii=False, indent=2)
    logger.info('Exported %d users and %d projects to %s', len(users), len(projects), path)
    return {'users': len(users), 'projects': len(projects)}


def import_snapshot(path):
    """Load a dump written by ``export_snapshot``; rows with an existing id are replaced."""
    with open(path, encoding='utf-8') as f:
        data = json.load(f)

    for item in data.get('users', []):
        user = db.session.get(User, item['id']) or User(id=item['id'])
        user.email = item['email']
        user.name = item['name']
        user.role = item['role']
        user.avatar = item.get('avatar') or avatar_url(item['name'])
        user.password_hash = item.get('password_hash')
        db.session.add(user)

    for record in data.get('projects', []):
        project = db.session.get(Project, record['id']) or Project()
        db.session.add(project.apply(record))

    commit('import snapshot')
    stats = {'users': len(data.get('users', [])), 'projects': len(data.get('projects', []))}
    logger.info('Imported %(users)d users and %(projects)d projects', stats)
    return stats
