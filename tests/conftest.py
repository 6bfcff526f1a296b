from datetime import date, timedelta

import pytest

from studiotrack import create_app
from studiotrack.extensions import db
from studiotrack.services import team


def day(offset=0):
    return (date.today() + timedelta(days=offset)).isoformat()


def project_payload(**overrides):
    data = {
        'name': 'Summer Campaign',
        'client': 'Coca-Cola',
        'type': 'TV commercial',
        'structure': 'Simple',
        'status': 'In Progress',
        'priority': 'High',
        'description': '30s spot',
        'start_date': day(-10),
        'deadline': day(10),
        'version_deadlines': {'v1': day(2), 'final': day(10)},
        'hours_budgeted': 40,
        'editor_ids': [],
        'deliverables': [],
    }
    data.update(overrides)
    return data


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin(app):
    return team.register('Carlos Manager', 'admin@example.com', 'secret')


@pytest.fixture
def editor(app, admin):
    return team.add_member('Ana Editor', 'ana@example.com', 'editor', 'secret')


@pytest.fixture
def assistant(app, admin):
    return team.add_member('Joao Assistant', 'joao@example.com', 'assistant', 'secret')


def login(client, user, password='secret'):
    response = client.post('/auth/login', json={'email': user['email'], 'password': password})
    assert response.status_code == 200
    return response


@pytest.fixture
def admin_client(client, admin):
    login(client, admin)
    return client
