"""Application state handed to the view functions.

Routes build an ``AppState`` from the database for each request; commands
below return a new state instead of editing the collections in place.
"""
from collections import namedtuple

AppState = namedtuple('AppState', ['users', 'projects', 'current_user', 'selected_project'])


def initial_state(users, projects, current_user=None):
    return AppState(list(users), list(projects), current_user, None)


def select_project(state, project_id):
    selected = None
    for project in state.projects:
        if project['id'] == project_id:
            selected = project
    return state._replace(selected_project=selected)


def replace_project(state, project):
    """Insert or replace ``project``; a selection of the same project is refreshed too."""
    projects = [p for p in state.projects if p['id'] != project['id']]
    if len(projects) == len(state.projects):
        projects.insert(0, project)
    else:
        projects = [project if p['id'] == project['id'] else p for p in state.projects]
    selected = state.selected_project
    if selected is not None and selected['id'] == project['id']:
        selected = project
    return state._replace(projects=projects, selected_project=selected)


def remove_project(state, project_id):
    selected = state.selected_project
    if selected is not None and selected['id'] == project_id:
        selected = None
    projects = [p for p in state.projects if p['id'] != project_id]
    return state._replace(projects=projects, selected_project=selected)


def remove_user(state, user_id):
    """Drop a profile. Projects keep the id in ``editor_ids``."""
    users = [u for u in state.users if u['id'] != user_id]
    current = state.current_user
    if current is not None and current['id'] == user_id:
        current = None
    return state._replace(users=users, current_user=current)
