import pytest

from studiotrack.domain import commands
from studiotrack.domain.errors import NotFoundError, ValidationError
from studiotrack.domain.records import group_deliverables, module_names, new_time_log, new_version
from studiotrack.domain.state import (
    initial_state, remove_project, remove_user, replace_project, select_project,
)
from tests.conftest import project_payload

ANA = {'id': 'u2', 'name': 'Ana Editor', 'role': 'editor'}


def campaign():
    return commands.build_project(project_payload(
        structure='Campaign',
        deliverables=[{'title': 'Reels teaser', 'group': 'Instagram'}, {'title': 'Story 15s'}],
    ))


def test_build_simple_project_creates_its_single_deliverable():
    project = commands.build_project(project_payload())
    assert project['id']
    assert project['hours_used'] == 0
    assert project['comments'] == [] and project['time_logs'] == []
    assert len(project['deliverables']) == 1
    deliverable = project['deliverables'][0]
    assert deliverable['title'] == 'Summer Campaign'
    assert deliverable['group'] is None
    assert deliverable['status'] == 'In Progress'
    assert deliverable['versions'] == []


def test_simple_project_drops_group_and_rejects_second_deliverable():
    project = commands.build_project(project_payload(deliverables=[{'title': 'Spot', 'group': 'x'}]))
    assert project['deliverables'][0]['group'] is None
    with pytest.raises(ValidationError):
        commands.build_project(project_payload(deliverables=[{'title': 'a'}, {'title': 'b'}]))


def test_non_simple_project_needs_content():
    for structure in ('Campaign', 'Course'):
        with pytest.raises(ValidationError):
            commands.build_project(project_payload(structure=structure, deliverables=[]))


def test_course_deliverables_need_a_module():
    with pytest.raises(ValidationError):
        commands.build_project(project_payload(structure='Course', deliverables=[{'title': 'Lesson 1'}]))


def test_untitled_deliverables_get_a_default_title():
    project = commands.build_project(project_payload(structure='Campaign', deliverables=[{'title': ''}]))
    assert project['deliverables'][0]['title'] == 'Untitled'


@pytest.mark.parametrize('field', ['name', 'client', 'start_date', 'deadline'])
def test_required_fields(field):
    with pytest.raises(ValidationError):
        commands.build_project(project_payload(**{field: ''}))


def test_rejects_bad_enumerations_and_dates():
    with pytest.raises(ValidationError):
        commands.build_project(project_payload(status='Done'))
    with pytest.raises(ValidationError):
        commands.build_project(project_payload(structure='Series'))
    with pytest.raises(ValidationError):
        commands.build_project(project_payload(deadline='20/05/2024'))
    with pytest.raises(ValidationError):
        commands.build_project(project_payload(version_deadlines={'v1': '2024-05-01'}))


def test_add_time_log_keeps_hours_used_equal_to_log_sum():
    project = campaign()
    for hours in (1, 2.5, 0.5, 4):
        project = commands.add_time_log(project, new_time_log(ANA, hours, '2024-05-02', 'edit'))
    assert project['hours_used'] == sum(t['hours'] for t in project['time_logs']) == 8
    assert project['time_logs'][0]['user_name'] == 'Ana Editor'


def test_add_time_log_does_not_touch_input():
    project = campaign()
    commands.add_time_log(project, new_time_log(ANA, 2, '2024-05-02', 'edit'))
    assert project['time_logs'] == []
    assert project['hours_used'] == 0


@pytest.mark.parametrize('hours', [0, -1, 0.3, 'abc', 'nan', 'Infinity', '1e400', float('nan')])
def test_time_log_hours_must_be_positive_half_hours(hours):
    with pytest.raises(ValidationError):
        new_time_log(ANA, hours, '2024-05-02', 'edit')


def test_final_version_finishes_only_its_deliverable():
    project = campaign()
    target, other = project['deliverables']
    updated = commands.add_version(project, target['id'], new_version('Final', 'https://drive/final'))
    assert updated['deliverables'][0]['status'] == 'Finished'
    assert updated['deliverables'][1]['status'] == other['status']
    assert updated['status'] == project['status']
    assert len(updated['deliverables'][0]['versions']) == 1


def test_non_final_version_keeps_status():
    project = campaign()
    target = project['deliverables'][0]
    updated = commands.add_version(project, target['id'], new_version('V2', 'https://drive/v2'))
    assert updated['deliverables'][0]['status'] == 'In Progress'


def test_versions_are_appended_in_submission_order():
    project = campaign()
    did = project['deliverables'][0]['id']
    project = commands.add_version(project, did, new_version('V1', 'https://a'))
    project = commands.add_version(project, did, new_version('V2', 'https://b'))
    assert [v['version_type'] for v in project['deliverables'][0]['versions']] == ['V1', 'V2']


def test_version_on_unknown_deliverable():
    with pytest.raises(NotFoundError):
        commands.add_version(campaign(), 'nope', new_version('V1', 'https://a'))


def test_update_project_keeps_history():
    project = campaign()
    did = project['deliverables'][0]['id']
    project = commands.add_version(project, did, new_version('V1', 'https://a'))
    project = commands.add_time_log(project, new_time_log(ANA, 3, '2024-05-02', 'edit'))
    data = project_payload(
        name='Renamed', structure='Campaign',
        deliverables=[{'id': did, 'title': 'Reels teaser v2', 'versions': []}, {'title': 'New item'}],
    )
    updated = commands.update_project(project, data)
    assert updated['id'] == project['id']
    assert updated['name'] == 'Renamed'
    assert updated['hours_used'] == 3
    assert len(updated['time_logs']) == 1
    assert len(updated['deliverables'][0]['versions']) == 1
    assert updated['deliverables'][1]['versions'] == []


def test_status_changes_are_free():
    project = commands.change_status(campaign(), 'Finished')
    assert commands.change_status(project, 'In Progress')['status'] == 'In Progress'
    with pytest.raises(ValidationError):
        commands.change_status(project, 'Archived')


def test_course_grouping_and_module_names():
    project = commands.build_project(project_payload(structure='Course', deliverables=[
        {'title': 'L1', 'group': 'Module 1'},
        {'title': 'L3', 'group': 'Module 2'},
        {'title': 'L2', 'group': 'Module 1'},
    ]))
    assert module_names(project['deliverables']) == ['Module 1', 'Module 2']
    groups = group_deliverables(project)
    assert [g for g, _ in groups] == ['Module 1', 'Module 2']
    assert sorted(d['title'] for d in groups[0][1]) == ['L1', 'L2']


def test_replace_project_refreshes_selection():
    project = campaign()
    state = select_project(initial_state([ANA], [project]), project['id'])
    updated = commands.change_status(project, 'Paused')
    state = replace_project(state, updated)
    assert state.selected_project['status'] == 'Paused'
    assert state.projects == [updated]


def test_replace_project_inserts_new_project_first():
    first, second = campaign(), campaign()
    state = replace_project(initial_state([], [first]), second)
    assert [p['id'] for p in state.projects] == [second['id'], first['id']]
    assert state.selected_project is None


def test_remove_project_clears_selection():
    project = campaign()
    state = select_project(initial_state([], [project]), project['id'])
    state = remove_project(state, project['id'])
    assert state.projects == [] and state.selected_project is None


def test_remove_user_leaves_editor_ids():
    project = commands.build_project(project_payload(editor_ids=['u3']))
    state = remove_user(initial_state([ANA, {'id': 'u3', 'name': 'Joao', 'role': 'assistant'}], [project]), 'u3')
    assert [u['id'] for u in state.users] == ['u2']
    assert state.projects[0]['editor_ids'] == ['u3']


@pytest.mark.parametrize('budget', ['nan', 'inf', '-Infinity', float('nan')])
def test_budget_must_be_finite(budget):
    with pytest.raises(ValidationError):
        commands.build_project(project_payload(hours_budgeted=budget))


def test_edit_without_content_keeps_simple_deliverable_history():
    project = commands.build_project(project_payload())
    did = project['deliverables'][0]['id']
    project = commands.add_version(project, did, new_version('Final', 'https://drive/final'))
    updated = commands.update_project(project, project_payload(name='Renamed'))
    assert updated['deliverables'][0]['id'] == did
    assert updated['deliverables'][0]['status'] == 'Finished'
    assert [v['version_type'] for v in updated['deliverables'][0]['versions']] == ['Final']


def test_simple_deliverable_sent_without_id_is_the_same_item():
    project = commands.build_project(project_payload())
    did = project['deliverables'][0]['id']
    project = commands.add_version(project, did, new_version('V1', 'https://drive/v1'))
    updated = commands.update_project(project, project_payload(deliverables=[{'title': 'Main cut'}]))
    assert updated['deliverables'][0]['id'] == did
    assert updated['deliverables'][0]['title'] == 'Main cut'
    assert len(updated['deliverables'][0]['versions']) == 1


def test_error_message_keeps_placeholders_for_translation():
    with pytest.raises(ValidationError) as info:
        commands.change_status(campaign(), 'Archived')
    assert info.value.message == 'Invalid %(field)s: %(value)s.'
    assert info.value.params == {'field': 'status', 'value': 'Archived'}
    assert str(info.value) == 'Invalid status: Archived.'
