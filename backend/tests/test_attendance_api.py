"""Test attendance endpoints."""
import json
from flask_jwt_extended import create_access_token
from schoolhub.services.code_service import CodeService

def _start(client, school, auth_headers):
    response = client.post(f'/api/attendance/classes/{school.class_id}/start',
                           headers=auth_headers(school.teacher))
    assert response.status_code == 201
    return json.loads(response.data)['data']

def test_health_check(client):
    """Test attendance health endpoint."""
    response = client.get('/api/attendance/health')
    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['message'] == 'Attendance service is running'

def test_app_health_and_swagger(client):
    assert client.get('/health').status_code == 200

    response = client.get('/api/swagger.json')
    assert response.status_code == 200
    spec = json.loads(response.data)
    assert '/attendance/check-in' in spec['paths']

def test_requires_token(client, school):
    response = client.post(f'/api/attendance/classes/{school.class_id}/start')
    assert response.status_code == 401
    data = json.loads(response.data)
    assert data['error'] == True
    assert data['message'] == 'Authorization token required'

def test_rejects_token_without_role(app, client, school):
    token = create_access_token(identity=str(school.teacher.user_id))
    response = client.post(f'/api/attendance/classes/{school.class_id}/start',
                           headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 401

def test_start_session(client, school, auth_headers, monkeypatch):
    monkeypatch.setattr(CodeService, 'generate_join_code', lambda: '483920')

    data = _start(client, school, auth_headers)

    assert data['code'] == '483920'
    assert data['session']['code'] == '483920'
    assert data['expires_at'] == data['session']['expires_at']
    assert len(data['session']['records']) == 2

def test_start_session_forbidden_and_not_found(client, school, auth_headers):
    response = client.post(f'/api/attendance/classes/{school.class_id}/start',
                           headers=auth_headers(school.other_teacher))
    assert response.status_code == 403

    response = client.post(f'/api/attendance/classes/{school.class_id}/start',
                           headers=auth_headers(school.student))
    assert response.status_code == 403

    response = client.post('/api/attendance/classes/9999/start',
                           headers=auth_headers(school.teacher))
    assert response.status_code == 404

def test_check_in_flow(client, school, auth_headers):
    """Student checks in twice; both calls succeed with the same PRESENT record."""
    started = _start(client, school, auth_headers)

    first = client.post('/api/attendance/check-in', json={'code': started['code']},
                        headers=auth_headers(school.student))
    second = client.post('/api/attendance/check-in', json={'code': started['code']},
                         headers=auth_headers(school.student))

    assert first.status_code == 200
    assert second.status_code == 200
    first_record = json.loads(first.data)['data']
    second_record = json.loads(second.data)['data']
    assert first_record['status'] == 'present'
    assert first_record['is_manual'] == False
    assert second_record['id'] == first_record['id']

def test_check_in_validation(client, school, auth_headers):
    response = client.post('/api/attendance/check-in', json={},
                           headers=auth_headers(school.student))
    assert response.status_code == 400

    response = client.post('/api/attendance/check-in', json={'code': '12ab56'},
                           headers=auth_headers(school.student))
    assert response.status_code == 400

def test_check_in_errors(client, school, auth_headers):
    started = _start(client, school, auth_headers)

    response = client.post('/api/attendance/check-in', json={'code': '000000'},
                           headers=auth_headers(school.student))
    assert response.status_code == 404

    response = client.post('/api/attendance/check-in', json={'code': started['code']},
                           headers=auth_headers(school.outsider))
    assert response.status_code == 403

def test_stop_then_check_in_is_rejected(client, school, auth_headers):
    started = _start(client, school, auth_headers)
    session_id = started['session']['id']

    response = client.post(f'/api/attendance/sessions/{session_id}/stop',
                           headers=auth_headers(school.teacher))
    assert response.status_code == 200
    assert json.loads(response.data)['data']['is_open'] == False

    response = client.post('/api/attendance/check-in', json={'code': started['code']},
                           headers=auth_headers(school.student))
    assert response.status_code == 400
    assert json.loads(response.data)['message'] == 'Attendance code has expired'

def test_manual_mark(client, school, auth_headers):
    started = _start(client, school, auth_headers)
    session_id = started['session']['id']

    response = client.post(f'/api/attendance/sessions/{session_id}/manual',
                           json={'student_id': school.student2.user_id, 'status': 'LATE'},
                           headers=auth_headers(school.teacher))

    assert response.status_code == 200
    record = json.loads(response.data)['data']
    assert record['status'] == 'late'
    assert record['is_manual'] == True

def test_manual_mark_validation(client, school, auth_headers):
    started = _start(client, school, auth_headers)
    url = f"/api/attendance/sessions/{started['session']['id']}/manual"

    response = client.post(url, json={'student_id': school.student.user_id},
                           headers=auth_headers(school.teacher))
    assert response.status_code == 400

    response = client.post(url, json={'student_id': school.student.user_id, 'status': 'sleeping'},
                           headers=auth_headers(school.teacher))
    assert response.status_code == 400

    response = client.post(url, json={'student_id': school.outsider.user_id, 'status': 'present'},
                           headers=auth_headers(school.teacher))
    assert response.status_code == 400

    response = client.post(url, json={'student_id': school.student.user_id, 'status': 'present'},
                           headers=auth_headers(school.other_teacher))
    assert response.status_code == 403

def test_session_detail_and_class_view(client, school, auth_headers):
    started = _start(client, school, auth_headers)
    session_id = started['session']['id']

    response = client.get(f'/api/attendance/sessions/{session_id}',
                          headers=auth_headers(school.admin))
    assert response.status_code == 200
    assert json.loads(response.data)['data']['id'] == session_id

    response = client.get(f'/api/attendance/sessions/{session_id}',
                          headers=auth_headers(school.student))
    assert response.status_code == 403

    response = client.get(f'/api/attendance/classes/{school.class_id}',
                          headers=auth_headers(school.teacher))
    assert response.status_code == 200
    data = json.loads(response.data)['data']
    assert [s['id'] for s in data['sessions']] == [session_id]

    response = client.get('/api/attendance/sessions/9999',
                          headers=auth_headers(school.teacher))
    assert response.status_code == 404

def test_history(client, school, auth_headers):
    started = _start(client, school, auth_headers)
    client.post('/api/attendance/check-in', json={'code': started['code']},
                headers=auth_headers(school.student))

    response = client.get('/api/attendance/history', headers=auth_headers(school.student))
    assert response.status_code == 200
    records = json.loads(response.data)['data']
    assert len(records) == 1
    assert records[0]['status'] == 'present'

    response = client.get(f'/api/attendance/history?student_id={school.student.user_id}',
                          headers=auth_headers(school.admin))
    assert response.status_code == 200
    assert len(json.loads(response.data)['data']) == 1

    response = client.get(f'/api/attendance/history?student_id={school.student.user_id}',
                          headers=auth_headers(school.student2))
    assert response.status_code == 403
