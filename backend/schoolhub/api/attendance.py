# File: backend/schoolhub/api/attendance.py
"""Attendance API endpoints: join-code sessions, check-in and corrections."""
from flask import Blueprint, current_app, request
from schoolhub import limiter
from schoolhub.services.attendance_service import AttendanceService
from schoolhub.utils.decorators import identity_or_remote_address, identity_required
from schoolhub.utils.helpers import success_response
from schoolhub.utils.validators import Validator

attendance_bp = Blueprint('attendance', __name__)

def _checkin_rate_limit() -> str:
    return current_app.config['CHECKIN_RATE_LIMIT']

@attendance_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Attendance service is running')

@attendance_bp.route('/classes/<int:class_id>/start', methods=['POST'])
@identity_required
def start_session(class_id, identity):
    """Teacher opens a check-in window for a class."""
    result = AttendanceService.start_session(class_id, identity)
    return success_response(
        data=result,
        message='Class started successfully',
        status_code=201
    )

@attendance_bp.route('/check-in', methods=['POST'])
@limiter.limit(_checkin_rate_limit, key_func=identity_or_remote_address)
@identity_required
def check_in(identity):
    """Student checks in with a join code."""
    data = request.get_json(silent=True) or {}
    Validator.ensure(Validator.validate_join_code(data.get('code')))

    record = AttendanceService.check_in(data['code'], identity)
    return success_response(data=record, message='Attendance recorded')

@attendance_bp.route('/sessions/<int:session_id>/manual', methods=['POST'])
@identity_required
def manual_mark(session_id, identity):
    """Teacher records a status for a student, regardless of expiry."""
    data = request.get_json(silent=True) or {}
    Validator.ensure(Validator.validate_required_fields(data, ['student_id', 'status']))

    student_id = Validator.parse_id(data['student_id'], 'student_id')
    status = Validator.parse_status(data['status'])

    record = AttendanceService.manual_mark(session_id, identity, student_id, status)
    return success_response(data=record, message='Manual attendance recorded')

@attendance_bp.route('/sessions/<int:session_id>/stop', methods=['POST'])
@identity_required
def stop_session(session_id, identity):
    """Teacher closes the check-in window early."""
    session = AttendanceService.stop_session(session_id, identity)
    return success_response(data=session, message='Attendance session stopped')

@attendance_bp.route('/sessions/<int:session_id>', methods=['GET'])
@identity_required
def get_session(session_id, identity):
    """Session detail with records."""
    return success_response(data=AttendanceService.get_session_detail(session_id, identity))

@attendance_bp.route('/history', methods=['GET'])
@identity_required
def get_history(identity):
    """Attendance history of the caller, or of ``student_id`` for admins."""
    student_id = request.args.get('student_id')
    if student_id is None:
        student_id = identity.user_id
    else:
        student_id = Validator.parse_id(student_id, 'student_id')

    records = AttendanceService.get_history_for_student(student_id, identity)
    return success_response(data=records)

@attendance_bp.route('/classes/<int:class_id>', methods=['GET'])
@identity_required
def get_class_sessions(class_id, identity):
    """All sessions of a class with their records."""
    return success_response(data=AttendanceService.get_sessions_for_class(class_id, identity))
