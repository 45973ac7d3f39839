# backend/schoolhub/services/attendance_service.py
"""Attendance session service: join codes, check-in and teacher corrections.

Every operation receives the caller's ``Identity`` explicitly. Roles are
checked first, then existence, then enrollment, and nothing is written
until all checks have passed.

Records follow the pre-seeded roster policy: starting a session inserts an
ABSENT record for each enrolled student, and check-in and manual marks
upsert on the (session, student) unique key.
"""
from typing import Dict, List
from flask import current_app
from sqlalchemy.exc import IntegrityError
from schoolhub import db
from schoolhub.models.attendance import AttendanceRecord, AttendanceStatus
from schoolhub.models.attendance_session import AttendanceSession
from schoolhub.models.classroom import Classroom, EnrollmentRole
from schoolhub.models.user import UserRole
from schoolhub.services.code_service import CodeService
from schoolhub.utils.decorators import Identity
from schoolhub.utils.exceptions import (
    BadRequestError, CodeGenerationError, ForbiddenError, NotFoundError
)
from schoolhub.utils.helpers import utcnow

class AttendanceService:
    """Service for attendance sessions and records."""

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @staticmethod
    def _get_classroom(class_id: int) -> Classroom:
        classroom = Classroom.get_by_id(class_id)
        if not classroom:
            raise NotFoundError(f"Class with ID {class_id} not found")
        return classroom

    @staticmethod
    def _get_session(session_id: int) -> AttendanceSession:
        session = AttendanceSession.get_by_id(session_id)
        if not session:
            raise NotFoundError("Attendance session not found")
        return session

    @staticmethod
    def _require_teacher_of(classroom: Classroom, identity: Identity) -> None:
        if not classroom.has_member(identity.user_id, EnrollmentRole.TEACHER):
            raise ForbiddenError("You are not assigned as teacher for this class")

    @staticmethod
    def _require_reader_of(classroom: Classroom, identity: Identity) -> None:
        identity.require(UserRole.TEACHER, UserRole.ADMIN)
        if identity.role == UserRole.TEACHER:
            AttendanceService._require_teacher_of(classroom, identity)

    @staticmethod
    def _get_record(session_id: int, student_id: int) -> AttendanceRecord:
        return AttendanceRecord.query.filter_by(
            session_id=session_id,
            student_id=student_id
        ).one()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @staticmethod
    def start_session(class_id: int, identity: Identity) -> Dict:
        """Open a check-in window for a class and pre-seed its roster as ABSENT."""
        identity.require(UserRole.TEACHER)
        classroom = AttendanceService._get_classroom(class_id)
        AttendanceService._require_teacher_of(classroom, identity)

        duration = current_app.config['ATTENDANCE_SESSION_DURATION']
        max_attempts = current_app.config['ATTENDANCE_CODE_MAX_ATTEMPTS']

        session = None
        for attempt in range(1, max_attempts + 1):
            now = utcnow()
            candidate = AttendanceSession(
                class_id=class_id,
                code=CodeService.generate_join_code(),
                created_at=now,
                updated_at=now,
                expires_at=now + duration
            )
            db.session.add(candidate)
            try:
                db.session.flush()
            except IntegrityError as e:
                db.session.rollback()
                if not CodeService.is_code_collision(e):
                    raise
                current_app.logger.warning(
                    'Join code collision for class %s (attempt %s/%s)',
                    class_id, attempt, max_attempts
                )
                continue
            session = candidate
            break

        if session is None:
            current_app.logger.error(
                'No free join code for class %s after %s attempts', class_id, max_attempts
            )
            raise CodeGenerationError("Could not allocate a join code, please retry")

        # Roster is frozen at this point; later enrollments get a record on check-in
        for student_id in Classroom.get_by_id(class_id).student_ids():
            db.session.add(AttendanceRecord(
                session_id=session.id,
                student_id=student_id,
                status=AttendanceStatus.ABSENT,
                is_manual=False,
                created_at=session.created_at,
                updated_at=session.created_at
            ))

        db.session.commit()

        current_app.logger.info(
            'Attendance session %s started for class %s by user %s',
            session.id, class_id, identity.user_id
        )

        return {
            'code': session.code,
            'expires_at': session.expires_at.isoformat(),
            'session': AttendanceService._session_payload(session)
        }

    @staticmethod
    def check_in(code: str, identity: Identity) -> Dict:
        """Mark the calling student PRESENT for the session owning the code."""
        identity.require(UserRole.STUDENT)

        session = AttendanceSession.query.filter_by(code=code).first()
        if not session:
            raise NotFoundError("Invalid attendance code")

        if session.is_expired(utcnow()):
            raise BadRequestError("Attendance code has expired")

        if not session.classroom.has_member(identity.user_id, EnrollmentRole.STUDENT):
            raise ForbiddenError("You are not enrolled in this class")

        # Repeated check-ins overwrite the same record with PRESENT, self-entered
        AttendanceRecord.upsert(
            session_id=session.id,
            student_id=identity.user_id,
            status=AttendanceStatus.PRESENT,
            is_manual=False
        )
        db.session.commit()

        record = AttendanceService._get_record(session.id, identity.user_id)
        return record.to_dict(include_session=True)

    @staticmethod
    def manual_mark(session_id: int, identity: Identity, student_id: int,
                    status: AttendanceStatus) -> Dict:
        """Create or overwrite a student's record as teacher-entered, ignoring expiry."""
        identity.require(UserRole.TEACHER)
        session = AttendanceService._get_session(session_id)
        AttendanceService._require_teacher_of(session.classroom, identity)

        if not session.classroom.has_member(student_id, EnrollmentRole.STUDENT):
            raise BadRequestError("Student is not enrolled in this class")

        AttendanceRecord.upsert(
            session_id=session.id,
            student_id=student_id,
            status=status,
            is_manual=True
        )
        db.session.commit()

        current_app.logger.info(
            'Session %s: user %s marked student %s as %s',
            session_id, identity.user_id, student_id, status.value
        )

        return AttendanceService._get_record(session_id, student_id).to_dict()

    @staticmethod
    def stop_session(session_id: int, identity: Identity) -> Dict:
        """Close the check-in window now. Stopping a closed session changes nothing."""
        identity.require(UserRole.TEACHER)
        session = AttendanceService._get_session(session_id)
        AttendanceService._require_teacher_of(session.classroom, identity)

        now = utcnow()
        if not session.is_expired(now):
            session.update(expires_at=now)
            current_app.logger.info(
                'Attendance session %s stopped by user %s', session_id, identity.user_id
            )

        return AttendanceService._session_payload(session)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @staticmethod
    def get_session_detail(session_id: int, identity: Identity) -> Dict:
        """Session with its class and records, records oldest-first."""
        session = AttendanceService._get_session(session_id)
        AttendanceService._require_reader_of(session.classroom, identity)
        return AttendanceService._session_payload(session)

    @staticmethod
    def get_history_for_student(student_id: int, identity: Identity) -> List[Dict]:
        """A student's records across sessions, newest-first."""
        identity.require(UserRole.STUDENT, UserRole.ADMIN)
        if identity.role == UserRole.STUDENT and identity.user_id != student_id:
            raise ForbiddenError("Students can only view their own attendance")

        records = AttendanceRecord.query.filter_by(student_id=student_id).order_by(
            AttendanceRecord.created_at.desc(),
            AttendanceRecord.id.desc()
        ).all()

        return [record.to_dict(include_session=True) for record in records]

    @staticmethod
    def get_sessions_for_class(class_id: int, identity: Identity) -> Dict:
        """All sessions of a class newest-first, each with records oldest-first."""
        classroom = AttendanceService._get_classroom(class_id)
        AttendanceService._require_reader_of(classroom, identity)

        sessions = classroom.attendance_sessions.order_by(
            AttendanceSession.created_at.desc(),
            AttendanceSession.id.desc()
        ).all()

        return {
            'classroom': classroom.to_dict(),
            'sessions': [session.to_dict(include_records=True) for session in sessions]
        }

    @staticmethod
    def _session_payload(session: AttendanceSession) -> Dict:
        data = session.to_dict(include_records=True)
        data['classroom'] = session.classroom.to_dict()
        return data
