"""Attendance record model."""
from enum import Enum
from sqlalchemy.dialects import postgresql, sqlite
from schoolhub import db
from schoolhub.models.base import BaseModel
from schoolhub.utils.helpers import utcnow

class AttendanceStatus(Enum):
    """Attendance outcome for one student in one session."""
    PRESENT = 'present'
    ABSENT = 'absent'
    EXCUSED = 'excused'
    LATE = 'late'

_UPSERT_DIALECTS = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}

class AttendanceRecord(BaseModel):
    """One student's attendance for one session."""

    __tablename__ = 'attendance_records'
    __table_args__ = (
        db.UniqueConstraint('session_id', 'student_id', name='uq_attendance_session_student'),
    )

    session_id = db.Column(db.Integer, db.ForeignKey('attendance_sessions.id'), nullable=False, index=True)
    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    status = db.Column(db.Enum(AttendanceStatus), nullable=False, default=AttendanceStatus.ABSENT)
    # True when entered by a teacher rather than by self check-in
    is_manual = db.Column(db.Boolean, nullable=False, default=False)

    # Relationships
    session = db.relationship('AttendanceSession', back_populates='records')
    student = db.relationship('User', back_populates='attendance_records')

    @classmethod
    def upsert(cls, session_id: int, student_id: int, status: AttendanceStatus,
               is_manual: bool) -> None:
        """Insert or overwrite the (session, student) record in one statement."""
        dialect = db.session.get_bind().dialect.name
        try:
            insert = _UPSERT_DIALECTS[dialect]
        except KeyError:
            raise RuntimeError(f"Upsert is not supported on {dialect}") from None

        now = utcnow()
        stmt = insert(cls.__table__).values(
            session_id=session_id,
            student_id=student_id,
            status=status,
            is_manual=is_manual,
            created_at=now,
            updated_at=now
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=['session_id', 'student_id'],
            set_={
                'status': stmt.excluded.status,
                'is_manual': stmt.excluded.is_manual,
                'updated_at': stmt.excluded.updated_at
            }
        )
        db.session.execute(stmt)

    def to_dict(self, include_session: bool = False):
        """Convert to dictionary."""
        data = super().to_dict()
        data['student'] = self.student.to_summary() if self.student else None
        if include_session:
            session = self.session
            data['session'] = {
                'id': session.id,
                'code': session.code,
                'created_at': session.created_at.isoformat(),
                'expires_at': session.expires_at.isoformat(),
                'classroom': {
                    'id': session.classroom.id,
                    'name': session.classroom.name
                }
            }
        return data

    def __repr__(self):
        return f'<AttendanceRecord {self.student_id}-{self.session_id} {self.status.value}>'
