"""Attendance session opened by a teacher for one class meeting."""
from datetime import datetime
from schoolhub import db
from schoolhub.models.base import BaseModel
from schoolhub.utils.helpers import utcnow

CODE_CONSTRAINT = 'uq_attendance_session_code'

class AttendanceSession(BaseModel):
    """Check-in window identified by a 6-digit join code."""

    __tablename__ = 'attendance_sessions'
    __table_args__ = (
        db.UniqueConstraint('code', name=CODE_CONSTRAINT),
    )

    class_id = db.Column(db.Integer, db.ForeignKey('classes.id'), nullable=False, index=True)
    code = db.Column(db.String(6), nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False)

    # Relationships
    classroom = db.relationship('Classroom', back_populates='attendance_sessions')
    records = db.relationship(
        'AttendanceRecord',
        back_populates='session',
        order_by='[AttendanceRecord.created_at, AttendanceRecord.id]'
    )

    def is_expired(self, now: datetime = None) -> bool:
        """Check if session is closed for self check-in."""
        return (now or utcnow()) >= self.expires_at

    def to_dict(self, include_records: bool = False):
        """Convert to dictionary."""
        data = super().to_dict()
        data['is_open'] = not self.is_expired()
        if include_records:
            data['records'] = [record.to_dict() for record in self.records]
        return data

    def __repr__(self):
        return f'<AttendanceSession {self.id} class={self.class_id}>'
