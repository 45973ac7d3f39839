"""Class and enrollment models."""
from enum import Enum
from typing import Optional
from schoolhub import db
from schoolhub.models.base import BaseModel

class EnrollmentRole(Enum):
    """Capacity in which a user takes part in a class."""
    TEACHER = 'teacher'
    STUDENT = 'student'

class Classroom(BaseModel):
    """A class (group of students taught together)."""

    __tablename__ = 'classes'

    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    # Relationships
    enrollments = db.relationship('Enrollment', back_populates='classroom', lazy='dynamic')
    attendance_sessions = db.relationship('AttendanceSession', back_populates='classroom', lazy='dynamic')

    def enrollment_for(self, user_id: int) -> Optional['Enrollment']:
        """Return the user's enrollment on this class, if any."""
        return self.enrollments.filter_by(user_id=user_id).first()

    def has_member(self, user_id: int, role: EnrollmentRole) -> bool:
        """Check whether the user is enrolled on this class in the given capacity."""
        enrollment = self.enrollment_for(user_id)
        return enrollment is not None and enrollment.role == role

    def student_ids(self) -> list:
        """IDs of the students currently enrolled, in enrollment order."""
        rows = self.enrollments.filter_by(role=EnrollmentRole.STUDENT) \
            .order_by(Enrollment.id).with_entities(Enrollment.user_id).all()
        return [row.user_id for row in rows]

    def __repr__(self):
        return f'<Classroom {self.name}>'

class Enrollment(BaseModel):
    """Membership of a user in a class."""

    __tablename__ = 'enrollments'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'class_id', name='uq_enrollment_user_class'),
    )

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    class_id = db.Column(db.Integer, db.ForeignKey('classes.id'), nullable=False, index=True)
    role = db.Column(db.Enum(EnrollmentRole), nullable=False, default=EnrollmentRole.STUDENT)

    # Relationships
    user = db.relationship('User', back_populates='enrollments')
    classroom = db.relationship('Classroom', back_populates='enrollments')

    def __repr__(self):
        return f'<Enrollment {self.user_id}-{self.class_id} {self.role.value}>'
