"""User model for identity and authorization."""
from enum import Enum
from schoolhub import db
from schoolhub.models.base import BaseModel

class UserRole(Enum):
    """User roles enumeration."""
    ADMIN = 'admin'
    TEACHER = 'teacher'
    STUDENT = 'student'

class User(BaseModel):
    """User model for all system users."""

    __tablename__ = 'users'

    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    role = db.Column(db.Enum(UserRole), nullable=False, default=UserRole.STUDENT)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    # Relationships
    enrollments = db.relationship('Enrollment', back_populates='user', lazy='dynamic')
    attendance_records = db.relationship('AttendanceRecord', back_populates='student', lazy='dynamic')

    def to_summary(self) -> dict:
        """Public fields embedded in attendance projections."""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email
        }

    def __repr__(self) -> str:
        return f'<User {self.email}>'
