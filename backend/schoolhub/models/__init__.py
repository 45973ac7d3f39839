"""Models package with all models."""
from .base import BaseModel
from .user import User, UserRole
from .classroom import Classroom, Enrollment, EnrollmentRole
from .attendance_session import AttendanceSession
from .attendance import AttendanceRecord, AttendanceStatus

__all__ = [
    'BaseModel', 'User', 'UserRole',
    'Classroom', 'Enrollment', 'EnrollmentRole',
    'AttendanceSession', 'AttendanceRecord', 'AttendanceStatus'
]
