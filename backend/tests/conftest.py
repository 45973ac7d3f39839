"""Shared fixtures: app, client, a class with a teacher and enrolled students."""
from types import SimpleNamespace
import pytest
from flask_jwt_extended import create_access_token
from schoolhub import create_app, db
from schoolhub.models import Classroom, Enrollment, EnrollmentRole, User, UserRole
from schoolhub.utils.decorators import Identity

@pytest.fixture
def app():
    """Create test app."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()

def _user(name, role):
    user = User(email=f"{name}@school.test", name=name.title(), role=role)
    db.session.add(user)
    return user

def _enroll(user, classroom, role):
    db.session.add(Enrollment(user_id=user.id, class_id=classroom.id, role=role))

@pytest.fixture
def school(app):
    """Class C taught by T with students S and S2; an outsider student and a second teacher."""
    admin = _user('admin', UserRole.ADMIN)
    teacher = _user('teacher', UserRole.TEACHER)
    other_teacher = _user('other', UserRole.TEACHER)
    student = _user('student', UserRole.STUDENT)
    student2 = _user('student2', UserRole.STUDENT)
    outsider = _user('outsider', UserRole.STUDENT)
    classroom = Classroom(name='Mathematics 10A')
    other_classroom = Classroom(name='Physics 10A')
    db.session.add_all([classroom, other_classroom])
    db.session.flush()

    _enroll(teacher, classroom, EnrollmentRole.TEACHER)
    _enroll(student, classroom, EnrollmentRole.STUDENT)
    _enroll(student2, classroom, EnrollmentRole.STUDENT)
    _enroll(other_teacher, other_classroom, EnrollmentRole.TEACHER)
    _enroll(outsider, other_classroom, EnrollmentRole.STUDENT)
    db.session.commit()

    return SimpleNamespace(
        class_id=classroom.id,
        other_class_id=other_classroom.id,
        admin=Identity(admin.id, UserRole.ADMIN),
        teacher=Identity(teacher.id, UserRole.TEACHER),
        other_teacher=Identity(other_teacher.id, UserRole.TEACHER),
        student=Identity(student.id, UserRole.STUDENT),
        student2=Identity(student2.id, UserRole.STUDENT),
        outsider=Identity(outsider.id, UserRole.STUDENT),
    )

@pytest.fixture
def auth_headers(app):
    """Build bearer headers for an Identity."""
    def make(identity):
        token = create_access_token(
            identity=str(identity.user_id),
            additional_claims={'role': identity.role.value}
        )
        return {'Authorization': f'Bearer {token}'}
    return make
