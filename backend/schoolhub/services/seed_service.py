# File: backend/schoolhub/services/seed_service.py
"""Database seeding service for sample data."""
from schoolhub import db
from schoolhub.models.user import User, UserRole
from schoolhub.models.classroom import Classroom, Enrollment, EnrollmentRole

class SeedService:
    """Service to seed database with sample data."""

    TEACHERS = [
        ('Budi Santoso', 'budi.santoso'),
        ('Siti Rahma', 'siti.rahma'),
    ]

    STUDENTS = [
        ('Andi Wijaya', 'andi.wijaya'),
        ('Dewi Lestari', 'dewi.lestari'),
        ('Rizky Pratama', 'rizky.pratama'),
        ('Nadia Putri', 'nadia.putri'),
        ('Fajar Nugroho', 'fajar.nugroho'),
        ('Intan Sari', 'intan.sari'),
    ]

    CLASSES = [
        ('Mathematics 10A', 'Algebra and geometry'),
        ('Physics 10A', 'Mechanics'),
    ]

    @staticmethod
    def seed_all() -> dict:
        """Seed all sample data."""
        users = SeedService.seed_users()
        classes = SeedService.seed_classes()
        enrollments = SeedService.seed_enrollments()
        return {'users': users, 'classes': classes, 'enrollments': enrollments}

    @staticmethod
    def _get_or_create_user(name: str, username: str, role: UserRole) -> bool:
        email = f"{username}@school.test"
        if User.query.filter_by(email=email).first():
            return False
        db.session.add(User(email=email, name=name, role=role))
        return True

    @staticmethod
    def seed_users() -> int:
        """Seed admin, teachers and students."""
        created = int(SeedService._get_or_create_user('Administrator', 'admin', UserRole.ADMIN))

        for name, username in SeedService.TEACHERS:
            created += SeedService._get_or_create_user(name, username, UserRole.TEACHER)

        for name, username in SeedService.STUDENTS:
            created += SeedService._get_or_create_user(name, username, UserRole.STUDENT)

        db.session.commit()
        return created

    @staticmethod
    def seed_classes() -> int:
        """Seed sample classes."""
        created = 0
        for name, description in SeedService.CLASSES:
            if not Classroom.query.filter_by(name=name).first():
                db.session.add(Classroom(name=name, description=description))
                created += 1

        db.session.commit()
        return created

    @staticmethod
    def seed_enrollments() -> int:
        """Assign one teacher per class and split the students across classes."""
        created = 0
        teachers = User.query.filter_by(role=UserRole.TEACHER).order_by(User.id).all()
        students = User.query.filter_by(role=UserRole.STUDENT).order_by(User.id).all()
        classes = Classroom.query.order_by(Classroom.id).all()

        for index, classroom in enumerate(classes):
            members = []
            if teachers:
                members.append((teachers[index % len(teachers)], EnrollmentRole.TEACHER))
            members.extend(
                (student, EnrollmentRole.STUDENT)
                for student in students[index::len(classes)]
            )

            for user, role in members:
                exists = Enrollment.query.filter_by(user_id=user.id, class_id=classroom.id).first()
                if not exists:
                    db.session.add(Enrollment(user_id=user.id, class_id=classroom.id, role=role))
                    created += 1

        db.session.commit()
        return created
