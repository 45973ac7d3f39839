# backend/schoolhub/services/code_service.py
"""Join code generation service."""
import secrets
from schoolhub.models.attendance_session import AttendanceSession, CODE_CONSTRAINT

CODE_MIN = 100000
CODE_MAX = 999999

class CodeService:
    """Service for join code operations."""

    @staticmethod
    def generate_join_code() -> str:
        """
        Generate a 6-digit join code.
        Sampled uniformly from [100000, 999999], so the code never has a leading zero.
        """
        return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))

    @staticmethod
    def is_code_collision(error) -> bool:
        """Tell whether an IntegrityError was raised by the unique join code constraint.

        PostgreSQL drivers report the violated constraint by name. SQLite only
        names the columns, as ``UNIQUE constraint failed: <table>.<column>``.
        """
        orig = getattr(error, 'orig', error)
        constraint_name = getattr(getattr(orig, 'diag', None), 'constraint_name', None)
        if constraint_name is not None:
            return constraint_name == CODE_CONSTRAINT

        column = f"{AttendanceSession.__tablename__}.code"
        return str(orig).startswith('UNIQUE constraint failed') and column in str(orig).split(': ', 1)[-1].split(', ')
