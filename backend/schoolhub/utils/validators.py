"""Validation utilities for the application."""
import re
from typing import Dict, List, Any
from schoolhub.models.attendance import AttendanceStatus
from schoolhub.utils.exceptions import BadRequestError

JOIN_CODE_PATTERN = re.compile(r'^[0-9]{6}$')

class ValidationError(BadRequestError):
    """Custom validation error."""
    pass

class Validator:
    """Validation helper class."""

    @staticmethod
    def validate_join_code(code: Any) -> Dict[str, Any]:
        """Validate join code format (exactly 6 ASCII digits)."""
        errors = []

        if code is None or code == '':
            errors.append("Code is required")
        elif not isinstance(code, str) or not JOIN_CODE_PATTERN.match(code):
            errors.append("Code must be exactly 6 digits")

        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }

    @staticmethod
    def validate_required_fields(data: Dict, required_fields: List[str]) -> Dict[str, Any]:
        """Validate required fields in data."""
        errors = []

        for field in required_fields:
            if field not in data or data[field] is None or data[field] == '':
                errors.append(f"{field.title()} is required")

        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }

    @staticmethod
    def parse_status(value: Any) -> AttendanceStatus:
        """Parse an attendance status given by value ('late') or name ('LATE')."""
        if isinstance(value, AttendanceStatus):
            return value
        if isinstance(value, str):
            try:
                return AttendanceStatus(value.strip().lower())
            except ValueError:
                pass
        allowed = ', '.join(status.value for status in AttendanceStatus)
        raise ValidationError(f"Status must be one of: {allowed}")

    @staticmethod
    def parse_id(value: Any, field: str) -> int:
        """Parse a positive integer identifier."""
        if isinstance(value, bool):
            raise ValidationError(f"{field} must be a positive integer")
        try:
            parsed = int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"{field} must be a positive integer") from None
        if parsed < 1:
            raise ValidationError(f"{field} must be a positive integer")
        return parsed

    @staticmethod
    def ensure(result: Dict[str, Any]) -> None:
        """Raise ValidationError for a failed validation result."""
        if not result["is_valid"]:
            raise ValidationError('; '.join(result["errors"]))
