"""Test request validation helpers."""
import pytest
from schoolhub.models import AttendanceStatus
from schoolhub.utils.validators import ValidationError, Validator

@pytest.mark.parametrize('code', ['483920', '100000', '999999'])
def test_valid_join_codes(code):
    assert Validator.validate_join_code(code)['is_valid']

@pytest.mark.parametrize('code', [None, '', '12345', '1234567', '12a456', 483920, '４８３９２０'])
def test_invalid_join_codes(code):
    result = Validator.validate_join_code(code)
    assert not result['is_valid']
    assert result['errors']

def test_parse_status_accepts_value_or_name():
    assert Validator.parse_status('late') is AttendanceStatus.LATE
    assert Validator.parse_status('EXCUSED') is AttendanceStatus.EXCUSED
    assert Validator.parse_status(AttendanceStatus.ABSENT) is AttendanceStatus.ABSENT

@pytest.mark.parametrize('value', ['HADIR', '', None, 3])
def test_parse_status_rejects_unknown(value):
    with pytest.raises(ValidationError):
        Validator.parse_status(value)

def test_parse_id():
    assert Validator.parse_id('12', 'student_id') == 12
    for value in ('abc', 0, -1, None, True):
        with pytest.raises(ValidationError):
            Validator.parse_id(value, 'student_id')

def test_validation_error_is_bad_request():
    with pytest.raises(ValidationError) as excinfo:
        Validator.ensure(Validator.validate_required_fields({}, ['status']))
    assert excinfo.value.status_code == 400
    assert 'Status is required' in str(excinfo.value)
