import string

from src.cohort_tracker.cohort_tracker.attendance.codes import generate_public_id, generate_session_code


def test_session_code_is_eight_base36_chars():
    allowed = set(string.digits + string.ascii_lowercase)

    for _ in range(50):
        code = generate_session_code()
        assert len(code) == 8
        assert set(code) <= allowed


def test_public_id_is_longer_than_code():
    assert len(generate_public_id()) > len(generate_session_code())
