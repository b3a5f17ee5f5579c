import base64

import pytest

from attendance.badges import decode_badge, encode_badge, generate_badge_qr
from roster.models import Student


def test_badge_payload_carries_id_and_code():
    student = Student(pk=42, full_name='Nguyễn Văn An', student_code='HA172336')
    assert encode_badge(student) == 'ATT*1.0*ID:42*CODE:HA172336'
    assert decode_badge(encode_badge(student)) == (42, 'HA172336')


def test_badge_without_code():
    student = Student(pk=7, full_name='Trần Thị Bình')
    assert decode_badge(encode_badge(student)) == (7, '')


@pytest.mark.parametrize('payload', [
    '',
    None,
    'SPD*1.0*ACC:CZ123',
    'ATT*1.0*CODE:HA172336',
    'ATT*1.0*ID:abc',
    'ATT*1.0*garbage',
])
def test_foreign_payloads_are_rejected(payload):
    with pytest.raises(ValueError):
        decode_badge(payload)


def test_badge_renders_as_png():
    student = Student(pk=42, full_name='Nguyễn Văn An', student_code='HA172336')
    png = base64.b64decode(generate_badge_qr(student))
    assert png.startswith(b'\x89PNG')
