"""
attendance/badges.py
────────────────────
Student QR badges.

A badge encodes  ATT*1.0*ID:<student pk>*CODE:<student_code>  and is
printed on the child's card.  Scanning it at the door checks the child in
(see services.check_in_from_qr).
"""

import base64
import io

import qrcode

BADGE_HEADER = 'ATT*1.0'


def encode_badge(student):
    """Payload string for *student*'s badge."""
    return '*'.join([BADGE_HEADER, f'ID:{student.pk}', f'CODE:{student.student_code or ""}'])


def decode_badge(payload):
    """
    Parse a scanned payload into (student_id, student_code).
    Raises ValueError for anything that is not one of our badges.
    """
    payload = (payload or '').strip()
    if not payload.startswith(BADGE_HEADER + '*'):
        raise ValueError('not a student badge')

    fields = {}
    for part in payload[len(BADGE_HEADER) + 1:].split('*'):
        key, sep, value = part.partition(':')
        if not sep:
            raise ValueError(f'malformed badge field {part!r}')
        fields[key] = value

    if 'ID' not in fields:
        raise ValueError('badge has no student id')
    return int(fields['ID']), fields.get('CODE', '')


def generate_badge_qr(student, box_size: int = 7):
    """
    Render *student*'s badge as a base64-encoded PNG string
    for use in <img src="data:image/png;base64,..."> tags.
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=4,
    )
    qr.add_data(encode_badge(student))
    qr.make(fit=True)

    img = qr.make_image(fill_color="#1a1a2e", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("utf-8")
