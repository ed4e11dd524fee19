from __future__ import annotations

import secrets

# no 0/O, 1/I/l or i/o: report ids get read out and typed by hand
REPORT_ID_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghjkmnpqrstuvwxyz23456789"
REPORT_ID_LENGTH = 8


def generate_report_id(length: int = REPORT_ID_LENGTH) -> str:
    return "".join(secrets.choice(REPORT_ID_ALPHABET) for _ in range(length))
