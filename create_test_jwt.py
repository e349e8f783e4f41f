#!/usr/bin/env python3
"""Create a test JWT token for calling the insights API."""

import sys
import uuid
from datetime import datetime, timedelta

from jose import jwt

from pharmis_backend.config import settings

SETTINGS = settings()
JWT_EXPIRES = timedelta(hours=24)

# matches the user seeded by create_test_data.py
DEFAULT_USER_ID = "11111111-1111-1111-1111-111111111111"


def create_test_token(user_id: str = DEFAULT_USER_ID):
    """Create a test JWT token carrying `uid`."""
    user_id = str(uuid.UUID(user_id))

    now = datetime.utcnow()
    payload = {
        "uid": user_id,
        "iat": now,
        "exp": now + JWT_EXPIRES,
    }

    token = jwt.encode(payload, SETTINGS.jwt_secret, algorithm=SETTINGS.jwt_algorithm)

    with open('test_token.txt', 'w') as f:
        f.write(token)

    print(f"User ID: {user_id}")
    print(f"Token saved to: test_token.txt")
    print(f"\ncurl -H 'Authorization: Bearer {token}' http://localhost:8000/insights/latest")

    return token, user_id


if __name__ == "__main__":
    create_test_token(*sys.argv[1:2])
