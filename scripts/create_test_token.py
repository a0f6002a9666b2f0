"""Print a bearer token for local API calls.

Usage:
    uv run python -m scripts.create_test_token <member_uid> [minutes]
Signs with SECRET_KEY from the environment (or .env). The member's role is
read from members/<uid> at request time, not from the token.
"""

import sys
from datetime import timedelta

from dotenv import load_dotenv

from app.infrastructure.security import create_access_token


def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: uv run python -m scripts.create_test_token <member_uid> [minutes]", file=sys.stderr)
        sys.exit(1)
    load_dotenv()
    minutes = int(sys.argv[2]) if len(sys.argv) > 2 else None
    token = create_access_token(
        sys.argv[1],
        expires_delta=timedelta(minutes=minutes) if minutes else None,
    )
    print(token)


if __name__ == "__main__":
    main()
