"""Utility script to issue a development bearer token for a profile."""

from __future__ import annotations

import argparse
from datetime import timedelta

from rating_notifications.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for token creation."""

    parser = argparse.ArgumentParser(
        description="Issue a bearer token accepted by the notifications API.",
    )
    parser.add_argument("profile_id", help="Profile identifier placed in the 'sub' claim")
    parser.add_argument(
        "--minutes",
        type=int,
        default=None,
        help="Token lifetime in minutes (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    return parser.parse_args()


def main() -> None:
    """Print a token for the requested profile."""

    args = parse_args()
    if args.minutes is not None and args.minutes <= 0:
        raise SystemExit("--minutes must be a positive number")

    expires = timedelta(minutes=args.minutes) if args.minutes else None
    print(create_access_token(args.profile_id, expires_delta=expires))


if __name__ == "__main__":
    main()
