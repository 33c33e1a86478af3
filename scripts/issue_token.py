"""Mint a development bearer token.

Usage: python scripts/issue_token.py <user_id> <employee|hr|admin> [hours]
"""

from __future__ import annotations

import importlib
import sys
from datetime import timedelta
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from dotenv import load_dotenv

from config import get_settings_module

from smarttrack.auth.tokens import issue_token


def main(argv: list[str]) -> int:
    if len(argv) < 2:
        print(__doc__.strip())
        return 2

    load_dotenv(REPO_ROOT / ".env", override=False)
    settings = importlib.import_module(get_settings_module())
    hours = float(argv[2]) if len(argv) > 2 else 12
    token = issue_token(
        int(argv[0]),
        argv[1],
        secret=settings.JWT_SECRET,
        algorithm=getattr(settings, "JWT_ALGORITHM", "HS256"),
        expires_in=timedelta(hours=hours),
    )
    print(token)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
