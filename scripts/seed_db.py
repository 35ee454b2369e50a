from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv

from company_portal.database.bootstrap import ensure_demo_users
from company_portal.settings import load_settings


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()

    ensure_demo_users(settings.db)
    print(f"OK: Seeded demo accounts -> {settings.db.describe()}")


if __name__ == "__main__":
    main()
