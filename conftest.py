"""Root conftest: test settings come from .env.test, real env vars win."""
from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

# must run before registration_service.config builds its module-level settings
load_dotenv(Path(__file__).resolve().parent / ".env.test", override=False)
