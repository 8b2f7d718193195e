"""Settings for the pytest run.

``SECRET_KEY`` has no default in the base settings, so a throwaway one
is provided before they are imported.  SQLite test databases are
created in memory by Django.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from config.settings import *  # noqa: E402,F401,F403

DEBUG = False
CUSTOMERS_VERIFY_DOCUMENT_CHECKSUM = False
