"""Test environment: settings are read at import time, so seed them before any app import."""

import os

os.environ["APP_ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-0123456789abcdef0123456789abcdef"
os.environ["SMTP_HOST"] = ""
os.environ["ADMIN_EMAIL"] = ""
os.environ["ALLOW_ADMIN_SIGNUP"] = "true"
