"""
Global pytest configuration.
Seeds the environment before config.settings is imported anywhere.
"""

import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("ALLOWED_ORIGIN", "http://localhost:3000")
os.environ.setdefault("ANTHROPIC_API_KEY", "sk-ant-test-key")
os.environ.setdefault("EXA_API_KEY", "exa-test-key")
os.environ.setdefault("EXTRACT_RETRY_DELAY_SECONDS", "0")
os.environ.setdefault("VERIFY_PACING_SECONDS", "0")
