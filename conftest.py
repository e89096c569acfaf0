"""Global pytest configuration."""

import os

# Pin settings that tests assert against before any imports read them
os.environ.setdefault("PERDIEM_REPORTING_CURRENCY", "USD")
os.environ.setdefault("PERDIEM_DEFAULT_HOME_TZ", "America/New_York")
