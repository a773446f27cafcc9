"""
PostgreSQL-specific Django test settings.

The production ``empresas`` table lives in hosted Postgres; run the
gateway tests against it with:
DJANGO_SETTINGS_MODULE=tests.settings_postgres pytest tests/
"""

import os
from tests.settings import *  # noqa: F401,F403

# Override database for PostgreSQL
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.environ.get("POSTGRES_DB", "empresa_branding_test"),
        "USER": os.environ.get("POSTGRES_USER", "postgres"),
        "PASSWORD": os.environ.get("POSTGRES_PASSWORD", ""),
        "HOST": os.environ.get("POSTGRES_HOST", "localhost"),
        "PORT": os.environ.get("POSTGRES_PORT", "5432"),
        "TEST": {
            "NAME": "empresa_branding_test",
        },
        "OPTIONS": {
            "connect_timeout": 10,
        },
    }
}
