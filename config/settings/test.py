"""Test settings for the slot booking service.

File-backed SQLite, eager Celery and the locmem email backend so the test
suite never needs a broker or an SMTP server. The test database lives in a
file so threaded tests can open their own connections to it. Set
``DB_ENGINE`` to ``django.db.backends.postgresql`` to run the suite against
a real PostgreSQL database.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

if os.environ.get('DB_ENGINE', 'django.db.backends.sqlite3') == 'django.db.backends.sqlite3':
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'test_db.sqlite3',
            'OPTIONS': SQLITE_OPTIONS,
            'TEST': {'NAME': BASE_DIR / 'test_db.sqlite3'},
        }
    }

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

BOOKING_ADMIN_TOKEN = 'test-admin-token'
BOOKING_EMAIL_ENABLED = True
BOOKING_ADMIN_EMAIL = 'owner@example.com'
