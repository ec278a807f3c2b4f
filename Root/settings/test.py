import os
import tempfile

os.environ.setdefault("SECRET_KEY", "django-insecure-test-key-for-unit-tests-only")

from Root.settings.base import *  # noqa: F403

DEBUG = False
ALLOWED_HOSTS = ['*']

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

MOCK_USER_STORE_PATH = os.path.join(tempfile.gettempdir(), 'amzify-test-mock-users.json')

GROQ_API_KEY = 'test-groq-key'

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []  # noqa: F405
REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'] = {'anon': '10000/min', 'auth': '10000/min'}  # noqa: F405

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {'class': 'logging.NullHandler'},
    },
    'loggers': {
        'apps': {'handlers': ['null'], 'propagate': False},
    },
}
