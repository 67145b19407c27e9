from .base import *  # noqa: F401,F403

DEBUG = False
API_AUTH_TOKEN = ''
API_REQUIRE_AUTH = False
SECURE_SSL_REDIRECT = False
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False
SECURE_HSTS_SECONDS = 0
SECURE_HSTS_INCLUDE_SUBDOMAINS = False
SECURE_HSTS_PRELOAD = False
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    },
}

# Keep verification runs independent of any local reference-data override.
TRADECHECK_REFERENCE_DATA_PATH = ''
TRADECHECK_PERSIST_RESULTS = True
TRADECHECK_MAX_WORKERS = 4
