from .settings import *  # noqa: F401,F403

# The test database is a file so that worker threads in the concurrency tests
# open their own connections to it. IMMEDIATE transactions take the write lock
# up front and queue behind the busy timeout instead of failing to upgrade.
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
        'OPTIONS': {
            'timeout': 20,
            'transaction_mode': 'IMMEDIATE',
        },
        'TEST': {
            'NAME': os.path.join(BASE_DIR, 'test_streamhub.sqlite3'),  # noqa: F405
        },
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

LOGGING['loggers']['api']['level'] = 'DEBUG'  # noqa: F405
# let pytest's caplog see api records
LOGGING['loggers']['api']['propagate'] = True  # noqa: F405
