import os

APP_DIR = os.path.dirname(os.path.abspath(__file__))
CONFIG_DIR = os.environ.get('STUDYOLLE_CONFIG_DIR', os.path.join(APP_DIR, 'config'))
DB_FILE = os.path.join(CONFIG_DIR, 'studyolle.db')
CONFIG_FILE = os.path.join(CONFIG_DIR, 'settings.yaml')

STUDYOLLE_DB = os.environ.get('STUDYOLLE_DB', 'sqlite:///' + DB_FILE)

BUILD_VERSION = '20261016_0930'

# Settings routes
SETTINGS_ROOT = '/settings'

PROFILE_VIEW = 'settings/profile.html'
PASSWORD_VIEW = 'settings/password.html'
TAGS_VIEW = 'settings/tags.html'

# Validation thresholds, overridable through the "validation" section of settings.yaml
NICKNAME_MAX_LENGTH = 20
BIO_MAX_LENGTH = 35
PROFILE_FIELD_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 50

PASSWORD_HASH_METHOD = 'pbkdf2:sha256'

DEFAULT_SETTINGS = {
    "validation": {
        "bio_max_length": BIO_MAX_LENGTH,
        "profile_field_max_length": PROFILE_FIELD_MAX_LENGTH,
        "password_min_length": PASSWORD_MIN_LENGTH,
        "password_max_length": PASSWORD_MAX_LENGTH,
    },
    "security": {
        "login_rate_limit": "20 per minute",
    },
}
