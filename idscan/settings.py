"""
Django settings for the idscan project.

Values come from the environment with development defaults.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'insecure-dev-key-change-me')
DEBUG = os.getenv('DJANGO_DEBUG', 'false').lower() in ('1', 'true', 'yes')
ALLOWED_HOSTS = [h for h in os.getenv('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',') if h]

INSTALLED_APPS = [
    'idextract.apps.IdExtractConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'idscan.urls'
WSGI_APPLICATION = 'idscan.wsgi.application'

# No persisted state
DATABASES = {}

USE_TZ = True

# Uploads up to 10 MB stay in memory before spilling to a temp file
FILE_UPLOAD_MAX_MEMORY_SIZE = 10 * 1024 * 1024

# --- Document extraction ---
IDEXTRACT_TESSERACT_LANG = os.getenv('IDEXTRACT_TESSERACT_LANG', 'eng')
IDEXTRACT_TESSERACT_CONFIG = os.getenv('IDEXTRACT_TESSERACT_CONFIG', '--oem 3 --psm 6')
# Where to write the last OCR output as {"extractedText": ...}; empty disables it
IDEXTRACT_DEBUG_DUMP_PATH = os.getenv('IDEXTRACT_DEBUG_DUMP_PATH', '')
IDEXTRACT_LOG_LEVEL = os.getenv('IDEXTRACT_LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'idextract': {
            'handlers': ['console'],
            'level': IDEXTRACT_LOG_LEVEL,
            'propagate': False,
        },
    },
}
