import os

import django

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "idscan.settings")
django.setup()
