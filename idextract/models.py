from django.db import models


# Sentinel for any field no rule could resolve
NOT_FOUND = "Not found"


class DocumentTypes(models.TextChoices):
    DRIVING_LICENSE = "driving_license"
    PASSPORT = "passport"
