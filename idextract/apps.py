from django.apps import AppConfig


class IdExtractConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "idextract"
    verbose_name = "ID document extraction"
