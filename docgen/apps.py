# docgen/apps.py
from django.apps import AppConfig


class DocgenConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'docgen'
    verbose_name = 'Document Generation'

    def ready(self):
        import docgen.signals  # noqa
