import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class ConnectAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'connect_app'

    def ready(self):
        import connect_app.signals  # noqa: F401
        logger.debug('[DJANGO] ConnectAppConfig ready - signals registered')
