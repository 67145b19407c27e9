from django.apps import AppConfig


class TradecheckConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'tradecheck'
    verbose_name = 'Trade invoice verification'
