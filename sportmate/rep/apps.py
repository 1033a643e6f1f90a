from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class RepConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "sportmate.rep"
    verbose_name = _("Rep Points")
