from contextlib import suppress

from django.apps import apps
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.contrib.auth.models import Permission
from django.contrib.contenttypes.models import ContentType
from django.core.management.base import BaseCommand
from django.utils.translation import gettext as _

from sportmate.users.api.permissions import ROLE_ADMIN

FULL_ACTIONS = ("add", "change", "delete", "view")
MODERATE_ACTIONS = ("change", "delete", "view")
NOTIFY_ACTIONS = ("add", "view")

ROLE_APP_ACTIONS = {
    ROLE_ADMIN: {
        "users": FULL_ACTIONS,
        "verification": FULL_ACTIONS,
        "locations": FULL_ACTIONS,
        "events": MODERATE_ACTIONS,
        "chat": MODERATE_ACTIONS,
        "notifications": NOTIFY_ACTIONS,
    },
}


class Command(BaseCommand):
    help = _("Create the platform admin group and its model permissions")

    def handle(self, *args, **options):
        for role_name, app_rules in ROLE_APP_ACTIONS.items():
            perm_ids = self._collect_permission_ids(app_rules)
            group, created = Group.objects.get_or_create(name=role_name)
            group.permissions.set(Permission.objects.filter(pk__in=perm_ids))
            verb = "Created" if created else "Updated"
            msg = f"{verb} group '{role_name}' with permissions ({len(perm_ids)})"
            self.stdout.write(self.style.SUCCESS(msg))
        self.stdout.write(self.style.SUCCESS("Role setup complete"))

    def _collect_permission_ids(self, app_rules):
        user_model = get_user_model()
        perm_ids: set[int] = set()
        for app_label, actions in app_rules.items():
            models = self._app_models(app_label)
            if app_label == user_model._meta.app_label:  # noqa: SLF001
                models = [user_model]
            for model in models:
                ct = ContentType.objects.get_for_model(model)
                codenames = [
                    f"{action}_{model._meta.model_name}"  # noqa: SLF001
                    for action in actions
                ]
                perm_ids.update(
                    Permission.objects.filter(
                        content_type=ct, codename__in=codenames
                    ).values_list("pk", flat=True)
                )
        return perm_ids

    def _app_models(self, label):
        with suppress(LookupError):
            return list(apps.get_app_config(label).get_models())
        return []
