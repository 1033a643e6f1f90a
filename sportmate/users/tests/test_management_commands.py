from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.core.management import call_command

from sportmate.users.api.permissions import ROLE_ADMIN


def test_setup_roles_creates_admin_group(db):
    Group.objects.filter(name=ROLE_ADMIN).delete()

    call_command("setup_roles")

    admin = Group.objects.get(name=ROLE_ADMIN)
    model_codename = get_user_model()._meta.model_name  # noqa: SLF001
    assert admin.permissions.filter(codename=f"change_{model_codename}").exists()
    assert admin.permissions.filter(codename="change_location").exists()
    assert admin.permissions.filter(codename="delete_eventmessage").exists()
    assert not admin.permissions.filter(codename="add_event").exists()


def test_setup_roles_is_idempotent(db):
    call_command("setup_roles")
    call_command("setup_roles")

    assert Group.objects.filter(name=ROLE_ADMIN).count() == 1
