import pytest
from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APIClient

from sportmate.locations.models import Location
from sportmate.notifications.models import Notification

pytestmark = pytest.mark.django_db

User = get_user_model()


@pytest.fixture
def user():
    return User.objects.create_user(
        username="scout001",
        email="scout001@example.com",
        password="testpass123",  # noqa: S106
    )


@pytest.fixture
def admin_user():
    return User.objects.create_user(
        username="admin002",
        email="admin002@example.com",
        password="testpass123",  # noqa: S106
        is_staff=True,
    )


def client_for(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


def location_payload(**overrides):
    payload = {
        "name": "Riverside Courts",
        "address": "1 River Rd",
        "latitude": "40.80000000",
        "longitude": "-73.97000000",
        "location_type": "court",
        "amenities": ["lights", "restrooms"],
        "is_public_space": True,
    }
    payload.update(overrides)
    return payload


def make_location(user, **overrides):
    fields = {
        "name": "Spot",
        "address": "Somewhere",
        "latitude": "40.0",
        "longitude": "-73.0",
        "location_type": "field",
    }
    fields.update(overrides)
    return Location.objects.create(submitted_by=user, **fields)


def test_submit_public_space_gets_automatic_tier(user):
    r = client_for(user).post(
        "/api/v1/locations/", location_payload(status="approved"), format="json"
    )

    assert r.status_code == status.HTTP_201_CREATED, r.data
    assert r.data["status"] == "pending"
    assert r.data["approval_tier"] == "tier_1"
    assert r.data["submitted_by"] == user.pk
    assert r.data["amenities"] == ["lights", "restrooms"]


def test_submit_private_space_needs_manual_review(user):
    r = client_for(user).post(
        "/api/v1/locations/",
        location_payload(is_public_space=False, location_type="gym"),
        format="json",
    )

    assert r.status_code == status.HTTP_201_CREATED, r.data
    assert r.data["approval_tier"] == "tier_2"


def test_list_filters_by_submitter(user, admin_user):
    mine = make_location(user)
    make_location(admin_user)

    r = client_for(user).get("/api/v1/locations/", {"submitted_by": user.pk})

    assert r.status_code == status.HTTP_200_OK
    assert [row["id"] for row in r.data] == [mine.pk]


def test_admin_queue_defaults_to_pending(user, admin_user):
    pending = make_location(user)
    make_location(user, status="approved")

    r = client_for(admin_user).get("/api/v1/admin/locations/")
    assert [row["id"] for row in r.data] == [pending.pk]

    r = client_for(admin_user).get("/api/v1/admin/locations/", {"status": "approved"})
    assert len(r.data) == 1
    assert r.data[0]["status"] == "approved"


def test_admin_queue_is_admin_only(user):
    r = client_for(user).get("/api/v1/admin/locations/")
    assert r.status_code == status.HTTP_403_FORBIDDEN


def test_review_notifies_submitter(user, admin_user):
    location = make_location(user)

    r = client_for(admin_user).post(
        f"/api/v1/admin/locations/{location.pk}/review/",
        {"status": "approved", "reviewNotes": "Looks great"},
        format="json",
    )

    assert r.status_code == status.HTTP_200_OK, r.data
    location.refresh_from_db()
    assert location.status == "approved"
    assert location.reviewed_by == admin_user
    assert location.reviewed_at is not None
    note = Notification.objects.get(recipient=user)
    assert note.notification_type == "location"
    assert note.message == "Looks great"


def test_review_rejects_invalid_status(user, admin_user):
    location = make_location(user)

    r = client_for(admin_user).post(
        f"/api/v1/admin/locations/{location.pk}/review/",
        {"status": "pending"},
        format="json",
    )

    assert r.status_code == status.HTTP_400_BAD_REQUEST
