import logging
from functools import partial

from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from sportmate.realtime.events.notifications import publish_notification_created

from .models import Notification

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Notification, dispatch_uid="push_new_notification")
def push_new_notification(sender, instance, created, raw=False, **kwargs):
    """Push a new notification to its recipient once the row is committed.

    Fixture loads (``raw``) and later saves such as mark-read are not pushed.
    """
    if raw or not created:
        return
    logger.debug(
        "Queueing push of notification %s to user %s",
        instance.pk,
        instance.recipient_id,
    )
    transaction.on_commit(partial(publish_notification_created, instance))
