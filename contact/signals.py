"""
Contact Signals

Django signals for contact-related events.
"""
import logging

from django.db.models.signals import post_save
from django.dispatch import receiver
from .models import ContactSubmission

logger = logging.getLogger(__name__)


@receiver(post_save, sender=ContactSubmission)
def contact_submission_post_save(sender, instance, created, **kwargs):
    """Log every newly stored submission."""
    if created:
        logger.info(
            "New contact message from %s (%s) saved with ID: %s",
            instance.name, instance.email, instance.pk
        )
