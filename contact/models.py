"""
Contact Models

Database schema for contact form submissions.
"""
from django.db import models


class ContactSubmission(models.Model):
    """
    A single contact form entry sent from the portfolio site.

    Rows are only ever created by the public submit endpoint and only the
    status can change afterwards. Nothing deletes them.
    """

    class Status(models.TextChoices):
        NEW = 'new', 'New'
        READ = 'read', 'Read'
        REPLIED = 'replied', 'Replied'
        ARCHIVED = 'archived', 'Archived'

    # Contact Information (stored trimmed and HTML-escaped)
    name = models.TextField(
        help_text="Name of the sender"
    )

    email = models.CharField(
        max_length=254,
        help_text="Normalized email address of the sender"
    )

    message = models.TextField(
        help_text="The message body"
    )

    # Status
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.NEW,
        help_text="Current handling status of the submission"
    )

    # Security and Tracking
    ip_address = models.CharField(
        max_length=64,
        null=True,
        blank=True,
        help_text="IP address of the submitter"
    )

    user_agent = models.TextField(
        null=True,
        blank=True,
        help_text="Browser user agent of the submitter"
    )

    # Timestamps
    timestamp = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="When the submission was stored"
    )

    class Meta:
        db_table = 'contact_submissions'
        ordering = ['-timestamp', '-id']
        verbose_name = 'Contact Submission'
        verbose_name_plural = 'Contact Submissions'
        indexes = [
            models.Index(fields=['status', 'timestamp'], name='contact_sub_status_idx'),
        ]

    def __str__(self):
        return f"#{self.pk} {self.name} <{self.email}> ({self.status})"
