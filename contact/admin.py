"""
Contact Django Admin Configuration
"""
from django.contrib import admin
from .models import ContactSubmission


@admin.register(ContactSubmission)
class ContactSubmissionAdmin(admin.ModelAdmin):
    """Admin interface for contact submissions. Only the status is editable."""

    list_display = [
        'id', 'name', 'email', 'status', 'timestamp', 'ip_address'
    ]

    list_filter = [
        'status', 'timestamp'
    ]

    search_fields = [
        'name', 'email', 'message'
    ]

    readonly_fields = [
        'id', 'name', 'email', 'message', 'ip_address', 'user_agent', 'timestamp'
    ]

    fieldsets = (
        ('Contact Information', {
            'fields': ('id', 'name', 'email', 'message')
        }),
        ('Status', {
            'fields': ('status',)
        }),
        ('Security & Tracking', {
            'fields': ('ip_address', 'user_agent', 'timestamp'),
            'classes': ('collapse',)
        }),
    )

    actions = ['mark_as_read', 'mark_as_replied', 'mark_as_archived']

    def _set_status(self, request, queryset, new_status):
        updated = queryset.update(status=new_status)
        self.message_user(request, f"{updated} submission(s) marked as {new_status}.")

    @admin.action(description='Mark selected as read')
    def mark_as_read(self, request, queryset):
        self._set_status(request, queryset, ContactSubmission.Status.READ)

    @admin.action(description='Mark selected as replied')
    def mark_as_replied(self, request, queryset):
        self._set_status(request, queryset, ContactSubmission.Status.REPLIED)

    @admin.action(description='Mark selected as archived')
    def mark_as_archived(self, request, queryset):
        self._set_status(request, queryset, ContactSubmission.Status.ARCHIVED)

    def has_add_permission(self, request):
        """Submissions only come in through the public form."""
        return False

    def has_delete_permission(self, request, obj=None):
        """Submissions are never deleted."""
        return False
