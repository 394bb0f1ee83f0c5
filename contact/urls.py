"""
Contact URL Configuration

Every route also matches with a trailing slash.
"""
from django.urls import re_path
from .views import (
    ContactSubmitView,
    ContactListView,
    ContactDetailView,
    ContactStatusUpdateView,
)

app_name = 'contact'

urlpatterns = [
    re_path(r'^contact/?$', ContactSubmitView.as_view(), name='submit'),
    re_path(r'^contacts/?$', ContactListView.as_view(), name='list'),
    re_path(r'^contacts/(?P<pk>[0-9]{1,18})/?$', ContactDetailView.as_view(), name='detail'),
    re_path(r'^contacts/(?P<pk>[0-9]{1,18})/status/?$', ContactStatusUpdateView.as_view(), name='status'),
]
