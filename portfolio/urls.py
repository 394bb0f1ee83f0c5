"""
URL configuration for the portfolio backend.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path, re_path, include

from .views import HealthCheckView

urlpatterns = [
    path('admin/', admin.site.urls),
    re_path(r'^api/health/?$', HealthCheckView.as_view(), name='health'),
    path('api/', include('contact.urls')),  # Contact form and submission management
]

handler404 = 'portfolio.views.not_found'
handler500 = 'portfolio.views.server_error'
