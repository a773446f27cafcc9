"""
Django REST Framework integration for django-empresa-branding.

Provides serializers and views exposing the branding snapshot and the
tenant switch command to API clients.
"""
