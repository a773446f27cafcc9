"""URL configuration for the branding API."""

from django.urls import path

from empresa_branding.drf.views import CurrentBrandingView, SwitchTenantView

app_name = "empresa_branding"

urlpatterns = [
    path("branding/", CurrentBrandingView.as_view(), name="branding"),
    path("branding/switch/", SwitchTenantView.as_view(), name="branding-switch"),
]
