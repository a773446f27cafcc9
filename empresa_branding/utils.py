"""
Utility functions for django-empresa-branding.

Provides audit logging for tenant resolution and switching events.
"""

import logging

from django.utils import timezone

from empresa_branding.conf import branding_settings


def get_audit_logger() -> logging.Logger:
    """
    Get the audit logger instance.

    Returns:
        Logger instance for audit events
    """
    return logging.getLogger(branding_settings.AUDIT_LOGGER)


def audit_log(
    event: str,
    tenant=None,
    success: bool = True,
    environment=None,
    extra: dict = None,
):
    """
    Log an audit event for tenant resolution activities.

    Args:
        event: Event type (e.g., 'tenant_resolved', 'tenant_switch_failed')
        tenant: The tenant involved (if any)
        success: Whether the operation succeeded
        environment: The RequestEnvironment being resolved (if any)
        extra: Additional context data
    """
    if not branding_settings.AUDIT_ENABLED:
        return

    logger = get_audit_logger()

    log_data = {
        "event": event,
        "timestamp": timezone.now().isoformat(),
        "success": success,
    }

    if tenant:
        log_data["tenant_id"] = str(getattr(tenant, "id", None))
        log_data["tenant_slug"] = getattr(tenant, "slug", str(tenant))

    if environment:
        log_data["hostname"] = environment.hostname
        log_data["url"] = environment.url

    if extra:
        log_data.update(extra)

    if success:
        logger.info(f"Audit: {event}", extra={"audit_data": log_data})
    else:
        logger.warning(f"Audit: {event} FAILED", extra={"audit_data": log_data})
