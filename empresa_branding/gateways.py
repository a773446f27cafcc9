"""
Data gateways for django-empresa-branding.

A gateway answers point lookups against a tenant table. It only has to
tell three things apart: a matching row, no row, and a failed lookup
(signalled with GatewayError).
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

from django.core.exceptions import FieldError
from django.db import DatabaseError
from django.utils.module_loading import import_string

from empresa_branding.conf import branding_settings
from empresa_branding.exceptions import GatewayError


logger = logging.getLogger(__name__)


class BaseTenantGateway(ABC):
    """
    Abstract base class for tenant lookup backends.

    Subclasses must implement lookup(), returning at most one row as a
    plain mapping.
    """

    @abstractmethod
    async def lookup(self, table: str, filters: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Look up a single row by equality filters.

        Args:
            table: Name of the remote table (e.g. 'empresas')
            filters: Column -> value equality filters, all of which must match

        Returns:
            The matching row, or None if nothing matches

        Raises:
            GatewayError: If the lookup itself fails
        """
        pass


class DjangoTenantGateway(BaseTenantGateway):
    """
    Serves tenant lookups from the local database through the Django ORM.

    Tables are mapped onto models; the async queryset API keeps the
    lookup a single await point for the caller.
    """

    def __init__(self, models: Optional[Mapping[str, Any]] = None):
        if models is None:
            from empresa_branding.models import Empresa
            models = {Empresa._meta.db_table: Empresa}
        self.models = dict(models)

    async def lookup(self, table: str, filters: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        model = self.models.get(table)
        if model is None:
            raise GatewayError(
                f"Unknown table: '{table}'",
                table=table,
                filters=filters,
            )

        try:
            return await model.objects.filter(**filters).values().afirst()
        except (DatabaseError, FieldError) as e:
            logger.error("Lookup on %s failed: %s", table, e)
            raise GatewayError(str(e), table=table, filters=filters) from e


def get_gateway(gateway_class: str = None) -> BaseTenantGateway:
    """
    Build the configured tenant gateway.

    Args:
        gateway_class: Override the configured dotted path (optional)

    Returns:
        An instance of the gateway class

    Raises:
        ImportError: If the dotted path cannot be imported
        TypeError: If the class is not a BaseTenantGateway
    """
    if gateway_class is None:
        gateway_class = branding_settings.GATEWAY_CLASS

    cls = import_string(gateway_class)
    if not (isinstance(cls, type) and issubclass(cls, BaseTenantGateway)):
        raise TypeError(
            f"'{gateway_class}' is not a BaseTenantGateway subclass"
        )

    return cls()
