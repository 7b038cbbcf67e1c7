"""
loader looks up a service by name in the aggregated configuration and
builds it.
"""
import logging

from .aggregator import get_default_aggregator
from .builder import build_service
from .error import ServiceNotFoundError

__all__ = (
    "Loader",
    "load",
)

log = logging.getLogger(__name__)


class Loader:
    def __init__(self, aggregator=None):
        self._aggregator = aggregator

    @property
    def aggregator(self):
        if self._aggregator is None:
            return get_default_aggregator()
        return self._aggregator

    def load(self, service_name):
        """
        Build the service declared under `service_name`. When several files
        declare the same name, the first one in discovery order wins.

        Raises:
            ServiceNotFoundError: if no service is declared under that name.
        """
        for service_config in self.aggregator.get_configuration()["services"]:
            if service_config.get("name") == service_name:
                log.debug("Found service '%s'", service_name)
                return build_service(service_config)

        raise ServiceNotFoundError(service_name)

    def service_names(self):
        return [
            service_config.get("name")
            for service_config in self.aggregator.get_configuration()["services"]
        ]


def load(service_name):
    """Build the service `service_name` from the default configuration."""
    return Loader().load(service_name)
