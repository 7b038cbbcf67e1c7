"""
builder compiles raw `services` entries into the models restool consumes.
"""
import logging
import re
from urllib.parse import urlsplit

from ..models import (
    BasicAuthentication,
    Operation,
    OperationResponse,
    OperationResponseField,
    PersistentConnection,
    Representation,
    RepresentationField,
    Service,
)
from ..symbol import Symbol
from .schema import RawService

__all__ = (
    "DEFAULT_TIMEOUT",
    "DEFAULT_SSL_VERIFY",
    "build_service",
    "build_operation",
    "build_representations",
    "build_operation_response",
    "compose_path",
    "uri_params",
)

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60
DEFAULT_SSL_VERIFY = False

URI_PARAM_PATTERN = re.compile(r":[a-zA-Z_]+[0-9]*[a-zA-Z_]*")


def build_service(service_config):
    """Build a Service out of one `services` entry.

    `service_config` is either the mapping read from a configuration file
    or an already checked RawService.
    """
    if not isinstance(service_config, RawService):
        service_config = RawService.from_dict(service_config)

    representations = {}
    if service_config.representations is not None:
        representations = build_representations(service_config.representations)

    basic_auth = service_config.basic_auth
    if basic_auth is not None:
        basic_auth = BasicAuthentication(
            user=basic_auth.user, password=basic_auth.password
        )

    persistent_connection = service_config.persistent
    if persistent_connection is not None:
        persistent_connection = PersistentConnection(
            pool_size=persistent_connection.pool_size,
            warn_timeout=persistent_connection.warn_timeout,
            force_retry=persistent_connection.force_retry,
        )

    # The url may carry a path shared by every operation, e.g. api.com/v2/
    paths_prefix_in_host = urlsplit(service_config.url).path

    operations = [
        build_operation(operation, paths_prefix_in_host)
        for operation in service_config.operations
    ]

    timeout = service_config.timeout
    if timeout is None:
        timeout = DEFAULT_TIMEOUT

    ssl_verify = service_config.ssl_verify
    if ssl_verify is None:
        ssl_verify = DEFAULT_SSL_VERIFY

    service = Service(
        name=service_config.name,
        base_url=service_config.url,
        operations=operations,
        persistent_connection=persistent_connection,
        timeout=timeout,
        representations=representations,
        basic_auth=basic_auth,
        ssl_verify=ssl_verify,
    )
    log.debug(
        "Built service '%s' with %d operation(s)", service.name, len(operations)
    )

    return service


def build_representations(representations):
    """Build the symbol-keyed representations of a service, keeping the
    declaration order.
    """
    representations_by_name = {}

    for name, fields in representations.items():
        representation = Representation(
            name=name,
            fields=[
                RepresentationField(key=f.key, metonym=f.metonym, type=f.type)
                for f in fields
            ],
        )
        representations_by_name[representation.name] = representation

    return representations_by_name


def build_operation(operation_config, paths_prefix_in_host):
    response = None
    if operation_config.response is not None:
        response = build_operation_response(operation_config.response)

    return Operation(
        name=operation_config.name,
        path=compose_path(paths_prefix_in_host, operation_config.path),
        method=operation_config.method,
        uri_params=uri_params(operation_config.path),
        response=response,
    )


def build_operation_response(response):
    response_fields = [
        OperationResponseField(key=f.key, metonym=f.metonym, type=f.type)
        for f in response
    ]

    return OperationResponse(fields=response_fields)


def compose_path(paths_prefix_in_host, path):
    """
    Join the path found in the service url with an operation path, using a
    single slash between them. The result is relative to the host.

    >>> compose_path("/v2/", "/users/:id")
    'v2/users/:id'
    >>> compose_path("", "/users")
    'users'
    """
    if path.startswith("/"):
        path = path[1:]
    if paths_prefix_in_host.startswith("/"):
        paths_prefix_in_host = paths_prefix_in_host[1:]
    if paths_prefix_in_host.endswith("/"):
        paths_prefix_in_host = paths_prefix_in_host[:-1]

    if not paths_prefix_in_host:
        return path

    return f"{paths_prefix_in_host}/{path}"


def uri_params(path):
    """Return the `:placeholder` tokens of `path` from left to right,
    repeated ones included.
    """
    return URI_PARAM_PATTERN.findall(path)
