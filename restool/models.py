"""
models holds the value objects a service configuration compiles to. They
are what the rest of restool consumes to build and execute requests.
"""
from types import MappingProxyType

from .config.configitem import ConfigItem
from .config.error import InvalidFieldError
from .symbol import Symbol

__all__ = (
    "Service",
    "Operation",
    "OperationResponse",
    "OperationResponseField",
    "Representation",
    "RepresentationField",
    "PersistentConnection",
    "BasicAuthentication",
)


def _to_symbol(field):
    def transform(value):
        try:
            return Symbol(value)
        except ValueError as e:
            raise InvalidFieldError(str(e), field=field) from e

    return staticmethod(transform)


_transform_type = _to_symbol("type")


@staticmethod
def _transform_fields(fields):
    return tuple(fields)


class RepresentationField(ConfigItem, fields="key,metonym,type"):
    _transform_type = _transform_type


class OperationResponseField(ConfigItem, fields="key,metonym,type"):
    _transform_type = _transform_type


class Representation(ConfigItem, fields="name,fields"):
    """A named, reusable list of fields declared at service level."""

    _transform_name = _to_symbol("name")
    _transform_fields = _transform_fields


class OperationResponse(ConfigItem, fields="fields"):
    _transform_fields = _transform_fields


class Operation(
    ConfigItem,
    fields="name,path,method,uri_params,response",
    defaults=dict(uri_params=(), response=None),
):
    """One callable endpoint of a service. `path` is already prefixed with
    the path found in the service url, `uri_params` are the `:placeholder`
    tokens of the operation path.
    """

    @staticmethod
    def _transform_uri_params(uri_params):
        return tuple(uri_params)


class PersistentConnection(
    ConfigItem, fields="pool_size,warn_timeout,force_retry"
):
    pass


class BasicAuthentication(ConfigItem, fields="user,password"):
    def __repr__(self):
        return f"{type(self).__name__}(user={self.user!r}, password='***')"


class Service(
    ConfigItem,
    fields=(
        "name,base_url,operations,persistent_connection,timeout,"
        "representations,basic_auth,ssl_verify"
    ),
    defaults=dict(
        operations=(),
        persistent_connection=None,
        representations=None,
        basic_auth=None,
    ),
):
    """
    Service is the compiled form of one `services` entry: where it lives,
    how to connect to it and which operations it exposes.
    """

    @staticmethod
    def _transform_operations(operations):
        return tuple(operations)

    @staticmethod
    def _transform_representations(representations):
        return MappingProxyType(dict(representations or {}))

    def operation(self, name):
        """Return the first operation called `name`, or None."""
        for operation in self.operations:
            if operation.name == name:
                return operation

        return None
