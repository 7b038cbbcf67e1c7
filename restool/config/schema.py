"""
schema turns the loosely structured `services` entries read from
configuration files into typed raw items, so that a missing or malformed
key is reported as a ConfigError before any model gets built.
"""
import logging
from collections.abc import Mapping
from urllib.parse import urlsplit

from .configitem import ConfigItem
from .error import ConfigError, InvalidFieldError

__all__ = (
    "RawService",
    "RawOperation",
    "RawField",
    "RawBasicAuth",
    "RawPersistent",
)

log = logging.getLogger(__name__)

BASIC_AUTH_KEYS = ("basic_auth", "basic_authentication")


class RawItem(ConfigItem):
    """Base of the raw items. `from_dict` keeps the known keys of a mapping,
    drops the others and decorates errors with `context`.
    """

    __slots__ = ()

    @classmethod
    def from_dict(cls, d, **context):
        if not isinstance(d, Mapping):
            raise InvalidFieldError(
                f"{cls.__name__} should be a mapping, got '{type(d).__name__}'",
                **context,
            )

        kwargs = {field: d[field] for field in cls._fields if field in d}
        unknown = [key for key in d if key not in cls._fields]
        if unknown:
            log.debug("Ignoring unknown key(s) %s in %s", unknown, cls.__name__)

        try:
            return cls(**kwargs)
        except ConfigError as e:
            for key, value in context.items():
                if not getattr(e.meta, key, None):
                    setattr(e.meta, key, value)
            raise


#################################################
# Shared validators
#################################################


@staticmethod
def _validate_name(name):
    if isinstance(name, str) and name != "":
        return

    raise InvalidFieldError("name should be a non-empty string")


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_item(item_cls, item, **context):
    # replace() runs the hooks again on items that are already checked.
    if isinstance(item, item_cls):
        return item
    return item_cls.from_dict(item, **context)


def _sequence_of(field, item_cls):
    def transform(items):
        if items is None:
            return None
        if not isinstance(items, (list, tuple)):
            raise InvalidFieldError(f"{field} should be of type sequence")

        return tuple(_as_item(item_cls, item) for item in items)

    return staticmethod(transform)


class RawField(
    RawItem, fields="key,metonym,type", defaults=dict(key=None, metonym=None)
):
    """A field descriptor of a representation or an operation response."""

    @staticmethod
    def _validate_type(type_):
        if isinstance(type_, str) and type_ != "":
            return

        raise InvalidFieldError("type should be a non-empty string")


class RawOperation(
    RawItem, fields="name,path,method,response", defaults=dict(response=None)
):
    _validate_name = _validate_name
    _transform_response = _sequence_of("response", RawField)

    @staticmethod
    def _validate_path(path):
        if isinstance(path, str):
            return

        raise InvalidFieldError("path should be a string")

    @staticmethod
    def _validate_method(method):
        if isinstance(method, str) and method != "":
            return

        raise InvalidFieldError("method should be a non-empty string")

    @classmethod
    def from_dict(cls, d, **context):
        if isinstance(d, Mapping) and d.get("name"):
            context.setdefault("operation", d.get("name"))
        return super().from_dict(d, **context)


class RawBasicAuth(RawItem, fields="user,password"):
    def __repr__(self):
        return f"{type(self).__name__}(user={self.user!r}, password='***')"


class RawPersistent(
    RawItem,
    fields="pool_size,warn_timeout,force_retry",
    defaults=dict(pool_size=None, warn_timeout=None, force_retry=None),
):
    @staticmethod
    def _validate_pool_size(pool_size):
        if pool_size is None:
            return
        if isinstance(pool_size, int) and not isinstance(pool_size, bool):
            return

        raise InvalidFieldError("pool_size should be an int")

    @staticmethod
    def _validate_warn_timeout(warn_timeout):
        if warn_timeout is None or _is_number(warn_timeout):
            return

        raise InvalidFieldError("warn_timeout should be a number")

    @staticmethod
    def _validate_force_retry(force_retry):
        if force_retry is None or isinstance(force_retry, bool):
            return

        raise InvalidFieldError("force_retry should be a boolean")


class RawService(
    RawItem,
    fields=(
        "name,url,operations,representations,basic_auth,persistent,"
        "timeout,ssl_verify"
    ),
    defaults=dict(
        representations=None,
        basic_auth=None,
        persistent=None,
        timeout=None,
        ssl_verify=None,
    ),
):
    """
    RawService is one `services` entry with its keys checked. Absent
    optional keys are None so the builder can tell "unset" apart from a
    falsy value.
    """

    _validate_name = _validate_name
    _transform_operations = _sequence_of("operations", RawOperation)

    @staticmethod
    def _validate_url(url):
        if not isinstance(url, str) or url == "":
            raise InvalidFieldError("url should be a non-empty string")

        try:
            parts = urlsplit(url)
        except ValueError as e:
            raise InvalidFieldError(f"url '{url}' cannot be parsed: {e}") from e

        # Without a scheme the host would end up in the path prefix.
        if not parts.scheme or not parts.netloc:
            raise InvalidFieldError(f"url '{url}' should have a scheme and a host")

    @staticmethod
    def _validate_operations(operations):
        if operations is None:
            raise InvalidFieldError("operations should be of type sequence")

    @staticmethod
    def _transform_representations(representations):
        if representations is None:
            return None
        if not isinstance(representations, Mapping):
            raise InvalidFieldError("representations should be a mapping")

        result = {}
        for name, fields in representations.items():
            if not isinstance(fields, (list, tuple)):
                raise InvalidFieldError(
                    f"fields of representation '{name}' should be of type sequence"
                )
            result[name] = tuple(
                _as_item(RawField, field, representation=name) for field in fields
            )

        return result

    @staticmethod
    def _transform_basic_auth(basic_auth):
        if basic_auth is None:
            return None
        return _as_item(RawBasicAuth, basic_auth)

    @staticmethod
    def _transform_persistent(persistent):
        if persistent is None:
            return None
        return _as_item(RawPersistent, persistent)

    @staticmethod
    def _validate_timeout(timeout):
        if timeout is None or _is_number(timeout):
            return

        raise InvalidFieldError("timeout should be a number")

    @staticmethod
    def _validate_ssl_verify(ssl_verify):
        if ssl_verify is None or isinstance(ssl_verify, bool):
            return

        raise InvalidFieldError("ssl_verify should be a boolean")

    @classmethod
    def from_dict(cls, d, **context):
        if isinstance(d, Mapping):
            context.setdefault("service", d.get("name"))

            # Either key is accepted, "basic_auth" wins when both are set.
            d = dict(d)
            alias = d.pop(BASIC_AUTH_KEYS[1], None)
            if d.get(BASIC_AUTH_KEYS[0]) is None:
                d[BASIC_AUTH_KEYS[0]] = alias

        return super().from_dict(d, **context)
