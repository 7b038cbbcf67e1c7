from types import SimpleNamespace
from copy import copy

from .error import ConfigError, MissingFieldError

__all__ = ("ConfigItem",)


class ConfigItem(SimpleNamespace):
    """A class that is intended to be inherited to subclass
    `types.SimpleNamespace` and provides value transformation and
    validation. Instances are frozen once `__init__` returns.
    """

    __slots__ = ()

    def __init__(self, **kwargs):
        new_kwargs = {}
        for field in self._fields:
            if field in kwargs:
                new_kwargs[field] = kwargs.pop(field)
            elif field in self._defaults:
                new_kwargs[field] = copy(self._defaults.get(field))
            else:
                raise MissingFieldError(field, item=self.__class__.__name__)

        if kwargs:
            names = ", ".join(kwargs)
            raise ConfigError(
                f"{self.__class__.__name__} get unexpected field(s) '{names}'"
            )

        for field in self._fields:
            value = new_kwargs[field]

            # transform value
            if hasattr(self, f"_transform_{field}"):
                value = getattr(self, f"_transform_{field}")(value)
                new_kwargs[field] = value

            # validate value
            if hasattr(self, f"_validate_{field}"):
                getattr(self, f"_validate_{field}")(value)

        # SimpleNamespace.__init__ fills __dict__ directly, bypassing
        # __setattr__ below.
        super().__init__(**new_kwargs)

    def __init_subclass__(cls, fields="", defaults=None, **kwargs):
        super().__init_subclass__(**kwargs)

        # normalize parameters
        if isinstance(fields, str):
            fields = fields.replace(",", " ").split()
        fields = tuple(map(str, fields))

        defaults = defaults or {}

        # ensure all keys in defaults can be found in fields
        for key in defaults:
            if key not in fields:
                raise TypeError(f"Key '{key}' in default dict not found in field names")

        cls._fields = fields
        cls._defaults = defaults

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def replace(self, **changes):
        """Return a new item with `changes` applied on top of this one."""
        kwargs = self.to_dict()
        kwargs.update(changes)
        return self.__class__(**kwargs)

    @classmethod
    def from_dict(cls, d):
        return cls(**d)

    def to_dict(self):
        return {field: getattr(self, field) for field in self._fields}

    def __eq__(self, value):
        if self.__class__ != value.__class__:
            return False

        return super().__eq__(value)

    def __ne__(self, value):
        return not self == value

    def __repr__(self):
        arg_list = ", ".join(f"{k}={getattr(self, k)!r}" for k in self._fields)
        return f"{type(self).__name__}({arg_list})"
