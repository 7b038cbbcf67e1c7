from types import SimpleNamespace

__all__ = (
    "ConfigError",
    "ServiceNotFoundError",
    "MissingFieldError",
    "InvalidFieldError",
    "MalformedFileError",
)


class ConfigError(Exception):
    def __init__(self, reason, **meta):
        self.meta = SimpleNamespace(**meta)

        super().__init__(reason)

    def __str__(self):
        if self.meta.__dict__:
            meta = ", ".join(
                f"{k}={v}" for k, v in self.meta.__dict__.items() if bool(v)
            )
            if meta:
                return f"{super().__str__()} ({meta})"

        return super().__str__()


class ServiceNotFoundError(ConfigError):
    def __init__(self, service_name, **meta):
        super().__init__(
            f"Service '{service_name}' not found in configuration", **meta
        )

        self.service_name = service_name


class MissingFieldError(ConfigError):
    def __init__(self, field, **meta):
        super().__init__(f"'{field}' is a required field", **meta)

        self.field = field


class InvalidFieldError(ConfigError):
    pass


class MalformedFileError(ConfigError):
    pass
