"""
aggregator discovers the configuration files of restool and merges their
`services` into a single document.
"""
import json
import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .error import MalformedFileError

__all__ = (
    "DEFAULT_ROOT",
    "Aggregator",
    "get_default_aggregator",
    "set_default_aggregator",
)

log = logging.getLogger(__name__)

DEFAULT_ROOT = "config"
CONFIG_DIR_NAME = "restool"
FIXED_FILE_NAMES = ("restool.yml", "restool.json")


class Aggregator:
    """
    Aggregator reads every file in `<root>/restool/`, then `<root>/restool.yml`
    and `<root>/restool.json`, and concatenates their `services` lists in
    that order. Files that do not exist or have an extension other than
    `.yml` and `.json` are skipped.

    The merged document is computed on first access and cached; concurrent
    first callers wait for a single aggregation.
    """

    def __init__(self, root=DEFAULT_ROOT):
        self.root = Path(root)
        self._config = None
        self._lock = threading.Lock()

    def get_configuration(self):
        config = self._config
        if config is not None:
            return config

        with self._lock:
            if self._config is None:
                self._config = self._aggregate()
            return self._config

    def reset(self):
        """Forget the cached document. The next access reads the files again."""
        with self._lock:
            self._config = None

    def files_to_load(self):
        config_dir = self.root / CONFIG_DIR_NAME

        files = []
        if config_dir.is_dir():
            files.extend(
                path
                for path in sorted(config_dir.iterdir())
                if path.is_file() and not path.name.startswith(".")
            )
        files.extend(self.root / name for name in FIXED_FILE_NAMES)

        return files

    def _aggregate(self):
        services = []

        for path in self.files_to_load():
            if not path.is_file():
                log.debug("Skipping missing config file %s", path)
                continue

            content = self.parse_file(path)
            if content is None:
                continue

            services.extend(content["services"])
            log.debug(
                "Loaded %d service(s) from %s", len(content["services"]), path
            )

        log.info("Aggregated %d service(s) under %s", len(services), self.root)

        return _freeze({"services": services})

    @staticmethod
    def parse_file(path):
        """
        Parse a config file according to its extension. Return None for an
        extension restool does not read.
        """
        path = Path(path)
        extension = path.suffix

        try:
            if extension == ".yml":
                with path.open(encoding="utf-8") as f:
                    content = _yaml().load(f)
            elif extension == ".json":
                with path.open(encoding="utf-8") as f:
                    content = json.load(f)
            else:
                log.debug("Ignoring config file with extension '%s': %s", extension, path)
                return None
        except (YAMLError, ValueError) as e:
            raise MalformedFileError(f"Cannot parse config file: {e}", file=path) from e

        if not isinstance(content, Mapping):
            raise MalformedFileError(
                "Config file should contain a mapping at its root", file=path
            )
        if not isinstance(content.get("services"), list):
            raise MalformedFileError(
                "Config file should define 'services' as a sequence", file=path
            )
        for service in content["services"]:
            if not isinstance(service, Mapping):
                raise MalformedFileError(
                    "Each service should be a mapping", file=path
                )

        return content


def _yaml():
    yaml = YAML(typ="safe", pure=True)
    # YAML 1.1, so `yes` and `on` read as booleans.
    yaml.version = (1, 1)
    return yaml


def _freeze(value):
    """Return `value` with every mapping made read-only and every list a tuple."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


_default_aggregator = None
_default_lock = threading.Lock()


def get_default_aggregator():
    global _default_aggregator

    with _default_lock:
        if _default_aggregator is None:
            _default_aggregator = Aggregator()
        return _default_aggregator


def set_default_aggregator(aggregator):
    """Replace the aggregator used by `restool.load`."""
    global _default_aggregator

    with _default_lock:
        _default_aggregator = aggregator
