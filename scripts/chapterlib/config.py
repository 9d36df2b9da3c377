"""
Preprocessor configuration: read, validate, and provide defaults.

Settings come from the mdbook context (book.toml as parsed by mdbook)
and, optionally, from a YAML overrides file passed on the command line:

    [output.html]
    site-url = "/docs/"          # base path, unless overridden below

    [preprocessor.chapter-path]
    strict = true                # duplicate chapter names fail the build
    base-path = "/handbook/"     # takes precedence over site-url
    renderers = ["html"]
"""

import os

import yaml


PREPROCESSOR_NAME = "chapter-path"

# Defaults applied if missing
DEFAULTS = {
    "base_path": "/",
    "strict": False,
    "renderers": ["html"],
}

# book.toml keys (kebab-case) → config fields
CONTEXT_KEYS = {
    "base-path": "base_path",
    "strict": "strict",
    "renderers": "renderers",
}


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""
    pass


class PathConfig:
    """
    Validated preprocessor configuration.

    Usage:
        config = PathConfig.from_context(context)
        config.base_path      # "/docs/"
        config.strict         # False
        config = config.merged(PathConfig.read_overrides("ci.yaml"))
    """

    def __init__(self, base_path=None, strict=None, renderers=None):
        data = {
            "base_path": base_path,
            "strict": strict,
            "renderers": renderers,
        }
        for key, default in DEFAULTS.items():
            if data[key] is None:
                data[key] = list(default) if isinstance(default, list) else default

        # An empty site-url means the site root
        if data["base_path"] == "":
            data["base_path"] = DEFAULTS["base_path"]

        _validate(data)
        self._data = data

    # ── Constructors ───────────────────────────────────────

    @classmethod
    def from_context(cls, context):
        """Build config from the mdbook PreprocessorContext JSON."""
        book_config = (context or {}).get("config") or {}
        if not isinstance(book_config, dict):
            raise ConfigError("mdbook context 'config' must be a mapping")

        data = {}

        site_url = _table(book_config, "output", "html").get("site-url")
        if site_url is not None:
            data["base_path"] = site_url

        section = _table(book_config, "preprocessor", PREPROCESSOR_NAME)
        for key, field in CONTEXT_KEYS.items():
            if key in section:
                data[field] = section[key]

        return cls(**data)

    @classmethod
    def load(cls, yaml_path):
        """Load a standalone config from a YAML file."""
        return cls(**cls.read_overrides(yaml_path))

    @staticmethod
    def read_overrides(yaml_path):
        """Read a YAML overrides file into a dict of config fields."""
        if not os.path.exists(yaml_path):
            raise ConfigError(f"Config file not found: {yaml_path}")

        with open(yaml_path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {yaml_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"{yaml_path} must be a YAML mapping, got {type(data).__name__}"
            )

        overrides = {}
        for key, value in data.items():
            field = str(key).replace("-", "_")
            if field not in DEFAULTS:
                raise ConfigError(f"{yaml_path}: unknown setting '{key}'")
            overrides[field] = value
        return overrides

    def merged(self, overrides):
        """Return a new config with the given fields replaced."""
        data = dict(self._data)
        data.update({k: v for k, v in (overrides or {}).items() if v is not None})
        return PathConfig(**data)

    # ── Attribute access ───────────────────────────────────

    @property
    def base_path(self):
        return self._data["base_path"]

    @property
    def strict(self):
        return self._data["strict"]

    @property
    def renderers(self):
        return list(self._data["renderers"])

    def __eq__(self, other):
        if not isinstance(other, PathConfig):
            return NotImplemented
        return self._data == other._data

    def __repr__(self):
        return (
            f"PathConfig(base_path={self.base_path!r}, strict={self.strict!r}, "
            f"renderers={self.renderers!r})"
        )


# ── Internal helpers ───────────────────────────────────────────────────


def _table(config, *keys):
    """Walk nested TOML tables, returning {} for anything missing."""
    table = config
    for key in keys:
        table = table.get(key) if isinstance(table, dict) else None
        if table is None:
            return {}
    return table if isinstance(table, dict) else {}


def _validate(data):
    base_path = data["base_path"]
    if not isinstance(base_path, str):
        raise ConfigError(f"base_path must be a string, got {base_path!r}")

    if not isinstance(data["strict"], bool):
        raise ConfigError(f"strict must be true or false, got {data['strict']!r}")

    renderers = data["renderers"]
    if not isinstance(renderers, list) or not all(isinstance(r, str) for r in renderers):
        raise ConfigError(f"renderers must be a list of names, got {renderers!r}")
