# topmark:header:start
#
#   project      : BuildProblems
#   file         : model.py
#   file_relpath : src/buildproblems/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model for BuildProblems.

`MutableConfig` is the builder used while layers are discovered and merged;
`Config` is the immutable snapshot the rest of the package consumes. Layers, from
lowest to highest precedence:

1. built-in defaults (`MutableConfig.from_defaults`);
2. ``[tool.buildproblems]`` in ``pyproject.toml``, then ``buildproblems.toml``, found
   in the discovery directory;
3. explicit config files (``--config``), in the given order;
4. CLI overrides (`MutableConfig.apply_args`).

Every field of `MutableConfig` uses ``None`` for "not set by this layer" so that
`MutableConfig.merge_with` can apply last-wins semantics field by field.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from buildproblems.config.io import (
    TomlTable,
    get_bool_value_checked,
    get_enum_value_checked,
    get_string_list_value_checked,
    get_string_value_checked,
    get_table_value,
    load_toml_dict,
    to_toml,
)
from buildproblems.config.keys import Toml
from buildproblems.config.logging import ProblemsLogger, get_logger
from buildproblems.constants import (
    CONFIG_TOML_NAME,
    DEFAULT_NAMESPACE,
    PYPROJECT_TOML_NAME,
    REDACTED_PLACEHOLDER,
)
from buildproblems.errors import ConfigError
from buildproblems.rendering.formats import OutputFormat
from buildproblems.transformers.redact import DEFAULT_SECRET_KEYS

# ArgsLike: generic mapping accepted by `MutableConfig.apply_args` (CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]

logger: ProblemsLogger = get_logger(__name__)

DEFAULT_TRANSFORMERS: tuple[str, ...] = ("stack-location", "redact-secrets")


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration.

    Produced by `MutableConfig.freeze`. Use `Config.thaw` to get an editable copy.

    Attributes:
        namespace (str): Default reporter namespace.
        transformers (tuple[str, ...]): Transformer names, in chain order.
        redact_keys (tuple[str, ...]): Secret names for the redaction transformer.
        redact_patterns (tuple[str, ...]): Extra regular expressions for redaction;
            empty means the pattern derived from ``redact_keys``.
        redact_replacement (str): Text substituted for secrets.
        output_format (OutputFormat): How delivered problems are written.
        color (bool | None): Force colors on or off; ``None`` means auto-detect.
        config_files (tuple[Path, ...]): Files that contributed to this config.
    """

    namespace: str
    transformers: tuple[str, ...]
    redact_keys: tuple[str, ...]
    redact_patterns: tuple[str, ...]
    redact_replacement: str
    output_format: OutputFormat
    color: bool | None = None
    config_files: tuple[Path, ...] = ()

    @classmethod
    def from_defaults(cls) -> Config:
        """Return the frozen built-in defaults."""
        return MutableConfig.from_defaults().freeze()

    def to_toml_dict(self) -> TomlTable:
        """Convert this config into a TOML-serializable dict.

        ``color`` stays ``None`` when unset; `to_toml` drops it since TOML has no null.
        """
        return {
            Toml.SECTION_REPORTER: {
                Toml.KEY_NAMESPACE: self.namespace,
                Toml.KEY_TRANSFORMERS: list(self.transformers),
            },
            Toml.SECTION_REDACT: {
                Toml.KEY_KEYS: list(self.redact_keys),
                Toml.KEY_PATTERNS: list(self.redact_patterns),
                Toml.KEY_REPLACEMENT: self.redact_replacement,
            },
            Toml.SECTION_OUTPUT: {
                Toml.KEY_FORMAT: self.output_format.value,
                Toml.KEY_COLOR: self.color,
            },
        }

    def to_toml(self) -> str:
        """Render this config as a TOML document."""
        return to_toml(self.to_toml_dict())

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            namespace=self.namespace,
            transformers=list(self.transformers),
            redact_keys=list(self.redact_keys),
            redact_patterns=list(self.redact_patterns),
            redact_replacement=self.redact_replacement,
            output_format=self.output_format,
            color=self.color,
            config_files=list(self.config_files),
        )


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging."""

    namespace: str | None = None
    transformers: list[str] | None = None
    redact_keys: list[str] | None = None
    redact_patterns: list[str] | None = None
    redact_replacement: str | None = None
    output_format: OutputFormat | None = None
    color: bool | None = None
    config_files: list[Path] = field(default_factory=lambda: [])

    def freeze(self) -> Config:
        """Validate this draft and freeze it into a `Config`.

        Unset fields fall back to the built-in defaults.

        Raises:
            ConfigError: If a redaction pattern is not a valid regular expression.
        """
        patterns = tuple(self.redact_patterns or ())
        for pattern in patterns:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ConfigError(f"Invalid redaction pattern {pattern!r}: {e}") from e

        return Config(
            namespace=self.namespace or DEFAULT_NAMESPACE,
            transformers=tuple(
                self.transformers if self.transformers is not None else DEFAULT_TRANSFORMERS
            ),
            redact_keys=tuple(
                self.redact_keys if self.redact_keys is not None else DEFAULT_SECRET_KEYS
            ),
            redact_patterns=patterns,
            redact_replacement=(
                self.redact_replacement
                if self.redact_replacement is not None
                else REDACTED_PLACEHOLDER
            ),
            output_format=self.output_format or OutputFormat.TEXT,
            color=self.color,
            config_files=tuple(self.config_files),
        )

    # --------------------------- Loaders/parsers --------------------------

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a draft populated with the built-in defaults."""
        return cls(
            namespace=DEFAULT_NAMESPACE,
            transformers=list(DEFAULT_TRANSFORMERS),
            redact_keys=list(DEFAULT_SECRET_KEYS),
            redact_patterns=[],
            redact_replacement=REDACTED_PLACEHOLDER,
            output_format=OutputFormat.TEXT,
        )

    @classmethod
    def from_toml_dict(cls, data: TomlTable, *, config_file: Path | None = None) -> MutableConfig:
        """Parse a BuildProblems TOML table into a new draft."""
        draft = cls()
        draft.apply_toml(data)
        if config_file is not None:
            draft.config_files = [config_file]
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        For ``pyproject.toml`` the ``[tool.buildproblems]`` table is used.

        Returns:
            MutableConfig | None: The parsed draft, or ``None`` when a
                ``pyproject.toml`` has no ``[tool.buildproblems]`` table.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        toml_data: TomlTable = load_toml_dict(path)

        if path.name == PYPROJECT_TOML_NAME:
            tool = get_table_value(toml_data, Toml.SECTION_TOOL)
            section = get_table_value(tool, Toml.SECTION_TOOL_BUILDPROBLEMS)
            if not section:
                logger.debug("No [tool.buildproblems] table in %s", path)
                return None
            toml_data = section

        return cls.from_toml_dict(toml_data, config_file=path)

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return the config files present in ``start``.

        ``pyproject.toml`` comes first and ``buildproblems.toml`` second so that the
        dedicated file wins when both are merged.
        """
        found: list[Path] = []
        for name in (PYPROJECT_TOML_NAME, CONFIG_TOML_NAME):
            candidate = start / name
            if candidate.is_file():
                found.append(candidate)
        logger.trace("Discovered config files in %s: %s", start, found)
        return found

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: list[Path] | tuple[Path, ...] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Merge defaults, discovered files and explicit files into one draft.

        Args:
            anchor (Path | None): Discovery directory; defaults to the working directory.
            extra_config_files (list[Path] | tuple[Path, ...] | None): Explicit files
                merged last, in order.
            no_config (bool): Skip discovery in ``anchor``.

        Returns:
            MutableConfig: The merged draft.

        Raises:
            ConfigError: If an explicit config file does not exist.
        """
        draft: MutableConfig = cls.from_defaults()

        if not no_config:
            for path in cls.discover_local_config_files(anchor or Path.cwd()):
                mc: MutableConfig | None = cls.from_toml_file(path)
                if mc is not None:
                    draft = draft.merge_with(mc)

        for extra in extra_config_files or ():
            path = Path(extra)
            if not path.is_file():
                raise ConfigError(f"Config file not found: {path}")
            mc = cls.from_toml_file(path)
            if mc is not None:
                draft = draft.merge_with(mc)

        return draft

    def apply_toml(self, data: TomlTable) -> MutableConfig:
        """Apply the values of a BuildProblems TOML table to this draft.

        Wrongly typed values are logged and ignored; unknown keys are ignored.

        Returns:
            MutableConfig: ``self``, for chaining.
        """
        reporter = get_table_value(data, Toml.SECTION_REPORTER)
        where = f"[{Toml.SECTION_REPORTER}]"
        namespace = get_string_value_checked(reporter, Toml.KEY_NAMESPACE, where=where)
        if namespace is not None:
            self.namespace = namespace
        transformers = get_string_list_value_checked(reporter, Toml.KEY_TRANSFORMERS, where=where)
        if transformers is not None:
            self.transformers = transformers

        redact = get_table_value(data, Toml.SECTION_REDACT)
        where = f"[{Toml.SECTION_REDACT}]"
        keys = get_string_list_value_checked(redact, Toml.KEY_KEYS, where=where)
        if keys is not None:
            self.redact_keys = keys
        patterns = get_string_list_value_checked(redact, Toml.KEY_PATTERNS, where=where)
        if patterns is not None:
            self.redact_patterns = patterns
        replacement = get_string_value_checked(redact, Toml.KEY_REPLACEMENT, where=where)
        if replacement is not None:
            self.redact_replacement = replacement

        output = get_table_value(data, Toml.SECTION_OUTPUT)
        where = f"[{Toml.SECTION_OUTPUT}]"
        output_format = get_enum_value_checked(output, Toml.KEY_FORMAT, OutputFormat, where=where)
        if output_format is not None:
            self.output_format = output_format
        color = get_bool_value_checked(output, Toml.KEY_COLOR, where=where)
        if color is not None:
            self.color = color

        return self

    def apply_args(self, args: ArgsLike) -> MutableConfig:
        """Apply CLI overrides; ``None`` values leave the draft untouched.

        Recognized keys: ``namespace``, ``transformers``, ``output_format``, ``color``.

        Returns:
            MutableConfig: ``self``, for chaining.
        """
        namespace = args.get("namespace")
        if namespace is not None:
            self.namespace = str(namespace)
        transformers = args.get("transformers")
        if transformers is not None:
            self.transformers = [str(t) for t in transformers]
        output_format = args.get("output_format")
        if output_format is not None:
            self.output_format = OutputFormat(output_format)
        color = args.get("color")
        if color is not None:
            self.color = bool(color)
        return self

    # ------------------------------- Merging -------------------------------

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft."""
        return MutableConfig(
            namespace=other.namespace if other.namespace is not None else self.namespace,
            transformers=(
                other.transformers if other.transformers is not None else self.transformers
            ),
            redact_keys=other.redact_keys if other.redact_keys is not None else self.redact_keys,
            redact_patterns=(
                other.redact_patterns
                if other.redact_patterns is not None
                else self.redact_patterns
            ),
            redact_replacement=(
                other.redact_replacement
                if other.redact_replacement is not None
                else self.redact_replacement
            ),
            output_format=(
                other.output_format if other.output_format is not None else self.output_format
            ),
            color=other.color if other.color is not None else self.color,
            config_files=self.config_files + other.config_files,
        )
