"""Configuration classes for fluent XML building.

This module provides immutable configuration objects controlling how documents
are rendered and how builders identify themselves in log records.
"""

import json
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Union


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class RenderConfig:
    """Serialization options.

    ``pretty`` enables indentation and line breaks, ``indent`` is the unit
    repeated once per nesting level and ``newline`` terminates every line.
    Both are written verbatim, so any string is accepted.
    """

    pretty: bool = False
    indent: str = "  "
    newline: str = "\n"

    def __post_init__(self) -> None:
        """Validate render configuration."""
        if not isinstance(self.pretty, bool):
            raise ValueError("pretty must be a bool")
        if not isinstance(self.indent, str):
            raise ValueError("indent must be a str")
        if not isinstance(self.newline, str):
            raise ValueError("newline must be a str")

    @classmethod
    def compact(cls) -> "RenderConfig":
        """Create configuration producing a single line of markup."""
        return cls()

    @classmethod
    def pretty_printed(cls, indent: str = "  ", newline: str = "\n") -> "RenderConfig":
        """Create configuration producing indented, line-broken markup."""
        return cls(pretty=True, indent=indent, newline=newline)

    def override(self, **kwargs: Any) -> "RenderConfig":
        """Create a new configuration with specific overrides."""
        return self.from_dict({**self.to_dict(), **kwargs})

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RenderConfig":
        """Create configuration from a plain options mapping.

        Args:
            data: Mapping such as ``{"pretty": True, "indent": "    "}``

        Returns:
            RenderConfig instance created from the mapping

        Raises:
            ConfigValidationError: on unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown render option(s): {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=[f"Use one of: {', '.join(sorted(known))}"],
            )
        try:
            return cls(**dict(data))
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def coerce(
        cls,
        config: Union["RenderConfig", Mapping[str, Any], None] = None,
        default: Optional["RenderConfig"] = None,
        **options: Any,
    ) -> "RenderConfig":
        """Normalize the accepted ways of passing render options.

        Args:
            config: ``None``, a RenderConfig, or an options mapping
            default: Configuration used when ``config`` is ``None``, and the
                base that an options mapping is applied on top of
            **options: Individual options overriding ``config``

        Returns:
            RenderConfig instance
        """
        if config is None:
            base = default or cls()
        elif isinstance(config, RenderConfig):
            base = config
        elif isinstance(config, Mapping):
            base = (default or cls()).override(**config)
        else:
            raise ConfigValidationError(
                f"Unsupported render configuration type: {type(config).__name__}",
                suggestions=["Pass a RenderConfig or a mapping of options"],
            )

        if options:
            return base.override(**options)
        return base


@dataclass(frozen=True)
class BuilderConfig:
    """Configuration for an XMLBuilder document.

    Thread-safe due to frozen dataclass implementation.
    """

    render: RenderConfig = field(default_factory=RenderConfig)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate builder configuration."""
        if not isinstance(self.render, RenderConfig):
            raise ConfigValidationError(
                "render must be a RenderConfig instance",
                field_name="render",
                suggestions=["Use RenderConfig.from_dict() for plain mappings"],
            )
        if self.correlation_id is not None and not self.correlation_id:
            raise ConfigValidationError(
                "correlation_id cannot be empty", field_name="correlation_id"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "render": self.render.to_dict(),
            "correlation_id": self.correlation_id,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BuilderConfig":
        """Create configuration from dictionary."""
        unknown = sorted(set(data) - {"render", "correlation_id"})
        if unknown:
            raise ConfigValidationError(
                f"Unknown builder option(s): {', '.join(unknown)}",
                field_name=unknown[0],
            )
        render = RenderConfig.coerce(data.get("render"))
        return cls(render=render, correlation_id=data.get("correlation_id"))

    @classmethod
    def from_json(cls, json_str: str) -> "BuilderConfig":
        return cls.from_dict(json.loads(json_str))
