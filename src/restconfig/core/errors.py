"""
Structured error types for restconfig.

Alias registration problems are configuration-time defects: they must be
reported when the tables are built, with enough metadata to point at the
clients involved, instead of surfacing later as a value silently read from
the wrong client. Missing configuration, on the other hand, is a normal
outcome and is represented as ``None`` by the lookup APIs.

Architecture:
    ::

        ┌───────────────────────────────────────────────────────┐
        │                    RestConfigError                     │
        │           (category, context, cause, to_dict)          │
        ├───────────────────────────────────────────────────────┤
        │  ConfigError (CONFIG)          WorkspaceError (SOURCE) │
        │     │                                                  │
        │  AliasCollisionError                                   │
        │  AliasCycleError                                       │
        │  MissingConfigError                                    │
        │  InvalidConfigError                                    │
        └───────────────────────────────────────────────────────┘

Examples:
    >>> error = AliasCollisionError("FooClient", ["com.a.FooClient", "com.b.FooClient"])
    >>> error.category
    <ErrorCategory.CONFIG: 'CONFIG'>
    >>> error.to_dict()["context"]["alias"]
    'FooClient'

Guardrails:
    ❌ DON'T: Raise for an absent property
    ✅ DO: Return ``None`` and let the caller decide

    ❌ DON'T: Let the last registered client win silently
    ✅ DO: Raise AliasCollisionError (or opt in to ``last-wins``)

Tags:
    error-handling, exception-hierarchy, configuration, restconfig
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used for classification in logs."""

    CONFIG = "CONFIG"             # Invalid registrations, bad values
    SOURCE = "SOURCE"             # Unreadable workspace or property source
    VALIDATION = "VALIDATION"     # Value failed type conversion
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


@dataclass
class ErrorContext:
    """Structured metadata attached to an error.

    Attributes:
        name: Configuration name being resolved
        client: Full name of the REST client involved
        source_name: Name of the property source or workspace file
        metadata: Additional key-value pairs
    """

    name: str | None = None
    client: str | None = None
    source_name: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["name", "client", "source_name"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class RestConfigError(Exception):
    """
    Base exception for all restconfig errors.

    Subclasses set ``default_category`` to classify themselves. Every
    instance carries a message, a category, an :class:`ErrorContext` and an
    optional chained cause.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> RestConfigError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ConfigError("Bad key").with_context(client="com.acme.FooClient")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(RestConfigError):
    """Configuration error. The registration or the value must be fixed."""

    default_category = ErrorCategory.CONFIG


class AliasCollisionError(ConfigError):
    """Two registered clients claim the same alias for different targets."""

    def __init__(self, alias: str, clients: Iterable[str], table: str | None = None):
        self.alias = alias
        self.clients = sorted(set(clients))
        self.table = table
        super().__init__(
            f"REST client alias {alias!r} is claimed by more than one client: "
            f"{', '.join(self.clients)}. Declare a distinct configKey or use the fully "
            f"qualified name."
        )
        self.with_context(alias=alias, clients=self.clients)
        if table:
            self.with_context(table=table)


class AliasCycleError(ConfigError):
    """A rewrite table contains a chain that loops back on itself."""

    def __init__(self, table: str, chain: list[str]):
        self.table = table
        self.chain = chain
        super().__init__(f"Alias cycle in {table}: {' -> '.join(chain)}")
        self.with_context(table=table, chain=chain)


class MissingConfigError(ConfigError):
    """Required configuration is missing."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"Missing required configuration: {key}")
        self.with_context(name=key)


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    default_category = ErrorCategory.VALIDATION

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")
        self.with_context(name=key)


# =============================================================================
# SOURCE ERRORS
# =============================================================================


class WorkspaceError(RestConfigError):
    """A workspace file describing clients and sources could not be read."""

    default_category = ErrorCategory.SOURCE


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "RestConfigError",
    "ConfigError",
    "AliasCollisionError",
    "AliasCycleError",
    "MissingConfigError",
    "InvalidConfigError",
    "WorkspaceError",
]
