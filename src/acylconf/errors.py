"""Configuration error hierarchy.

Every parser raises a subclass of :class:`ConfigError` on the first invalid
entry. Errors carry the positional offset and raw fragment (or the secret
identifier) that caused them; wrapped failures chain the original exception
as ``__cause__``.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Base class for all configuration parsing errors."""

    def __str__(self) -> str:
        base = super().__str__()
        if self.__cause__ is not None:
            return f"{base}: {self.__cause__}"
        return base


class EmptyInputError(ConfigError):
    """A required input had no usable content."""


class MalformedEntryError(ConfigError):
    """An entry did not split into the expected parts."""

    kind = "entry"

    def __init__(self, offset: int, fragment: str, source: str | None = None) -> None:
        self.offset = offset
        self.fragment = fragment
        self.source = source
        msg = f"malformed {self.kind} at offset {offset}: {fragment}"
        if source is not None:
            msg = f"{msg} in {source}"
        super().__init__(msg)


class MalformedBindingError(MalformedEntryError):
    kind = "group binding"


class MalformedRepoError(MalformedEntryError):
    kind = "repo"


class MalformedInjectionError(MalformedEntryError):
    kind = "secret injection"


class EmptyFieldError(ConfigError):
    """A key or value was present but empty."""

    kind = "field"

    def __init__(self, offset: int, fragment: str) -> None:
        self.offset = offset
        self.fragment = fragment
        super().__init__(f"empty {self.kind} at offset {offset}: {fragment}")


class EmptyBindingError(EmptyFieldError):
    kind = "binding"


class EmptyInjectionError(EmptyFieldError):
    kind = "secret injection"


class SecretFetchError(ConfigError):
    """The secret fetcher failed for an identifier."""

    def __init__(self, secret_id: str) -> None:
        self.secret_id = secret_id
        super().__init__(f"error fetching secret for id: {secret_id}")


class SecretDecodeError(ConfigError):
    """Fetched bytes were not a valid secret record."""

    def __init__(self, secret_id: str) -> None:
        self.secret_id = secret_id
        super().__init__(f"error decoding secret for id: {secret_id}")


class SecretNotFoundError(ConfigError):
    """A fetcher backend has no secret under the identifier."""

    def __init__(self, secret_id: str, location: str) -> None:
        self.secret_id = secret_id
        self.location = location
        super().__init__(f"secret {secret_id} not found at {location}")


class MappingDecodeError(ConfigError):
    """One of the JSON repository mappings failed to decode."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"error decoding {field}")
