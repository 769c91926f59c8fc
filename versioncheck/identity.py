"""
Version identity value types.

A VersionIdentity is the (sequence, label) pair that names one build of an
artifact. LookupResult carries the outcome of a runtime lookup so callers
handle the missing-record case explicitly instead of catching exceptions.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import NotFoundError
from .schema import coerce_sequence, validate_identity


@dataclass(frozen=True)
class VersionIdentity:
    """Immutable build sequence number plus human-readable version label."""

    sequence: int
    label: str

    def __post_init__(self):
        errors = validate_identity({"sequence": self.sequence, "label": self.label})
        # Strings pass the schema for untrusted input; constructed values must be ints
        if isinstance(self.sequence, str):
            errors.append("Field 'sequence' must be an int, not a string")
        if errors:
            raise ValueError("; ".join(errors))

    @classmethod
    def from_mapping(
        cls,
        data: Dict[str, Any],
        deployment_id: str,
        source: str,
    ) -> "VersionIdentity":
        """
        Build an identity from untrusted metadata.

        Args:
            data: Mapping with 'sequence' and 'label' keys
            deployment_id: Deployment the metadata belongs to (for errors)
            source: Name of the metadata source (for errors)

        Raises:
            NotFoundError: If the metadata is missing or malformed
        """
        errors = validate_identity(data)
        if errors:
            raise NotFoundError(deployment_id, source, reason="; ".join(errors))
        return cls(sequence=coerce_sequence(data["sequence"]), label=data["label"])

    def as_dict(self) -> Dict[str, Any]:
        return {"sequence": self.sequence, "label": self.label}


@dataclass(frozen=True)
class LookupResult:
    """Either an identity or the NotFoundError explaining its absence."""

    identity: Optional[VersionIdentity] = None
    error: Optional[NotFoundError] = None

    def __post_init__(self):
        if (self.identity is None) == (self.error is None):
            raise ValueError("LookupResult needs exactly one of identity or error")

    @classmethod
    def success(cls, identity: VersionIdentity) -> "LookupResult":
        return cls(identity=identity)

    @classmethod
    def failure(cls, error: NotFoundError) -> "LookupResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.identity is not None

    def unwrap(self) -> VersionIdentity:
        """Return the identity, or raise the stored NotFoundError."""
        if self.error is not None:
            raise self.error
        return self.identity
