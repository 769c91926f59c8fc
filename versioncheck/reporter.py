"""
Build-time versus runtime identity report.

Renders "<build.sequence>/<build.label>....<runtime.sequence>/<runtime.label>".
A failed runtime lookup is logged and shown as a placeholder; the build half
is always present and the call never raises NotFoundError.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from .build import build_identity
from .identity import LookupResult, VersionIdentity
from .logger import StructuredLogger, get_logger
from .runtime import DEFAULT_SOURCE, lookup_runtime_identity

FIELD_SEPARATOR = "/"
PAIR_SEPARATOR = "...."
DEFAULT_PLACEHOLDER = "unavailable"


def format_identity(identity: VersionIdentity) -> str:
    return f"{identity.sequence}{FIELD_SEPARATOR}{identity.label}"


def format_comparison(
    build: VersionIdentity,
    runtime: Optional[VersionIdentity],
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> str:
    runtime_half = format_identity(runtime) if runtime is not None else placeholder
    return f"{format_identity(build)}{PAIR_SEPARATOR}{runtime_half}"


@dataclass(frozen=True)
class Comparison:
    build: VersionIdentity
    runtime: LookupResult
    text: str

    def as_dict(self) -> dict:
        return {
            "build": self.build.as_dict(),
            "runtime": self.runtime.identity.as_dict() if self.runtime.ok else None,
            "runtime_error": str(self.runtime.error) if self.runtime.error else None,
            "text": self.text,
        }


class IdentityReporter:
    """
    Juxtaposes the build-time identity with the runtime one.

    Both providers are injectable so entry points and tests can supply their
    own; by default the compiled-in constants and a metadata lookup for this
    artifact are used.
    """

    def __init__(
        self,
        build_provider: Callable[[], VersionIdentity] = build_identity,
        runtime_provider: Optional[Callable[[], LookupResult]] = None,
        deployment_id: Optional[str] = None,
        source: str = DEFAULT_SOURCE,
        placeholder: str = DEFAULT_PLACEHOLDER,
        logger: Optional[StructuredLogger] = None,
    ):
        self.build_provider = build_provider
        self.deployment_id = deployment_id
        self.source = source
        self.placeholder = placeholder
        self.logger = logger
        if runtime_provider is None:
            runtime_provider = self._lookup
        self.runtime_provider = runtime_provider

    def _logger(self) -> StructuredLogger:
        return self.logger or get_logger()

    def _lookup(self) -> LookupResult:
        return lookup_runtime_identity(
            deployment_id=self.deployment_id,
            source=self.source,
            logger=self._logger(),
        )

    def compare(self) -> Comparison:
        build = self.build_provider()
        runtime = self.runtime_provider()

        if not runtime.ok:
            error = runtime.error
            self._logger().warning(
                "Runtime version identity unavailable",
                deployment_id=error.deployment_id,
                source=error.source,
                error_type=type(error).__name__,
                error=str(error),
            )

        text = format_comparison(build, runtime.identity, self.placeholder)
        return Comparison(build=build, runtime=runtime, text=text)

    def report(self) -> str:
        """Return the comparison string for this process."""
        return self.compare().text
