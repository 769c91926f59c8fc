"""
Runtime version identity lookup.

Asks the execution environment what it has installed or deployed for a
deployment identifier. Two sources are supported:

- metadata: installed distribution metadata (importlib.metadata)
- environment: deployment variables injected by the runtime platform

Sources raise NotFoundError; lookup_runtime_identity() wraps the outcome in
a LookupResult so callers never see the exception.
"""

import os
import re
from email.parser import Parser
from importlib import metadata
from typing import Mapping, Optional, Union

from .errors import NotFoundError
from .identity import LookupResult, VersionIdentity
from .logger import StructuredLogger, get_logger

DEFAULT_SOURCE = "metadata"

_LOCAL_SEQUENCE = re.compile(r"\+(\d+)$")
_LEADING_DIGITS = re.compile(r"\d+")


def own_deployment_id() -> str:
    """
    Identifier of this running artifact.

    The installed distribution that provides this package, or the package
    name itself when no installed distribution claims it.
    """
    package = __name__.split(".")[0]
    distributions = metadata.packages_distributions().get(package)
    if distributions:
        return distributions[0]
    return package


def _build_tag(wheel_text: Optional[str]) -> Optional[int]:
    if not wheel_text:
        return None
    tag = Parser().parsestr(wheel_text).get("Build")
    if not tag:
        return None
    match = _LEADING_DIGITS.match(tag.strip())
    return int(match.group()) if match else None


def _local_sequence(version: Optional[str]) -> Optional[int]:
    if not version:
        return None
    match = _LOCAL_SEQUENCE.search(version)
    return int(match.group(1)) if match else None


class MetadataSource:
    """Installed distribution metadata, read through importlib.metadata."""

    name = "metadata"

    def fetch(self, deployment_id: str) -> VersionIdentity:
        try:
            dist = metadata.distribution(deployment_id)
        except metadata.PackageNotFoundError as e:
            raise NotFoundError(deployment_id, self.name, reason="distribution is not installed") from e

        try:
            label = dist.version
            wheel_text = dist.read_text("WHEEL")
        except (OSError, KeyError, UnicodeDecodeError) as e:
            raise NotFoundError(deployment_id, self.name, reason=f"unreadable metadata: {e}") from e

        sequence = _build_tag(wheel_text)
        if sequence is None:
            sequence = _local_sequence(label)
        if sequence is None:
            sequence = 0

        return VersionIdentity.from_mapping(
            {"sequence": sequence, "label": label},
            deployment_id=deployment_id,
            source=self.name,
        )


class EnvironmentSource:
    """
    Deployment variables set by the runtime platform.

    Reads <PREFIX>_DEPLOYED_SEQUENCE and <PREFIX>_DEPLOYED_VERSION, where the
    prefix is the upper-cased deployment identifier.
    """

    name = "environment"

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = environ

    @staticmethod
    def variable_names(deployment_id: str):
        prefix = re.sub(r"[^A-Za-z0-9]", "_", deployment_id).upper()
        return f"{prefix}_DEPLOYED_SEQUENCE", f"{prefix}_DEPLOYED_VERSION"

    def fetch(self, deployment_id: str) -> VersionIdentity:
        environ = os.environ if self.environ is None else self.environ
        sequence_var, label_var = self.variable_names(deployment_id)

        missing = [var for var in (sequence_var, label_var) if var not in environ]
        if missing:
            raise NotFoundError(deployment_id, self.name, reason=f"{', '.join(missing)} not set")

        return VersionIdentity.from_mapping(
            {"sequence": environ[sequence_var], "label": environ[label_var]},
            deployment_id=deployment_id,
            source=self.name,
        )


SOURCES = {
    MetadataSource.name: MetadataSource,
    EnvironmentSource.name: EnvironmentSource,
}


def get_source(name: str):
    """Instantiate a runtime source by name."""
    try:
        return SOURCES[name]()
    except KeyError:
        raise ValueError(
            f"Unsupported runtime source '{name}'. Use one of: {', '.join(sorted(SOURCES))}"
        ) from None


def lookup_runtime_identity(
    deployment_id: Optional[str] = None,
    source: Union[str, MetadataSource, EnvironmentSource] = DEFAULT_SOURCE,
    logger: Optional[StructuredLogger] = None,
) -> LookupResult:
    """
    Look up the installed identity of a deployment.

    Args:
        deployment_id: Deployment to look up (default: this artifact)
        source: Source name or instance
        logger: Logger for metrics (default: global logger)

    Returns:
        LookupResult holding the identity, or the NotFoundError on failure
    """
    logger = logger or get_logger()
    if isinstance(source, str):
        source = get_source(source)
    if deployment_id is None:
        deployment_id = own_deployment_id()

    logger.record_lookup_attempt(source.name)
    try:
        identity = source.fetch(deployment_id)
    except NotFoundError as e:
        logger.record_lookup_failure(source.name, type(e).__name__)
        return LookupResult.failure(e)

    logger.record_lookup_success(source.name)
    logger.debug(
        "Runtime identity resolved",
        deployment_id=deployment_id,
        source=source.name,
        sequence=identity.sequence,
        label=identity.label,
    )
    return LookupResult.success(identity)
