"""Version identity fixed into the artifact at build time."""

from ._build import BUILD_LABEL, BUILD_SEQUENCE
from .identity import VersionIdentity


def build_identity(sequence: int = BUILD_SEQUENCE, label: str = BUILD_LABEL) -> VersionIdentity:
    """
    Return the compiled-in version identity.

    The defaults are the constants stamped by scripts/stamp_build.py; other
    values are passed through unchanged.
    """
    return VersionIdentity(sequence=sequence, label=label)


def render_build_module(sequence: int, label: str) -> str:
    """
    Source text for versioncheck/_build.py.

    Raises:
        ValueError: If the pair is not a valid identity
    """
    identity = VersionIdentity(sequence=sequence, label=label)
    return (
        "# Generated by scripts/stamp_build.py. Do not edit by hand.\n"
        f"BUILD_SEQUENCE = {identity.sequence}\n"
        f"BUILD_LABEL = {identity.label!r}\n"
    )
