from ._build import BUILD_LABEL as __version__

__all__ = ["__version__"]
