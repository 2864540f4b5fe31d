"""Minimal version helper for the geomdrag package."""

from importlib import metadata

PACKAGE_NAME = "geomdrag"
FALLBACK_VERSION = "0.1.0"


def get_version() -> str:
    """
    Get version for the package.

    :return: Version number.
    """
    try:  # installed
        version = metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:  # dev checkout
        import setuptools_scm  # type: ignore[import-untyped]

        version = setuptools_scm.get_version(fallback_version=FALLBACK_VERSION)
    return version


__all__ = ["get_version"]
