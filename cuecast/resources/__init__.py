"""Resource lookup for Cuecast request kinds."""

from cuecast.resources.resource_locator import DirectoryResourceLocator

__all__ = ["DirectoryResourceLocator"]
