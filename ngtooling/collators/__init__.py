"""Metadata collators for asset folders that sit next to the module tree."""

from .samples import SamplesCollator
from .svgs import SvgCollator, SvgComponent, SvgFile

__all__ = ["SamplesCollator", "SvgCollator", "SvgComponent", "SvgFile"]
