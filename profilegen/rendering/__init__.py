"""README rendering."""

from .renderer import DEFAULT_TEMPLATE, ReadmeRenderer, RenderError

__all__ = ["DEFAULT_TEMPLATE", "ReadmeRenderer", "RenderError"]
