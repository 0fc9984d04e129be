"""Bridge configuration document rendering.

This module provides the Jinja2-based renderer for the annotated
configuration file. Identical models always render to identical text.
"""

from bridgeconf.templates.renderer import DocumentRenderer, render

__all__ = ["DocumentRenderer", "render"]
