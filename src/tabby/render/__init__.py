"""Rendering: markdown, highlighting, layouts, and the HTML document template."""
