"""SVG document models and path geometry."""
