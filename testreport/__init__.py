"""Per-class HTML test report pages."""
