"""Lambda presentation layer."""
