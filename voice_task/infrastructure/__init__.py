"""Infrastructure concerns shared by every layer."""
