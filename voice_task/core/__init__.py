"""Core domain layer: models, ports, services and use cases."""
