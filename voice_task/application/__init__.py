"""Application wiring: dependency container for the Lambda runtime."""
