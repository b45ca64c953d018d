"""Adapters implementing the collaborator ports over HTTP."""
