"""monorepo-push: publish a monorepo folder's history to its own repository."""

__version__ = "0.1.0"
