"""Application layer - protocol use cases."""
