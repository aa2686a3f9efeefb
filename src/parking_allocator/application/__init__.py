"""Application layer: allocation use cases and DTOs."""
