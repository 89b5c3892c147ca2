"""Infrastructure layer: stream adapters, file I/O and logging."""
