"""Application layer: port definitions shared by the infrastructure adapters."""
