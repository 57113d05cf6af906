"""Application layer - wiring of lookup contexts from configuration."""
