"""Application layer: configuration and the analysis engine."""
