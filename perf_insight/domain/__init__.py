"""Domain layer: metric records, report entities and pure analysis services."""
