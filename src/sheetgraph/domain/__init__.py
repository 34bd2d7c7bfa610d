"""Domain layer: entity model, ports and the row-to-entity mapping engine."""
