"""Domain layer: entities, value objects, enums, errors and ports."""
