"""Domain layer: exceptions and enumerations with no infrastructure imports."""
