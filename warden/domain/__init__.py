"""Domain layer: entities, value objects, events, errors and ports.

No dependencies on application or infrastructure layers.
"""
