"""Domain layer: entities, interfaces and services for breathing sessions."""
