"""Domain layer: business rules independent of HTTP transport."""
