"""Infrastructure layer: persistence, authentication primitives and the HTTP API."""
