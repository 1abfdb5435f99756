"""Core runtime: dialects, connections, registry and the ORM engines."""
