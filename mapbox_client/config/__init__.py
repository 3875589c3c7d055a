"""Environment configuration and logging setup for the Mapbox client."""
