"""Configuration, logging and the services used by the core."""
