"""Configuration, database, logging, errors and dependency wiring."""
