"""Core infrastructure: settings, logging, database and errors."""
