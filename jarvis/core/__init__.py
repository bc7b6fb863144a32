"""Core module for configuration, logging, errors, and process lifecycle."""
