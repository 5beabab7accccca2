"""Core configuration and logging for langsync."""
