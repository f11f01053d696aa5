"""Dog adoption listings service."""
