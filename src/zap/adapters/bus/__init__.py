"""Message bus adapters."""
