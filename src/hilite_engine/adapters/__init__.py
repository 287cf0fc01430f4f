"""Host widget adapters."""
