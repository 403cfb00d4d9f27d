"""Read-only configuration inspection."""
