"""Configuration repair, backups and launch script generation."""
