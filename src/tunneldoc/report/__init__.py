"""Diagnostic and repair report assembly."""
