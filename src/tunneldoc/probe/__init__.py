"""Reachability and CORS probing."""
