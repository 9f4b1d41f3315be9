"""Data models: cache, state and core rows."""
