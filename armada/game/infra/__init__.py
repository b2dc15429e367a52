"""Process-level configuration, paths and logging policy."""
