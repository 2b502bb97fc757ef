"""Awards nomination and voting backend."""
