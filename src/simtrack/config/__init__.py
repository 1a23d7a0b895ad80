"""Configuration loading, path policy and static defaults for simtrack."""
