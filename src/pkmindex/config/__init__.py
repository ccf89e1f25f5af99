"""Configuration: TOML discovery, pydantic models and logging setup."""
