"""Configuration loading and derived settings."""
