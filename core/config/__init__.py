"""Configuration helpers for the core app."""
