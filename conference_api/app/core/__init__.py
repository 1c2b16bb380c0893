"""Configuration, logging, security and low-level database helpers."""
