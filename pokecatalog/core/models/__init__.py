"""Core models and schemas shared across layers."""
