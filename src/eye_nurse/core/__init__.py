"""Core domain types shared across the reminder."""
