"""Shared infrastructure used by the payment callback service."""
