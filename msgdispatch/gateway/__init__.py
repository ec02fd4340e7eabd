"""Transports that carry encoded messages to the open API."""
