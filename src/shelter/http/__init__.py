"""HTTP types used by the ASGI transport."""
