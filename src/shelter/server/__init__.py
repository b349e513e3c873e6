"""ASGI transport: session store, request handling, and server startup."""
