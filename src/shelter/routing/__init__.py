"""Routing — immutable route table and the per-session path router.

Views are registered during setup and compiled into an immutable
route table when the app freezes. Each session gets its own router
bound to that shared table.
"""
