"""
Domain layer for the Gmail add-on workflows.

This layer contains:
- Data models (type-safe structures)
- Terminal registry (FIRMS code lookup)
- Workflow dispatcher (subject/label rules)
- Event processing (open and action events)
"""
