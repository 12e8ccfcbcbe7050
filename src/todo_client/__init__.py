"""
Console client for a REST to-do list backend.

Layout:
- tasks/: task entity, wire format, validation rules
- api/: async HTTP client for the task resource
- ui/: list controller (state machine, refresh sequencing)
- connectors/: console view + REPL
- cli/: entry point, composition root, slash commands
"""
