"""
Task subsystem.

Components:
- task_models.py: data structures (Task, NewTask, TaskStatus, SortOrder) + wire format
- task_validation.py: create/edit validation rules
"""
