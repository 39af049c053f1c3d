"""
Board subsystem.

Components:
- models.py: data structures (Task, Lane, LateStatus, HistoryEntry, TaskDraft)
- storage.py: JSON key-value file storage for the task list
- task_store.py: authoritative task collection + subscriber fan-out
- transitions.py: lane move decisions, edit dialog lifecycle, rescue resolution
- rescue.py: pending deferred move awaiting a new due date
- monitor.py: background polling loop that expires overdue tasks
- analytics.py: search filter and board statistics
"""
