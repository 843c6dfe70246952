"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Event, Tasks) and their JSON form
- task_store.py: JSON file storage (load-all / save-all)
- task_api.py: lifecycle operations (add, edit, delete, start, stop)
"""
