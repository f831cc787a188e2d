"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Status + presentation metadata)
- errors.py: recoverable errors (ValidationError, NotFoundError)
- validation.py: title/description normalization, id generation, type checks
- task_store.py: in-memory owner of the ordered collection, observers
- task_view.py: filter/sort projection and progress figures
"""
