"""
Persistence behind the TaskRepository port (load/save of the whole list).

- sqlite_repo.py: SQLite file storage
- memory_repo.py: process-local storage
- persister.py: inline and background snapshot writers
"""
