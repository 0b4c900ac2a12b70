"""
Thread Note.

- backend/: API, services, persistence, configuration and event publishing
"""
