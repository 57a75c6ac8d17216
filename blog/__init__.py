"""
Blog Application.

- backend/: HTTP API, database models, repositories, services, configuration
"""
