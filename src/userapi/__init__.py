"""
userapi - REST API starter

A CRUD REST API scaffold with:
- FastAPI routes bound with decorators
- Dependency injection of database sessions, repositories and services
- A SQLAlchemy ORM User entity in a relational database
- Configuration from a `.env` file
"""

__version__ = "1.0.0"
__author__ = "userapi Team"

__all__ = [
    "__version__",
]
