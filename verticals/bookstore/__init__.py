"""Book store vertical: authors and books.

Puts the patterns together for one domain:
- SQLAlchemy models with IdentityMixin
- Pydantic DTOs with explicit payload validation
- Async repositories with eager author loading
- Mapping profile between entities and DTOs
- One CrudController per entity behind a FastAPI router
"""
