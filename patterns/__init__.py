"""Reusable patterns behind every book store resource.

Each module is a self-contained layer of the CRUD request pipeline:
the generic controller, the async repository, and the object mapper.
"""
