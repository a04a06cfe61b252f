"""
Domain logic module for rental rules.

This package contains the rental card aggregate and its business rules,
independent of storage, events or any calling service.
"""
