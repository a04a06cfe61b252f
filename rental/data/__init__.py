"""
Persistence layer for rental cards.
"""
