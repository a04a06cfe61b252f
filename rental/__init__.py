"""
Rental card service: member loans, returns and late fees.
"""

__version__ = "0.1.0"
