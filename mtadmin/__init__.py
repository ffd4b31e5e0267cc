"""
Driving school admin core
GraphQL-backed resource clients, booking rules and the admin API
"""

__version__ = "1.0.0"
