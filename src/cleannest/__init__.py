"""
CleanNest: household cleaning tasks and shopping list.

Components:
- auth/: mock auth session (scoped, always signs in the demo user)
- lists/: task and shopping-list managers over static seed data
- cli/ + connectors/: console dashboard driving the managers
"""

__version__ = "0.1.0"
