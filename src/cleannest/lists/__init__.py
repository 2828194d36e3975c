"""
List subsystem.

Components:
- seed.py: static seed records (tasks, shopping items, demo user)
- collection.py: generic in-memory manager with simulated latency
- tasks.py / items.py: the two concrete lists
- stats.py: category filter and progress counters used by the dashboard
"""
