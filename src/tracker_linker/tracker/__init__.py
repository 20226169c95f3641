"""
Tracker subsystem.

Components:
- models.py: task creation data structures (confirmation request/result, creation request)
- client.py: httpx-based issue creation client
"""
