"""
Core engine.

Components:
- sanitizer.py: markdown -> plain text for issue titles
- mentions.py: new-task / bare / linked mention classification and link normalization
- controller.py: per-edit resolution state machine
- ports.py: Protocols for the host surface, confirmation prompt, issue creator, notifier
"""
