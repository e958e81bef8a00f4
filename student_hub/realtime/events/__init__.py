"""Domain-specific publishers.

These modules only build topics and publish on the change bus; they never
touch HTTP responses or sessions.
"""
