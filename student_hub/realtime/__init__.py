"""Live dashboards over Server-Sent Events.

Each standing stream re-queries its scope on a fixed interval (and on
change-bus wake-ups) and pushes the full snapshot; see ``sessions``.
"""
