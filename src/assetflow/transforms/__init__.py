"""Text transforms used by the tasks.

Each function wraps one third-party tool (libsass, rcssmin, rjsmin, dukpy,
htmlmin) so tasks only compose stages.
"""
