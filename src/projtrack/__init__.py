"""projtrack - DIY project tracker.

Persists projects together with their materials, steps and categories in a
relational store and exposes transactional create/read/update/delete
operations over the whole aggregate.
"""

__version__ = "0.1.0"
