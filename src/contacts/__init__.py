"""Contact directory web application.

Browser-facing CRUD over people's names and phone numbers, guarded by
session-based authentication with administrator, user and guest roles.
"""

__version__ = "0.1.0"
