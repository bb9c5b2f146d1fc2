"""
Endpoint modules.

Each module defines an ``APIRouter``; they are aggregated in
``router.py`` at the package level and included in the application.
"""
