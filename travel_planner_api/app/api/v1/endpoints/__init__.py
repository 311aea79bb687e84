"""
Endpoint subpackage for API v1.

Each module in this package defines an APIRouter for one resource.
The resource routers are aggregated in ``router.py``; the ``auth``
router is mounted directly by the application.
"""
