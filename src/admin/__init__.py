"""
Admin Module
============

Bounded Context for agency back-office staff.

Responsibilities:
- Authenticate agency administrators
- List and review the submissions routed to the admin's agency
- Update submission status and the response shown to the citizen

Endpoints:
- POST /api/admin/login
- GET /api/admin/submissions, GET /api/admin/submissions/{id}
- PUT /api/admin/submissions/{id}
"""

__version__ = "1.0.0"
