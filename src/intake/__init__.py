"""
Intake Module
=============

Bounded Context for citizen complaint intake.

Responsibilities:
- Accept free-text complaints in English or Kinyarwanda
- Route each complaint to a category and its responsible agency
- Issue a trackable ticket ID per complaint
- Public tracking, directory and statistics endpoints

Endpoints:
- POST /api/submissions, GET /api/submissions/{ticket_id}
- GET /api/agencies, GET /api/categories
- GET /api/stats/summary
"""

__version__ = "1.0.0"
