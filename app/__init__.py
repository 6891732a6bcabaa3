"""
ITS Application Portal
Job-application intake and regional ranking for IT support officer positions.

Architecture:
- FastAPI: public form endpoint and JWT-protected admin endpoints
- SQLAlchemy: applications, subjects, experiences, admins
- Scoring: deterministic keyword/grade heuristic, ranked per region
"""

__version__ = "1.0.0"
