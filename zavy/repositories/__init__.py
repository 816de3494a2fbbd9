"""
Persistence adapters.

Services depend on SQLRepository instead of opening SQLAlchemy sessions
themselves (session tokens are the exception, see services.session_service).
"""
