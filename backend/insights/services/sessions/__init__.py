from insights.services.sessions.dto import SessionClaimsOut, SessionOut
from insights.services.sessions.service import SessionService

__all__ = ["SessionClaimsOut", "SessionOut", "SessionService"]
