from insights.services.tokens.dto import AccessTokenOut, IssuedTokenOut
from insights.services.tokens.service import AccessTokenService

__all__ = ["AccessTokenOut", "AccessTokenService", "IssuedTokenOut"]
