"""
OAuth 소셜 로그인 서비스
"""

from applestore.services.oauth.base import BaseOAuthService, OAuthTokens
from applestore.services.oauth.google import GoogleOAuthService

__all__ = ["BaseOAuthService", "OAuthTokens", "GoogleOAuthService"]
