"""
Auth 모듈
Spotify client credentials 토큰 발급
"""

from .token_acquirer import TokenAcquirer

__all__ = [
    "TokenAcquirer",
]
