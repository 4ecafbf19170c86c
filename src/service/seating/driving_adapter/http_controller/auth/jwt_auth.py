"""
Stateless member authentication

Accounts live in the upstream identity service; this service only verifies
the signed token and rebuilds the member from its claims (no DB query).
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError
from src.service.seating.domain.value_object.member import Member


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_days = 7

    def create_jwt_token(self, member: Member) -> str:
        payload = {
            'sub': str(member.id),
            'exp': datetime.now(timezone.utc) + timedelta(days=self.token_expire_days),
            'iat': datetime.now(timezone.utc),
            'user_id': member.id,
            'email': member.email,
            'name': member.name,
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError:
            raise AuthenticationError('Invalid token')

    def get_current_member_from_jwt(self, token: Optional[str]) -> Member:
        if not token:
            raise AuthenticationError('Not authenticated')

        payload = self.decode_jwt_token(token)

        user_id = payload.get('user_id')
        email = payload.get('email')
        name = payload.get('name')
        if not isinstance(user_id, int) or not email or not name:
            raise AuthenticationError('Invalid token')

        return Member(id=user_id, name=name, email=email)
