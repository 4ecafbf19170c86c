from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends, Header

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.service.seating.domain.value_object.member import Member
from src.service.seating.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(' ')
    if scheme.lower() != 'bearer' or not token:
        return None
    return token.strip()


@inject
async def get_current_member(
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    cookie_token: Optional[str] = Cookie(None, alias=settings.AUTH_COOKIE_NAME),
    authorization: Optional[str] = Header(None),
) -> Member:
    """Cookie first, then `Authorization: Bearer <token>`"""
    return jwt_auth.get_current_member_from_jwt(cookie_token or _bearer_token(authorization))
