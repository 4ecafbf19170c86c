from fastapi.testclient import TestClient

from src.platform.config.core_setting import settings
from src.service.seating.domain.value_object.member import Member
from src.service.seating.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


def login_member(client: TestClient, member: Member) -> None:
    """Set the auth cookie the identity service would have issued after login."""
    client.cookies.set(settings.AUTH_COOKIE_NAME, JwtAuth().create_jwt_token(member))


def bearer_headers(member: Member) -> dict[str, str]:
    return {'Authorization': f'Bearer {JwtAuth().create_jwt_token(member)}'}


def assert_response_status(response, expected_status: int, message: str | None = None):
    response_text = getattr(response, 'text', getattr(response, 'content', 'N/A'))
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response_text}'
    )
