import json
from unittest.mock import MagicMock, patch

from starlette.requests import Request
import pytest

from src.platform.exception.exception_handlers import (
    EXCEPTION_HANDLERS,
    consistency_error_handler,
    presence_error_handler,
)
from src.platform.exception.exceptions import ConsistencyError, PresenceError
from src.platform.logging.loguru_io import Logger


def _request(path: str) -> Request:
    return Request({'type': 'http', 'method': 'POST', 'path': path, 'headers': []})


class TestSeatingErrorHandlers:
    def test_registered_ahead_of_generic_handler(self) -> None:
        assert EXCEPTION_HANDLERS[ConsistencyError] is consistency_error_handler
        assert EXCEPTION_HANDLERS[PresenceError] is presence_error_handler

    @pytest.mark.asyncio
    async def test_consistency_error_logged_and_returned_as_500(self) -> None:
        with patch.object(Logger, 'base', MagicMock()) as logger:
            response = await consistency_error_handler(
                _request('/api/booking'), ConsistencyError('Booking rolled back')
            )

        assert response.status_code == 500
        assert json.loads(response.body) == {'detail': 'Booking rolled back'}
        logger.error.assert_called_once()
        assert '/api/booking' in logger.error.call_args.args[0]

    @pytest.mark.asyncio
    async def test_presence_error_returned_as_422(self) -> None:
        with patch.object(Logger, 'base', MagicMock()) as logger:
            response = await presence_error_handler(
                _request('/api/booking/1/attendance'), PresenceError('Too far from venue')
            )

        assert response.status_code == 422
        assert json.loads(response.body) == {'detail': 'Too far from venue'}
        logger.info.assert_called_once()
