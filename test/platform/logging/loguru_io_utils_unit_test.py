import pytest

from src.platform.logging.loguru_io_utils import (
    MASK,
    MAX_CONTENT_LENGTH,
    mask_sensitive,
    should_mask_keyword,
    truncate_content,
)


class TestMaskSensitive:
    @pytest.mark.parametrize(
        'raw, expected',
        [
            ("password='hunter2'", f"password='{MASK}'"),
            ("{'token': 'eyJhbGciOi'}", f"{{'token': '{MASK}'}}"),
            ('secret=abc123', f'secret={MASK}'),
            ("Authorization='Bearer'", f"Authorization='{MASK}'"),
        ],
    )
    def test_masks_known_keywords(self, raw: str, expected: str) -> None:
        assert mask_sensitive(raw) == expected

    def test_leaves_other_values_untouched(self) -> None:
        payload = {'seat_id': 1, 'location': 'Main Library'}
        assert mask_sensitive(payload) is payload

    def test_keyword_masking(self) -> None:
        assert should_mask_keyword('PASSWORD', 'x') == MASK
        assert should_mask_keyword('seat_id', 3) == 3


class TestTruncateContent:
    def test_short_content_returned_as_is(self) -> None:
        assert truncate_content('ok') == 'ok'

    def test_long_content_truncated(self) -> None:
        result = truncate_content('x' * (MAX_CONTENT_LENGTH + 10))
        assert result.startswith('x' * MAX_CONTENT_LENGTH)
        assert result.endswith(f'({MAX_CONTENT_LENGTH + 10} chars)')
