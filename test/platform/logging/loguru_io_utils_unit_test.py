import pytest

from src.platform.logging.loguru_io_utils import (
    mask_sensitive,
    normalize_args_kwargs,
    should_mask_keyword,
    truncate_content,
)


pytestmark = pytest.mark.unit


class TestMaskSensitive:
    @pytest.mark.parametrize(
        'raw',
        [
            "CardDetails(card_number='4111111111111111', cvv='123')",
            '{"cardNumber": "4111111111111111", "cvv": "123"}',
            'token=eyJhbGciOi',
        ],
    )
    def test_secrets_are_hidden(self, raw):
        masked = mask_sensitive(raw)
        assert '4111111111111111' not in masked
        assert '123' not in masked.replace('********', '')
        assert 'eyJhbGciOi' not in masked

    def test_untouched_values_keep_their_type(self):
        payload = {'event_id': 'abc', 'number_of_tickets': 2}
        assert mask_sensitive(payload) is payload

    def test_keyword_masking(self):
        assert should_mask_keyword('password', 'hunter2') == '********'
        assert should_mask_keyword('email', 'a@b.c') == 'a@b.c'


def test_truncate_long_strings_only():
    assert truncate_content('x' * 10, max_length=4) == 'xxxx...(+6 chars)'
    assert truncate_content('short', max_length=10) == 'short'
    assert truncate_content(12345, max_length=2) == 12345


def test_normalize_drops_unknown_kwargs():
    def target(a, *, b):
        return a, b

    args, kwargs = normalize_args_kwargs(target, 1, 2, 3, b=4, c=5)
    assert args == (1,)
    assert kwargs == {'b': 4}
