"""
Card details supplied by the customer.

Two checks exist on purpose and are not interchangeable:
- is_complete(): loose check used at booking time, all four fields present
- validate_for_payment(): strict check used by the payment endpoint
"""

import re
from typing import Optional

import attrs

from src.platform.exception.exceptions import ValidationError


_WHITESPACE = re.compile(r'\s')
_CARD_NUMBER = re.compile(r'[0-9]{13,19}')
_CVV = re.compile(r'[0-9]{3,4}')


@attrs.frozen
class CardDetails:
    card_number: Optional[str] = attrs.field(default=None, repr=False)
    card_holder: Optional[str] = None
    expiry_date: Optional[str] = attrs.field(default=None, repr=False)
    cvv: Optional[str] = attrs.field(default=None, repr=False)

    def is_complete(self) -> bool:
        return bool(self.card_number and self.card_holder and self.expiry_date and self.cvv)

    @property
    def normalized_card_number(self) -> str:
        return _WHITESPACE.sub('', self.card_number or '')

    def validate_for_payment(self) -> None:
        """
        Raises:
            ValidationError: missing field, card number not 13-19 digits, or CVV not 3-4 digits
        """
        if not self.is_complete():
            raise ValidationError('All payment details are required')

        number = self.normalized_card_number
        if not _CARD_NUMBER.fullmatch(number):
            raise ValidationError('Invalid card details: card number must be 13-19 digits')

        if not _CVV.fullmatch((self.cvv or '').strip()):
            raise ValidationError('Invalid card details: CVV must be 3-4 digits')
