"""Phone number normalization – comparison keys for blocklist matching.

A raw number is reduced to two keys:

* ``stripped`` – every character that is not an ASCII digit removed.
* ``e164``     – the international form (``+14085551234``), present only when
  the input parses as a valid number for the current country.

Non-numeric identifiers (``abc.def@gmail.com``) still get a stripped key,
usually empty; they are matched only in their verbatim form.
"""

from __future__ import annotations

import dataclasses
from typing import Final

import phonenumbers

from blocked_numbers.kernel.errors import CountryDetectionError
from blocked_numbers.kernel.phone.country import CountryDetector
from blocked_numbers.observability.logging import get_logger

logger = get_logger(__name__)

_ASCII_DIGITS: Final = frozenset("0123456789")


@dataclasses.dataclass(frozen=True, slots=True)
class NumberKeys:
    """Comparison keys derived from one raw number."""

    stripped: str
    e164: str | None = None


def strip_number(raw: str) -> str:
    """Return *raw* with every non-ASCII-digit character removed."""
    return "".join(ch for ch in raw if ch in _ASCII_DIGITS)


def format_e164(raw: str, country_iso: str | None) -> str | None:
    """Return the E.164 form of *raw*, or ``None`` if it is not a valid number.

    *country_iso* is used for nationally formatted input; without it only
    numbers written with a leading ``+`` can be classified.
    """
    if not raw or "@" in raw:
        return None
    region = country_iso.upper() if country_iso else None
    try:
        parsed = phonenumbers.parse(raw, region)
    except phonenumbers.NumberParseException:
        return None
    if not phonenumbers.is_valid_number(parsed):
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def canonical_e164(value: str) -> str:
    """Drop punctuation from a caller-supplied E.164 value.

    ``"+81-45-111-2222"`` becomes ``"+81451112222"``. The value is not
    validated; text without any digit is returned unchanged.
    """
    digits = strip_number(value)
    if not digits:
        return value
    return ("+" + digits) if value.lstrip().startswith("+") else digits


def normalize(raw: str, country_iso: str | None) -> NumberKeys:
    """Derive the comparison keys for *raw* in the context of *country_iso*."""
    return NumberKeys(stripped=strip_number(raw), e164=format_e164(raw, country_iso))


class Normalizer:
    """Binds :func:`normalize` to an injected current-country capability.

    With no detector, E.164 derivation is skipped and only the stripped key
    is produced.
    """

    def __init__(self, country_detector: CountryDetector | None = None) -> None:
        self._country_detector = country_detector

    @property
    def country_detector(self) -> CountryDetector | None:
        return self._country_detector

    def _country(self) -> tuple[bool, str | None]:
        if self._country_detector is None:
            return False, None
        try:
            return True, self._country_detector.current_country_iso()
        except CountryDetectionError as exc:
            logger.warning("normalizer.country_unavailable", error=exc.message)
            return False, None

    def current_country_iso(self) -> str | None:
        return self._country()[1]

    def normalize(self, raw: str) -> NumberKeys:
        available, country_iso = self._country()
        if not available:
            return NumberKeys(stripped=strip_number(raw))
        return normalize(raw, country_iso)

    def e164(self, raw: str) -> str | None:
        return self.normalize(raw).e164


__all__ = [
    "NumberKeys",
    "Normalizer",
    "canonical_e164",
    "format_e164",
    "normalize",
    "strip_number",
]
