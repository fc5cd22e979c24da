"""Current-country capability used to interpret nationally formatted numbers."""
from __future__ import annotations

import locale
from typing import Protocol

from blocked_numbers.kernel.errors import CountryDetectionError
from blocked_numbers.observability.logging import get_logger

logger = get_logger(__name__)


def _clean_iso(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip().upper()
    if len(value) != 2 or not value.isalpha():
        return None
    return value


class CountryDetector(Protocol):
    """Port: answer "which country is this device in right now?".

    Returns an ISO 3166-1 alpha-2 code (``"US"``, ``"JP"``) or ``None``
    when the country is unknown. Implementations may raise
    :class:`CountryDetectionError` when the underlying source fails.
    """

    def current_country_iso(self) -> str | None: ...


class FixedCountryDetector:
    """Always reports the configured country."""

    def __init__(self, country_iso: str | None) -> None:
        self._country_iso = _clean_iso(country_iso)

    def current_country_iso(self) -> str | None:
        return self._country_iso


class LocaleCountryDetector:
    """Derive the country from the process locale (``en_US.UTF-8`` -> ``US``)."""

    def current_country_iso(self) -> str | None:
        try:
            language_code, _encoding = locale.getlocale()
        except ValueError as exc:
            raise CountryDetectionError("Could not read the process locale", cause=exc) from exc
        if not language_code or "_" not in language_code:
            return None
        return _clean_iso(language_code.split("_", 1)[1][:2])


class FallbackCountryDetector:
    """Ask each detector in turn; the first non-empty answer wins.

    A detector that raises :class:`CountryDetectionError` is skipped.
    """

    def __init__(self, *detectors: CountryDetector) -> None:
        self._detectors = detectors

    def current_country_iso(self) -> str | None:
        for detector in self._detectors:
            try:
                country_iso = detector.current_country_iso()
            except CountryDetectionError as exc:
                logger.warning(
                    "country_detector.failed",
                    detector=type(detector).__name__,
                    error=exc.message,
                )
                continue
            if country_iso:
                return country_iso
        return None


__all__ = [
    "CountryDetector",
    "FallbackCountryDetector",
    "FixedCountryDetector",
    "LocaleCountryDetector",
]
