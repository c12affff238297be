"""Domain-Exceptions fuer die Research-/Ideation-Pipeline.

Alle Fehler erben von ``IdeaRadarError``. Die API-Schicht mappt sie auf
HTTP-Statuscodes (siehe ``idea_radar.api.errors``).
"""

from __future__ import annotations

from typing import Any


class IdeaRadarError(Exception):
    """Basisklasse aller fachlichen Fehler."""

    def __init__(self, message: str = "", details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = details or {}


class InputValidationError(IdeaRadarError):
    """Ungueltige Eingabe des Aufrufers, wird nie wiederholt."""


class UnauthorizedError(IdeaRadarError):
    """Bearer-Token fehlt oder ist falsch."""


class UpstreamError(IdeaRadarError):
    """Model- oder Trends-Aufruf abgelehnt (inkl. Rate-Limits)."""


class UpstreamTimeoutError(UpstreamError):
    """Aufruf hat die Deadline ueberschritten. Message enthaelt immer "timeout"."""


class ParseError(IdeaRadarError):
    """Model-Ausgabe strukturell nicht auswertbar."""


class NotFoundError(IdeaRadarError):
    """Referenzierte Session, Idee oder Research-Ergebnis fehlt."""


class SessionNotFoundError(NotFoundError):
    pass


class IdeaNotFoundError(NotFoundError):
    pass


class ResearchNotFoundError(NotFoundError):
    pass


class InvalidSessionTransitionError(IdeaRadarError):
    """Statuswechsel, den die Session-State-Machine nicht erlaubt."""


class RetryExhaustedError(IdeaRadarError):
    """Alle Versuche des RetryExecutors sind fehlgeschlagen.

    Traegt die Anzahl der Versuche und den letzten Fehler; die Message
    enthaelt beides ("<label> failed after 3 attempts: <cause>").
    """

    def __init__(
        self,
        message: str,
        attempts: int,
        last_error: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.attempts = attempts
        self.last_error = last_error


class ResearchFailedError(IdeaRadarError):
    pass


class IdeationFailedError(IdeaRadarError):
    pass


class TrendsCollectionError(IdeaRadarError):
    pass
