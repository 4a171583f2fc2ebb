"""Taxonomie d'erreurs du SDK : codes, contexte structuré, suggestions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping


class ErrorCode(str, Enum):
    """Codes d'erreur produits par le SDK (ensemble fermé)."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND_ERROR = "NOT_FOUND_ERROR"
    RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"
    SERVER_ERROR = "SERVER_ERROR"
    UPLOAD_ERROR = "UPLOAD_ERROR"
    WORKFLOW_ERROR = "WORKFLOW_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


@dataclass(frozen=True)
class ErrorContext:
    """Contexte attaché à une erreur (pour le support et le diagnostic)."""

    status_code: int | None = None
    """Code HTTP de la réponse, si une réponse a été reçue."""
    endpoint: str | None = None
    """Endpoint (ou URL signée) qui a échoué."""
    request_id: str | None = None
    """Identifiant de corrélation renvoyé par le backend."""
    details: Mapping[str, Any] = field(default_factory=dict)
    """Détails libres (corps d'erreur API, paramètres de polling, etc.)."""


class LegitmarkError(Exception):
    """
    Erreur structurée du SDK.

    Un seul type concret : le `code` porte la catégorie, `retryable` indique si
    l'appelant peut relancer l'opération telle quelle, `suggestions` liste des
    actions correctives lisibles.
    """

    def __init__(
        self,
        code: ErrorCode | str,
        message: str,
        *,
        context: ErrorContext | None = None,
        retryable: bool = False,
        suggestions: Iterable[str] = (),
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self._code = ErrorCode(code)
        self._message = message
        self._context = context or ErrorContext()
        self._retryable = bool(retryable)
        self._suggestions: tuple[str, ...] = tuple(suggestions)
        self._cause = cause
        if cause is not None:
            self.__cause__ = cause

    # Lecture seule : une erreur ne change pas après construction.
    @property
    def code(self) -> ErrorCode:
        return self._code

    @property
    def message(self) -> str:
        return self._message

    @property
    def context(self) -> ErrorContext:
        return self._context

    @property
    def retryable(self) -> bool:
        return self._retryable

    @property
    def suggestions(self) -> tuple[str, ...]:
        return self._suggestions

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code.value!r}, {self.message!r})"

    def to_log_string(self) -> str:
        parts = [f"[{self.code.value}] {self.message}"]
        if self.context.status_code:
            parts.append(f"Status: {self.context.status_code}")
        if self.context.endpoint:
            parts.append(f"Endpoint: {self.context.endpoint}")
        if self.context.request_id:
            parts.append(f"RequestID: {self.context.request_id}")
        if self.suggestions:
            parts.append(f"Suggestions: {', '.join(self.suggestions)}")
        return " | ".join(parts)


class ConfigurationError(LegitmarkError):
    """SDK mal configuré (clé API absente, fichier de config invalide)."""

    def __init__(self, message: str, suggestions: Iterable[str] = ()):
        super().__init__(
            ErrorCode.CONFIGURATION_ERROR,
            message,
            retryable=False,
            suggestions=suggestions,
        )


def workflow_error(message: str, suggestions: Iterable[str] = ()) -> LegitmarkError:
    """Erreur de précondition du workflow : jamais relançable telle quelle."""
    return LegitmarkError(
        ErrorCode.WORKFLOW_ERROR,
        message,
        retryable=False,
        suggestions=suggestions,
    )
