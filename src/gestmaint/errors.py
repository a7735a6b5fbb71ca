"""Exceptions et classification des erreurs gestmaint."""
from __future__ import annotations

from enum import Enum


class ApiError(Exception):
    """Erreur générique côté client REST."""


class NetworkError(ApiError):
    """Aucune réponse reçue (connexion refusée, timeout, DNS...)."""

    def __init__(self, message: str = "Failed to fetch") -> None:
        # "fetch" reste dans le message : certains appelants filtrent encore dessus
        if "fetch" not in message:
            message = f"Failed to fetch: {message}"
        super().__init__(message)


class HttpStatusError(ApiError):
    """Réponse HTTP >= 400."""

    def __init__(self, method: str, url: str, status_code: int, body: str = "") -> None:
        self.method = method
        self.url = url
        self.status_code = status_code
        self.body = body or ""
        super().__init__(f"{method} {url} → {status_code}: {self.body}")


class DecodeError(ApiError):
    """Réponse de succès illisible, ou d'une autre forme que celle attendue."""


class ValidationError(Exception):
    """Règle de formulaire non respectée ; jamais transmise au réseau."""

    def __init__(self, message: str, title: str = "Erreur de validation") -> None:
        self.title = title
        super().__init__(message)


class ErrorKind(str, Enum):
    NETWORK = "network"
    DUPLICATE = "duplicate"
    INVALID = "invalid"
    CONSTRAINT = "constraint"
    CONFLICT = "conflict"
    GENERIC = "generic"


# mots-clés du backend → type d'erreur, testés dans cet ordre
_BODY_KEYWORDS = (
    (("duplicate", "unique"), ErrorKind.DUPLICATE),
    (("constraint", "foreign key"), ErrorKind.CONSTRAINT),
    (("validation",), ErrorKind.INVALID),
    (("conflict", "schedule"), ErrorKind.CONFLICT),
)


def classify_error(exc: BaseException) -> ErrorKind:
    """
    Ramène une exception levée par l'ApiClient à un ErrorKind.

    Le type d'exception prime ; le corps de la réponse n'est inspecté
    que pour les HttpStatusError (le backend ne renvoie pas de code
    d'erreur structuré).
    """
    if isinstance(exc, NetworkError):
        return ErrorKind.NETWORK
    if isinstance(exc, ValidationError):
        return ErrorKind.INVALID
    if isinstance(exc, HttpStatusError):
        text = exc.body.lower()
        for words, kind in _BODY_KEYWORDS:
            if any(w in text for w in words):
                return kind
        if exc.status_code == 409:
            return ErrorKind.DUPLICATE
    return ErrorKind.GENERIC
