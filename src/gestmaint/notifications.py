#!/usr/bin/env python3
"""
Passerelle de notifications / dialogues.

Les écrans ne parlent qu'à l'interface `Notifier` ; `ConsoleNotifier`
en est la version terminal (affichage sur stdout, confirmation via
input()). Les tests injectent leur propre implémentation.
"""
from __future__ import annotations

from typing import Callable, Optional

NETWORK_ERROR_TITLE = "Erreur de connexion"
NETWORK_ERROR_TEXT = (
    "Impossible de contacter le serveur. "
    "Vérifiez votre connexion internet et réessayez."
)
VALIDATION_TITLE = "Erreur de validation"


class Notifier:
    """Interface commune ; chaque méthode correspond à une boîte de dialogue."""

    def show_success(self, title: str, text: str = "") -> None:
        raise NotImplementedError

    def show_error(self, title: str, text: str = "") -> None:
        raise NotImplementedError

    def show_warning(self, title: str, text: str = "") -> None:
        raise NotImplementedError

    def confirm(
        self,
        title: str,
        text: str,
        confirm_text: str = "Oui, supprimer",
        cancel_text: str = "Annuler",
    ) -> bool:
        raise NotImplementedError

    def show_loading(self, title: str = "Chargement...", text: str = "Veuillez patienter") -> None:
        raise NotImplementedError

    def close_loading(self) -> None:
        raise NotImplementedError

    # -- raccourcis ------------------------------------------------------
    def show_network_error(self) -> None:
        self.show_error(NETWORK_ERROR_TITLE, NETWORK_ERROR_TEXT)


class ConsoleNotifier(Notifier):
    """Notifications en mode texte."""

    def __init__(
        self,
        *,
        out: Optional[Callable[[str], None]] = None,
        ask: Optional[Callable[[str], str]] = None,
        assume_yes: bool = False,
    ) -> None:
        self.out = out or print
        self._ask = ask
        self.assume_yes = assume_yes
        self._loading: Optional[str] = None

    def _emit(self, marker: str, title: str, text: str) -> None:
        self.out(f"{marker} {title}" + (f" : {text}" if text else ""))

    def show_success(self, title: str, text: str = "") -> None:
        self._emit("✅", title, text)

    def show_error(self, title: str, text: str = "") -> None:
        self._emit("❌", title, text)

    def show_warning(self, title: str, text: str = "") -> None:
        self._emit("⚠️", title, text)

    def confirm(
        self,
        title: str,
        text: str,
        confirm_text: str = "Oui, supprimer",
        cancel_text: str = "Annuler",
    ) -> bool:
        self._emit("❓", title, text)
        if self.assume_yes:
            return True
        ask = self._ask or input
        answer = ask(f"[o] {confirm_text} / [N] {cancel_text} : ").strip().lower()
        return answer in ("o", "oui", "y", "yes")

    def show_loading(self, title: str = "Chargement...", text: str = "Veuillez patienter") -> None:
        self._loading = title
        self._emit("⏳", title, text)

    def close_loading(self) -> None:
        self._loading = None

    @property
    def is_loading(self) -> bool:
        return self._loading is not None
