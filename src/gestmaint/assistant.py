"""Widget assistant IA : transcript linéaire + un seul envoi à la fois."""
from __future__ import annotations

import logging
import threading
from typing import Dict, List

from gestmaint.api_client import ApiClient

logger = logging.getLogger(__name__)

GREETING = (
    "👋 Bonjour ! Je suis votre assistant IA dédié à la gestion de maintenance. "
    "Posez vos questions (clients, contrats, interventions, équipements, factures, etc.)."
)
NO_REPLY = "Désolé, je n’ai pas pu répondre."
COMM_ERROR = "Erreur de communication avec le service IA."

QUICK_PROMPTS = [
    "Ajouter un client",
    "Créer une facture",
    "Planifier une intervention",
    "Ajouter un équipement",
    "Afficher le tableau de bord",
]


class AssistantWidget:
    def __init__(self, api: ApiClient) -> None:
        self.api = api
        self.history: List[Dict[str, str]] = [{"role": "model", "text": GREETING}]
        self._pending = threading.Event()
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._pending.is_set()

    @property
    def can_send(self) -> bool:
        """Le bouton d'envoi est désactivé tant qu'une réponse est attendue."""
        return not self.pending

    def send(self, text: str) -> bool:
        """
        Ajoute le message utilisateur puis la réponse du modèle.

        Renvoie False sans rien envoyer si le texte est vide ou si un
        envoi est déjà en cours.
        """
        message = (text or "").strip()
        if not message:
            return False

        with self._lock:
            if self._pending.is_set():
                logger.debug("Assistant busy, message ignored")
                return False
            prior = [dict(entry) for entry in self.history]
            self.history.append({"role": "user", "text": message})
            self._pending.set()

        try:
            try:
                data = self.api.chat(message, prior)
                reply = data.get("reply") if isinstance(data, dict) else None
                if not reply:
                    logger.warning("Assistant response without reply: %r", data)
                    reply = NO_REPLY
            except Exception as exc:  # toute erreur devient un message du modèle
                logger.error("Assistant request failed: %s", exc)
                reply = COMM_ERROR
            self.history.append({"role": "model", "text": reply})
        finally:
            self._pending.clear()
        return True
