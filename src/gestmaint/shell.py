"""Navigation par onglets et rendu texte des écrans."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence
from urllib.parse import quote

from gestmaint.api_client import ApiClient
from gestmaint.assistant import AssistantWidget
from gestmaint.config import Config
from gestmaint.dashboard import Dashboard
from gestmaint.notifications import Notifier
from gestmaint.resources.controller import ResourceController
from gestmaint.resources.registry import RESOURCES

logger = logging.getLogger(__name__)

DEFAULT_TAB = "dashboard"

# ordre de la barre latérale
TABS: Dict[str, str] = {
    "dashboard": "Tableau de bord",
    "clients": "Clients",
    "contrats": "Contrats",
    "interventions": "Interventions",
    "equipment": "Équipements",
    "factures": "Factures",
    "techniciens": "Techniciens",
    "contact": "Contact",
    "assistant-ia": "Assistant IA",
}


class ContactPage:
    """Liens de contact (e-mail et WhatsApp)."""

    def __init__(self, email: str, whatsapp: str, subject: str) -> None:
        self.email = email
        self.whatsapp = whatsapp
        self.subject = subject

    @classmethod
    def from_config(cls) -> "ContactPage":
        cfg = Config.get_contact_config()
        return cls(cfg["email"], cfg["whatsapp"], cfg["subject"])

    @property
    def mailto(self) -> str:
        return f"mailto:{self.email}?subject={quote(self.subject)}"

    @property
    def whatsapp_url(self) -> str:
        return f"https://wa.me/{self.whatsapp}"

    def lines(self) -> List[str]:
        return [
            "Contactez-nous",
            f"  Email    : {self.mailto}",
            f"  WhatsApp : {self.whatsapp_url}",
        ]


class Shell:
    """Sélectionne l'écran monté ; les écrans sont construits à la demande."""

    def __init__(self, api: ApiClient, notifier: Notifier) -> None:
        self.api = api
        self.notifier = notifier
        self.active = DEFAULT_TAB
        self._screens: Dict[str, Any] = {}

    def _build(self, tab: str) -> Any:
        if tab in RESOURCES:
            return ResourceController(RESOURCES[tab], self.api, self.notifier)
        if tab == "contact":
            return ContactPage.from_config()
        if tab == "assistant-ia":
            return AssistantWidget(self.api)
        return Dashboard(self.api)

    def open(self, tab: str) -> Any:
        if tab not in TABS:
            logger.warning("Unknown tab %r, falling back to %s", tab, DEFAULT_TAB)
            tab = DEFAULT_TAB
        self.active = tab
        if tab not in self._screens:
            self._screens[tab] = self._build(tab)
        return self._screens[tab]


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Tableau texte à colonnes alignées."""
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    def fmt(cells):
        return "  ".join(str(c).ljust(w) for c, w in zip(cells, widths)).rstrip()

    out = [fmt(headers), "  ".join("-" * w for w in widths)]
    out += [fmt(row) for row in rows]
    return "\n".join(out)


def render_resource(controller: ResourceController) -> str:
    texts = controller.config.texts
    parts = [texts.title]
    if texts.subtitle:
        parts.append(texts.subtitle)
    if controller.error:
        parts.append(f"⚠️  {controller.error}")
    if controller.items:
        parts.append(render_table(controller.config.headers, controller.rows()))
    elif not controller.error:
        parts.append("Aucun élément.")
    return "\n".join(parts)
