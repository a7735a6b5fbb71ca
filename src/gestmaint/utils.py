"""Fonctions utilitaires partagées par les modules gestmaint."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

UNKNOWN_CLIENT = "Client inconnu"


# ─────────────────────── Formulaire ↔ payload ───────────────────────
def to_form_value(value: Any) -> str:
    """Valeur d'enregistrement → chaîne de formulaire ("" si absente)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def date_part(value: Any) -> str:
    """"2025-03-01T00:00:00" → "2025-03-01"."""
    return to_form_value(value).split("T")[0]


def minute_part(value: Any) -> str:
    """"2025-03-01T09:30:00" → "2025-03-01T09:30"."""
    return to_form_value(value)[:16]


def parse_int(value: Any) -> Optional[int]:
    """Identifiant saisi (chaîne) → int, None si vide."""
    s = to_form_value(value).strip()
    return int(s) if s else None


def parse_float(value: Any) -> Optional[float]:
    s = to_form_value(value).strip().replace(",", ".")
    return float(s) if s else None


def float_or_zero(value: Any) -> float:
    try:
        return parse_float(value) or 0.0
    except ValueError:
        return 0.0


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# ─────────────────────────── Affichage ──────────────────────────────
def full_name(person: Optional[Dict[str, Any]]) -> Optional[str]:
    if not person:
        return None
    return f"{person.get('firstName') or ''} {person.get('lastName') or ''}".strip()


def client_display_name(client: Optional[Dict[str, Any]]) -> str:
    """Nom affiché d'un client ; raison sociale pour les entreprises."""
    if not client:
        return UNKNOWN_CLIENT
    if client.get("clientType") == "COMPANY" and client.get("companyName"):
        return client["companyName"]
    return full_name(client) or UNKNOWN_CLIENT


def _parse_iso(value: Any) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def format_date(value: Any) -> str:
    dt = _parse_iso(value)
    return dt.strftime("%d/%m/%Y") if dt else "-"


def format_datetime(value: Any) -> str:
    dt = _parse_iso(value)
    return dt.strftime("%d/%m/%Y %H:%M") if dt else "-"


def format_currency(amount: Any) -> str:
    """1234.5 → "1 234,50 MAD" ; "-" si absent."""
    if amount is None or amount == "":
        return "-"
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return str(amount)
    return f"{value:,.2f}".replace(",", " ").replace(".", ",") + " MAD"
