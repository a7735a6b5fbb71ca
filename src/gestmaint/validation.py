"""Règles de validation des formulaires (avant tout appel réseau)."""
from __future__ import annotations

import re
from datetime import datetime
from typing import Callable, Dict, Iterable, Optional

from gestmaint.errors import ValidationError
from gestmaint.utils import parse_float

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")

# une règle reçoit le formulaire et le mode (True = création)
Rule = Callable[[Dict[str, str], bool], None]


def required(*fields: str, message: str, title: str = "Erreur de validation") -> Rule:
    def rule(form: Dict[str, str], creating: bool) -> None:
        for name in fields:
            if not str(form.get(name) or "").strip():
                raise ValidationError(message, title)
    return rule


def valid_email(field: str, message: str = "L'email n'est pas valide.") -> Rule:
    def rule(form: Dict[str, str], creating: bool) -> None:
        if not EMAIL_RE.search(str(form.get(field) or "")):
            raise ValidationError(message)
    return rule


def positive_number(field: str, message: str) -> Rule:
    def rule(form: Dict[str, str], creating: bool) -> None:
        try:
            value = parse_float(form.get(field))
        except ValueError:
            value = None
        if value is None or value <= 0:
            raise ValidationError(message)
    return rule


def future_datetime(
    field: str,
    message: str = "La date et l'heure doivent être dans le futur.",
    *,
    title: str = "Date invalide",
    clock: Callable[[], datetime] = datetime.now,
) -> Rule:
    """Date/heure strictement future, vérifiée uniquement à la création."""
    def rule(form: Dict[str, str], creating: bool) -> None:
        raw = str(form.get(field) or "").strip()
        try:
            when = datetime.fromisoformat(raw)
        except ValueError as exc:
            raise ValidationError("Format de date invalide.", title) from exc
        if when.tzinfo is not None:
            when = when.astimezone().replace(tzinfo=None)
        if creating and when <= clock():
            raise ValidationError(message, title)
    return rule


def validate(rules: Iterable[Rule], form: Dict[str, str], *, creating: bool) -> Optional[ValidationError]:
    """Applique les règles dans l'ordre ; renvoie la première erreur ou None."""
    for rule in rules:
        try:
            rule(form, creating)
        except ValidationError as err:
            return err
    return None
