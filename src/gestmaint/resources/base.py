#!/usr/bin/env python3
"""
Description déclarative d'une ressource CRUD.

Un `ResourceConfig` regroupe tout ce qui distingue un écran d'un autre :
chemin REST, valeurs par défaut du formulaire, règles de validation,
mise en forme du payload, libellés des notifications et rendu du
tableau. Le moteur (`controller.ResourceController`) est commun.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from gestmaint.utils import to_form_value
from gestmaint.validation import Rule

Record = Dict[str, Any]
Form = Dict[str, str]
AuxData = Dict[str, List[Record]]

GENERIC_SAVE_ERROR = "Une erreur est survenue lors de la sauvegarde. Veuillez réessayer."
INVALID_DATA_ERROR = "Les données saisies ne sont pas valides. Veuillez vérifier vos informations."


# ────────────────────────── Libellés ──────────────────────────
@dataclass(frozen=True)
class ResourceTexts:
    """
    Textes affichés par le moteur. Les gabarits sont formatés avec le
    contexte renvoyé par `describe_record` / `describe_form`
    (clés usuelles : name, client, id).
    """
    title: str
    load_banner: str
    load_error: str
    saving_text: str
    delete_title: str
    delete_question: str
    deleting_text: str
    deleted_title: str
    deleted_text: str
    created_title: str
    created_text: str
    updated_title: str
    updated_text: str
    duplicate_title: str
    duplicate_text: str
    constraint_title: str
    constraint_text: str
    delete_error_text: str
    missing_name: str
    subtitle: str = ""
    creating_title: str = "Création en cours..."
    updating_title: str = "Modification en cours..."
    create_error_title: str = "Erreur de création"
    update_error_title: str = "Erreur de modification"
    delete_error_title: str = "Erreur de suppression"
    deleting_title: str = "Suppression en cours..."
    confirm_text: str = "Oui, supprimer"
    cancel_text: str = "Annuler"
    conflict_title: Optional[str] = None
    conflict_text: Optional[str] = None


# ───────────────────────── Configuration ──────────────────────
def _identity_payload(form: Form) -> Record:
    return dict(form)


@dataclass
class ResourceConfig:
    key: str                                   # identifiant d'onglet ("clients", ...)
    path: str                                  # chemin REST ("/clients")
    label: str                                 # singulier, pour les logs
    defaults: Form
    texts: ResourceTexts
    headers: List[str]
    render_row: Callable[[Record, AuxData], List[str]]
    describe_record: Callable[[Record, AuxData], Dict[str, str]]
    describe_form: Callable[[Form, AuxData], Dict[str, str]]
    id_key: str = "id"
    rules: List[Rule] = field(default_factory=list)
    build_payload: Callable[[Form], Record] = _identity_payload
    form_from_record: Optional[Callable[[Record], Form]] = None
    aux: Dict[str, str] = field(default_factory=dict)    # nom → chemin REST
    on_change: Optional[Callable[[Form, str], None]] = None

    def new_form(self) -> Form:
        return dict(self.defaults)

    def record_to_form(self, record: Record) -> Form:
        if self.form_from_record is not None:
            return self.form_from_record(record)
        return {name: to_form_value(record.get(name)) for name in self.defaults}

    def record_id(self, record: Record) -> Any:
        return record.get(self.id_key)
