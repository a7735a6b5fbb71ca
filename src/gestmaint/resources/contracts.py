"""Écran Contrats : un contrat rattache un client."""
from __future__ import annotations

from gestmaint.api_client import CLIENTS, CONTRACTS
from gestmaint.resources.base import ResourceConfig, ResourceTexts
from gestmaint.utils import (
    UNKNOWN_CLIENT,
    client_display_name,
    format_date,
    format_datetime,
    full_name,
    parse_int,
    to_form_value,
)
from gestmaint.validation import required


def client_name(contract) -> str:
    return full_name(contract.get("client")) or UNKNOWN_CLIENT


def _form_from_record(contract):
    client = contract.get("client") or {}
    return {"clientId": to_form_value(client.get("clientId", contract.get("clientId")))}


def _build_payload(form):
    return {"clientId": parse_int(form["clientId"])}


def _describe_record(contract, aux):
    return {"name": f"Contrat #{contract.get('id')}", "client": client_name(contract)}


def _describe_form(form, aux):
    wanted = form.get("clientId")
    for client in aux.get("clients", []):
        if str(client.get("clientId")) == str(wanted):
            return {"client": full_name(client)}
    return {"client": "le client sélectionné"}


def _render_row(contract, aux):
    client = contract.get("client")
    updated = contract.get("updatedAt")
    if updated == contract.get("createdAt"):
        updated = None
    return [
        f"#{contract.get('id')}",
        client_display_name(client),
        (client or {}).get("email") or "-",
        (client or {}).get("phoneNumber") or "-",
        format_date(contract.get("createdAt")),
        format_datetime(updated) if updated else "-",
    ]


CONFIG = ResourceConfig(
    key="contrats",
    path=CONTRACTS,
    label="contrat",
    defaults={"clientId": ""},
    form_from_record=_form_from_record,
    build_payload=_build_payload,
    aux={"clients": CLIENTS},
    rules=[required("clientId", message="Veuillez sélectionner un client.")],
    headers=["Contrat", "Client", "Email", "Téléphone", "Créé le", "Modifié le"],
    render_row=_render_row,
    describe_record=_describe_record,
    describe_form=_describe_form,
    texts=ResourceTexts(
        title="Gestion des Contrats",
        load_banner="Erreur lors du chargement des contrats",
        load_error="Impossible de charger la liste des contrats.",
        saving_text="Sauvegarde du contrat",
        delete_title="Supprimer le contrat",
        delete_question="Êtes-vous sûr de vouloir supprimer {name} - {client} ?",
        deleting_text="Suppression du contrat",
        deleted_title="Contrat supprimé !",
        deleted_text="{name} a été supprimé avec succès.",
        created_title="Contrat créé !",
        created_text="Un nouveau contrat a été créé pour {client}.",
        updated_title="Contrat modifié !",
        updated_text="Le contrat a été mis à jour pour {client}.",
        duplicate_title="Contrat déjà existant",
        duplicate_text="Un contrat existe déjà pour ce client.",
        constraint_title="Impossible de supprimer ce contrat",
        constraint_text=(
            "Ce contrat a des ressources attachées (interventions, factures). "
            "Veuillez supprimer ces ressources avant de supprimer le contrat."
        ),
        delete_error_text=(
            "Une erreur est survenue lors de la suppression du contrat. Veuillez réessayer."
        ),
        missing_name="Contrat #{id}",
    ),
)
