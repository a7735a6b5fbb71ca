#!/usr/bin/env python3
"""
Écran Interventions.

Une intervention appartient à un contrat et peut avoir produit une
facture (objet `facture` imbriqué par le backend). Côté utilisateur la
suppression est présentée comme une *annulation* ; elle passe pourtant
par le DELETE standard.
"""
from __future__ import annotations

from datetime import datetime, timedelta

from gestmaint.api_client import CONTRACTS, INTERVENTIONS
from gestmaint.constants import invoice_status_label
from gestmaint.resources.base import ResourceConfig, ResourceTexts
from gestmaint.utils import (
    client_display_name,
    format_currency,
    format_datetime,
    minute_part,
    parse_int,
    to_form_value,
)
from gestmaint.validation import future_datetime, required


def contract_client_name(intervention) -> str:
    return client_display_name((intervention.get("contract") or {}).get("client"))


def is_upcoming_24h(scheduled_time, now=None) -> bool:
    """Planifiée dans les prochaines 24 heures (strictement future)."""
    if not scheduled_time:
        return False
    try:
        when = datetime.fromisoformat(str(scheduled_time)[:19])
    except ValueError:
        return False
    now = now or datetime.now()
    return now < when <= now + timedelta(hours=24)


def _form_from_record(intervention):
    contract = intervention.get("contract") or {}
    return {
        "title": to_form_value(intervention.get("title")),
        "description": to_form_value(intervention.get("description")),
        "scheduledTime": minute_part(intervention.get("scheduledTime")),
        "contractId": to_form_value(contract.get("id", intervention.get("contractId"))),
    }


def _build_payload(form):
    payload = dict(form)
    payload["contractId"] = parse_int(form["contractId"])
    return payload


def _describe_record(intervention, aux):
    return {
        "name": intervention.get("title") or f"Intervention #{intervention.get('id')}",
        "client": contract_client_name(intervention),
    }


def _describe_form(form, aux):
    for contract in aux.get("contracts", []):
        if str(contract.get("id")) == str(form.get("contractId")):
            return {"name": form["title"], "client": client_display_name(contract.get("client"))}
    return {"name": form["title"], "client": "Contrat introuvable"}


def _render_row(intervention, aux):
    contract = intervention.get("contract") or {}
    facture = intervention.get("facture")
    if facture:
        invoice = "{} {} ({})".format(
            facture.get("invoiceNumber") or "-",
            format_currency(facture.get("totalAmount") or facture.get("price")),
            invoice_status_label(facture.get("status")),
        )
    else:
        invoice = "-"
    when = format_datetime(intervention.get("scheduledTime"))
    if is_upcoming_24h(intervention.get("scheduledTime")):
        when += " ⏰"
    return [
        intervention.get("title") or "-",
        intervention.get("description") or "-",
        when,
        f"#{contract.get('id', 'N/A')}",
        contract_client_name(intervention),
        invoice,
    ]


CONFIG = ResourceConfig(
    key="interventions",
    path=INTERVENTIONS,
    label="intervention",
    defaults={"title": "", "description": "", "scheduledTime": "", "contractId": ""},
    form_from_record=_form_from_record,
    build_payload=_build_payload,
    aux={"contracts": CONTRACTS},
    rules=[
        required(
            "title", "description", "contractId",
            message="Veuillez remplir tous les champs obligatoires.",
        ),
        required(
            "scheduledTime",
            message="Veuillez définir une date et heure pour l'intervention.",
            title="Date requise",
        ),
        future_datetime("scheduledTime"),
    ],
    headers=["Titre", "Description", "Planifiée le", "Contrat", "Client", "Facture"],
    render_row=_render_row,
    describe_record=_describe_record,
    describe_form=_describe_form,
    texts=ResourceTexts(
        title="Gestion des Interventions",
        load_banner="Erreur lors du chargement des interventions",
        load_error="Impossible de charger la liste des interventions.",
        saving_text="Sauvegarde de l'intervention",
        creating_title="Planification en cours...",
        create_error_title="Erreur de planification",
        delete_title="Annuler l'intervention",
        delete_question='Êtes-vous sûr de vouloir annuler "{name}" ?',
        confirm_text="Oui, annuler",
        cancel_text="Non, garder",
        deleting_title="Annulation en cours...",
        deleting_text="Suppression de l'intervention",
        deleted_title="Intervention annulée !",
        deleted_text="{name} a été annulée avec succès.",
        created_title="Intervention planifiée !",
        created_text='L\'intervention "{name}" a été planifiée pour {client}.',
        updated_title="Intervention modifiée !",
        updated_text='L\'intervention "{name}" a été mise à jour.',
        duplicate_title="Intervention déjà existante",
        duplicate_text="Une intervention identique existe déjà.",
        conflict_title="Conflit de planification",
        conflict_text="Une autre intervention est déjà planifiée à cette date et heure.",
        constraint_title="Impossible d'annuler cette intervention",
        constraint_text=(
            "Cette intervention a des ressources attachées. "
            "Veuillez supprimer ces ressources avant d'annuler l'intervention."
        ),
        delete_error_title="Erreur d'annulation",
        delete_error_text=(
            "Une erreur est survenue lors de l'annulation de l'intervention. Veuillez réessayer."
        ),
        missing_name="Intervention #{id}",
    ),
)
