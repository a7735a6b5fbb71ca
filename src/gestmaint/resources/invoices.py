"""Écran Factures (ressource REST `/factures`)."""
from __future__ import annotations

from gestmaint.api_client import INTERVENTIONS, INVOICES
from gestmaint.constants import invoice_status_label, payment_method_label
from gestmaint.resources.base import ResourceConfig, ResourceTexts
from gestmaint.utils import (
    UNKNOWN_CLIENT,
    blank_to_none,
    date_part,
    float_or_zero,
    format_currency,
    format_date,
    full_name,
    parse_float,
    parse_int,
    to_form_value,
)
from gestmaint.validation import positive_number, required

COST_FIELDS = ("laborCost", "materialCost")
OPTIONAL_FIELDS = ("dueDate", "paidDate", "paymentMethod")


def recompute_total(form, changed: str) -> None:
    """Main d'œuvre + matériel → total (2 décimales) ; le total reste modifiable."""
    if changed not in COST_FIELDS:
        return
    total = float_or_zero(form.get("laborCost")) + float_or_zero(form.get("materialCost"))
    form["totalAmount"] = f"{total:.2f}"


def _form_from_record(facture):
    total = facture.get("totalAmount")
    if total is None:
        total = facture.get("price")
    return {
        "invoiceNumber": to_form_value(facture.get("invoiceNumber")),
        "description": to_form_value(facture.get("description")),
        "laborCost": to_form_value(facture.get("laborCost")),
        "materialCost": to_form_value(facture.get("materialCost")),
        "totalAmount": to_form_value(total),
        "status": facture.get("status") or "DRAFT",
        "dueDate": date_part(facture.get("dueDate")),
        "paidDate": date_part(facture.get("paidDate")),
        "paymentMethod": to_form_value(facture.get("paymentMethod")),
        "notes": to_form_value(facture.get("notes")),
        "interventionId": to_form_value(facture.get("interventionId")),
    }


def _build_payload(form):
    payload = dict(form)
    for name in COST_FIELDS + ("totalAmount",):
        payload[name] = parse_float(form.get(name))
    payload["interventionId"] = parse_int(form.get("interventionId"))
    for name in OPTIONAL_FIELDS:
        payload[name] = blank_to_none(form.get(name))
    # ancienne colonne du backend, tenue égale au total
    payload["price"] = payload["totalAmount"]
    return payload


def linked_intervention(facture, aux):
    """Intervention rattachée : via son objet `facture`, sinon via interventionId."""
    interventions = aux.get("interventions", [])
    for intervention in interventions:
        nested = intervention.get("facture")
        if nested and nested.get("id") == facture.get("id"):
            return intervention
    if facture.get("interventionId") is not None:
        for intervention in interventions:
            if intervention.get("id") == facture.get("interventionId"):
                return intervention
    return None


def _describe_record(facture, aux):
    return {"name": f"Facture {facture.get('invoiceNumber')}"}


def _describe_form(form, aux):
    return {"name": f"Facture {form.get('invoiceNumber')}"}


def _render_row(facture, aux):
    intervention = linked_intervention(facture, aux)
    if intervention is not None:
        client = full_name((intervention.get("contract") or {}).get("client")) or UNKNOWN_CLIENT
        linked = f"{intervention.get('title')} ({client})"
    else:
        linked = "-"
    total = facture.get("totalAmount")
    return [
        facture.get("invoiceNumber") or "-",
        facture.get("description") or "-",
        format_currency(total if total is not None else facture.get("price")),
        invoice_status_label(facture.get("status")) or "-",
        format_date(facture.get("dueDate")),
        payment_method_label(facture.get("paymentMethod")) or "-",
        linked,
    ]


CONFIG = ResourceConfig(
    key="factures",
    path=INVOICES,
    label="facture",
    defaults={
        "invoiceNumber": "",
        "description": "",
        "laborCost": "",
        "materialCost": "",
        "totalAmount": "",
        "status": "DRAFT",
        "dueDate": "",
        "paidDate": "",
        "paymentMethod": "",
        "notes": "",
        "interventionId": "",
    },
    form_from_record=_form_from_record,
    build_payload=_build_payload,
    on_change=recompute_total,
    aux={"interventions": INTERVENTIONS},
    rules=[
        required("invoiceNumber", message="Le numéro de facture est requis."),
        required("description", message="La description est requise."),
        positive_number("totalAmount", "Le montant total doit être supérieur à 0."),
    ],
    headers=["N°", "Description", "Montant", "Statut", "Échéance", "Paiement", "Intervention"],
    render_row=_render_row,
    describe_record=_describe_record,
    describe_form=_describe_form,
    texts=ResourceTexts(
        title="Gestion des Factures",
        load_banner="Erreur lors du chargement des factures",
        load_error="Impossible de charger la liste des factures.",
        saving_text="Sauvegarde de la facture",
        delete_title="Supprimer la facture",
        delete_question="Êtes-vous sûr de vouloir supprimer {name} ?",
        deleting_text="Suppression de la facture",
        deleted_title="Facture supprimée !",
        deleted_text="{name} a été supprimée avec succès.",
        created_title="Facture créée !",
        created_text="{name} a été créée avec succès.",
        updated_title="Facture modifiée !",
        updated_text="{name} a été modifiée avec succès.",
        duplicate_title="Erreur de validation",
        duplicate_text="Ce numéro de facture existe déjà. Veuillez utiliser un numéro différent.",
        constraint_title="Impossible de supprimer cette facture",
        constraint_text=(
            "Cette facture a des ressources attachées. "
            "Veuillez supprimer ces ressources avant de supprimer la facture."
        ),
        delete_error_text=(
            "Une erreur est survenue lors de la suppression de la facture. Veuillez réessayer."
        ),
        missing_name="Facture #{id}",
    ),
)
