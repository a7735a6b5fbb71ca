"""Écran Équipements : chaque équipement est installé chez un client."""
from __future__ import annotations

from gestmaint.api_client import CLIENTS, EQUIPMENT
from gestmaint.constants import equipment_status_label, equipment_type_label
from gestmaint.resources.base import ResourceConfig, ResourceTexts
from gestmaint.utils import (
    UNKNOWN_CLIENT,
    blank_to_none,
    date_part,
    format_date,
    full_name,
    parse_int,
    to_form_value,
)
from gestmaint.validation import required

TEXT_FIELDS = (
    "equipmentCode", "name", "model", "manufacturer", "serialNumber",
    "location", "description", "specifications",
)
OPTIONAL_FIELDS = ("installationDate", "warrantyExpiryDate", "type")


def client_name(equipment, clients) -> str:
    """Client imbriqué, sinon recherche par clientId dans la liste chargée."""
    if equipment.get("client"):
        return full_name(equipment["client"]) or UNKNOWN_CLIENT
    if equipment.get("clientId") is not None:
        for client in clients:
            if client.get("clientId") == equipment["clientId"]:
                return full_name(client) or UNKNOWN_CLIENT
    return UNKNOWN_CLIENT


def _form_from_record(equipment):
    form = {name: to_form_value(equipment.get(name)) for name in TEXT_FIELDS}
    client_id = equipment.get("clientId")
    if client_id is None:
        client_id = (equipment.get("client") or {}).get("clientId")
    form.update(
        installationDate=date_part(equipment.get("installationDate")),
        warrantyExpiryDate=date_part(equipment.get("warrantyExpiryDate")),
        status=equipment.get("status") or "OPERATIONAL",
        type=to_form_value(equipment.get("type")),
        clientId=to_form_value(client_id),
    )
    return form


def _build_payload(form):
    payload = dict(form)
    payload["clientId"] = parse_int(form.get("clientId"))
    for name in OPTIONAL_FIELDS:
        payload[name] = blank_to_none(form.get(name))
    return payload


def _describe_record(equipment, aux):
    return {
        "name": equipment.get("name") or f"Équipement #{equipment.get('id')}",
        "client": client_name(equipment, aux.get("clients", [])),
    }


def _describe_form(form, aux):
    for client in aux.get("clients", []):
        if str(client.get("clientId")) == str(form.get("clientId")):
            return {"name": form["name"], "client": full_name(client)}
    return {"name": form["name"], "client": "le client sélectionné"}


def _render_row(equipment, aux):
    return [
        equipment.get("equipmentCode") or "-",
        equipment.get("name") or "-",
        " ".join(filter(None, [equipment.get("manufacturer"), equipment.get("model")])) or "-",
        equipment_type_label(equipment.get("type")) or "-",
        equipment_status_label(equipment.get("status")) or "-",
        equipment.get("location") or "-",
        client_name(equipment, aux.get("clients", [])),
        format_date(equipment.get("warrantyExpiryDate")),
    ]


CONFIG = ResourceConfig(
    key="equipment",
    path=EQUIPMENT,
    label="équipement",
    defaults={
        "equipmentCode": "",
        "name": "",
        "model": "",
        "manufacturer": "",
        "serialNumber": "",
        "installationDate": "",
        "warrantyExpiryDate": "",
        "status": "OPERATIONAL",
        "type": "",
        "location": "",
        "description": "",
        "specifications": "",
        "clientId": "",
    },
    form_from_record=_form_from_record,
    build_payload=_build_payload,
    aux={"clients": CLIENTS},
    rules=[required("name", "clientId", message="Le nom et le client sont requis.")],
    headers=["Code", "Nom", "Modèle", "Type", "Statut", "Emplacement", "Client", "Garantie"],
    render_row=_render_row,
    describe_record=_describe_record,
    describe_form=_describe_form,
    texts=ResourceTexts(
        title="Gestion des Équipements",
        load_banner="Erreur lors du chargement des équipements",
        load_error="Impossible de charger la liste des équipements.",
        saving_text="Sauvegarde de l'équipement",
        delete_title="Supprimer l'équipement",
        delete_question='Êtes-vous sûr de vouloir supprimer "{name}" ?',
        deleting_text="Suppression de l'équipement",
        deleted_title="Équipement supprimé !",
        deleted_text="{name} a été supprimé avec succès.",
        created_title="Équipement créé !",
        created_text='L\'équipement "{name}" a été ajouté pour {client}.',
        updated_title="Équipement modifié !",
        updated_text='L\'équipement "{name}" a été mis à jour.',
        duplicate_title="Équipement déjà existant",
        duplicate_text="Un équipement avec ce code ou numéro de série existe déjà.",
        constraint_title="Impossible de supprimer cet équipement",
        constraint_text=(
            "Cet équipement a des ressources attachées (interventions). "
            "Veuillez supprimer ces ressources avant de supprimer l'équipement."
        ),
        delete_error_text=(
            "Une erreur est survenue lors de la suppression de l'équipement. Veuillez réessayer."
        ),
        missing_name="Équipement #{id}",
    ),
)
