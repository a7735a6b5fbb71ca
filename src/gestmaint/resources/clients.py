"""Écran Clients."""
from __future__ import annotations

from gestmaint.api_client import CLIENTS
from gestmaint.constants import client_type_label
from gestmaint.resources.base import ResourceConfig, ResourceTexts
from gestmaint.utils import format_date, full_name
from gestmaint.validation import required, valid_email


def _describe_record(client, aux):
    return {"name": full_name(client) or f"Client #{client.get('clientId')}"}


def _describe_form(form, aux):
    return {"name": f"{form['firstName']} {form['lastName']}".strip()}


def _render_row(client, aux):
    return [
        full_name(client) or "-",
        client_type_label(client.get("clientType")) or "-",
        client.get("email") or "-",
        client.get("phoneNumber") or "-",
        client.get("address") or "-",
        format_date(client.get("createdAt")),
    ]


CONFIG = ResourceConfig(
    key="clients",
    path=CLIENTS,
    label="client",
    id_key="clientId",
    defaults={
        "firstName": "",
        "lastName": "",
        "email": "",
        "phoneNumber": "",
        "address": "",
    },
    rules=[
        required("firstName", "lastName", message="Le prénom et le nom sont requis."),
        required("email", message="L'email est requis."),
        valid_email("email"),
    ],
    headers=["Client", "Type", "Email", "Téléphone", "Adresse", "Date de création"],
    render_row=_render_row,
    describe_record=_describe_record,
    describe_form=_describe_form,
    texts=ResourceTexts(
        title="Gestion des Clients",
        subtitle="Gérez vos clients individuels, entreprises et entités gouvernementales",
        load_banner="Erreur lors du chargement des clients",
        load_error="Impossible de charger la liste des clients.",
        saving_text="Sauvegarde des informations client",
        delete_title="Supprimer le client",
        delete_question="Êtes-vous sûr de vouloir supprimer {name} ?",
        deleting_text="Suppression du client",
        deleted_title="Client supprimé !",
        deleted_text="{name} a été supprimé avec succès.",
        created_title="Client créé !",
        created_text="{name} a été ajouté avec succès.",
        updated_title="Client modifié !",
        updated_text="Les informations de {name} ont été mises à jour.",
        duplicate_title="Client déjà existant",
        duplicate_text="Un client avec cette adresse email existe déjà.",
        constraint_title="Impossible de supprimer ce client",
        constraint_text=(
            "Ce client a des ressources attachées (contrats, équipements, interventions). "
            "Veuillez supprimer ces ressources avant de supprimer le client."
        ),
        delete_error_text=(
            "Une erreur est survenue lors de la suppression du client. Veuillez réessayer."
        ),
        missing_name="Client #{id}",
    ),
)
