"""Écran Techniciens (ressource REST `/techniciens`)."""
from __future__ import annotations

from gestmaint.api_client import TECHNICIANS
from gestmaint.constants import technician_specialization_label
from gestmaint.resources.base import ResourceConfig, ResourceTexts
from gestmaint.utils import format_date, full_name, to_form_value
from gestmaint.validation import required, valid_email


def is_active(technician) -> bool:
    # champ absent : le technicien est considéré actif
    return technician.get("isActive", True) is not False


def _form_from_record(technician):
    return {
        "firstName": to_form_value(technician.get("firstName")),
        "lastName": to_form_value(technician.get("lastName")),
        "email": to_form_value(technician.get("email")),
        "phoneNumber": to_form_value(technician.get("phoneNumber")),
        "employeeId": to_form_value(technician.get("employeeId")),
        "specialization": technician.get("specialization") or "GENERAL",
    }


def _describe_record(technician, aux):
    return {"name": full_name(technician) or f"Technicien #{technician.get('id')}"}


def _describe_form(form, aux):
    return {"name": f"{form['firstName']} {form['lastName']}".strip()}


def _render_row(technician, aux):
    return [
        full_name(technician) or "-",
        technician.get("employeeId") or "-",
        technician.get("email") or "-",
        technician.get("phoneNumber") or "-",
        technician_specialization_label(technician.get("specialization")) or "-",
        "Actif" if is_active(technician) else "Inactif",
        format_date(technician.get("createdAt")),
    ]


CONFIG = ResourceConfig(
    key="techniciens",
    path=TECHNICIANS,
    label="technicien",
    defaults={
        "firstName": "",
        "lastName": "",
        "email": "",
        "phoneNumber": "",
        "employeeId": "",
        "specialization": "GENERAL",
    },
    form_from_record=_form_from_record,
    rules=[
        required(
            "firstName", "lastName", "email", "employeeId",
            message="Tous les champs obligatoires doivent être remplis.",
        ),
        valid_email("email"),
    ],
    headers=["Technicien", "ID employé", "Email", "Téléphone", "Spécialisation", "Statut", "Créé le"],
    render_row=_render_row,
    describe_record=_describe_record,
    describe_form=_describe_form,
    texts=ResourceTexts(
        title="Gestion des Techniciens",
        load_banner="Erreur lors du chargement des techniciens",
        load_error="Impossible de charger la liste des techniciens.",
        saving_text="Sauvegarde des informations technicien",
        delete_title="Supprimer le technicien",
        delete_question="Êtes-vous sûr de vouloir supprimer {name} ?",
        deleting_text="Suppression du technicien",
        deleted_title="Technicien supprimé !",
        deleted_text="{name} a été supprimé avec succès.",
        created_title="Technicien créé !",
        created_text="{name} a été ajouté avec succès.",
        updated_title="Technicien modifié !",
        updated_text="Les informations de {name} ont été mises à jour.",
        duplicate_title="Technicien déjà existant",
        duplicate_text="Un technicien avec cette adresse email ou cet ID employé existe déjà.",
        constraint_title="Impossible de supprimer ce technicien",
        constraint_text=(
            "Ce technicien a des ressources attachées (contrats, interventions). "
            "Veuillez supprimer ces ressources avant de supprimer le technicien."
        ),
        delete_error_text=(
            "Une erreur est survenue lors de la suppression du technicien. Veuillez réessayer."
        ),
        missing_name="Technicien #{id}",
    ),
)
