#!/usr/bin/env python3
"""
Énumérations métier (codes backend) et libellés d'affichage.

Chaque dictionnaire associe le code envoyé / reçu par l'API à son
libellé français. Un code inconnu est affiché tel quel.
"""
from __future__ import annotations

from typing import Dict, Optional

# ───────────────────────── Clients ───────────────────────────
CLIENT_TYPES: Dict[str, str] = {
    "INDIVIDUAL": "Particulier",
    "COMPANY":    "Entreprise",
    "GOVERNMENT": "Administration",
    "NON_PROFIT": "Association",
}

CLIENT_STATUS: Dict[str, str] = {
    "ACTIVE":    "Actif",
    "INACTIVE":  "Inactif",
    "SUSPENDED": "Suspendu",
}

# ───────────────────────── Contrats ──────────────────────────
CONTRACT_TYPES: Dict[str, str] = {
    "MAINTENANCE":  "Maintenance",
    "REPAIR":       "Réparation",
    "INSTALLATION": "Installation",
    "CONSULTING":   "Conseil",
    "EMERGENCY":    "Urgence",
    "SEASONAL":     "Saisonnier",
}

CONTRACT_STATUS: Dict[str, str] = {
    "DRAFT":     "Brouillon",
    "ACTIVE":    "Actif",
    "SUSPENDED": "Suspendu",
    "EXPIRED":   "Expiré",
    "CANCELLED": "Annulé",
}

# ─────────────────────── Interventions ───────────────────────
INTERVENTION_STATUS: Dict[str, str] = {
    "SCHEDULED":   "Planifiée",
    "IN_PROGRESS": "En cours",
    "COMPLETED":   "Terminée",
    "CANCELLED":   "Annulée",
    "POSTPONED":   "Reportée",
}

INTERVENTION_PRIORITY: Dict[str, str] = {
    "LOW":    "Basse",
    "MEDIUM": "Moyenne",
    "HIGH":   "Haute",
    "URGENT": "Urgente",
}

INTERVENTION_TYPES: Dict[str, str] = {
    "PREVENTIVE":   "Préventive",
    "CORRECTIVE":   "Corrective",
    "EMERGENCY":    "Urgence",
    "INSPECTION":   "Inspection",
    "INSTALLATION": "Installation",
}

# ───────────────────────── Factures ──────────────────────────
INVOICE_STATUS: Dict[str, str] = {
    "DRAFT":     "Brouillon",
    "SENT":      "Envoyée",
    "PAID":      "Payée",
    "OVERDUE":   "En retard",
    "CANCELLED": "Annulée",
}

PAYMENT_METHODS: Dict[str, str] = {
    "CASH":          "Espèces",
    "CREDIT_CARD":   "Carte bancaire",
    "BANK_TRANSFER": "Virement",
    "CHECK":         "Chèque",
}

# ──────────────────────── Équipements ────────────────────────
EQUIPMENT_STATUS: Dict[str, str] = {
    "OPERATIONAL":          "Opérationnel",
    "MAINTENANCE_REQUIRED": "Maintenance requise",
    "OUT_OF_SERVICE":       "Hors service",
    "DECOMMISSIONED":       "Déclassé",
}

EQUIPMENT_TYPES: Dict[str, str] = {
    "HVAC":       "CVC",
    "ELECTRICAL": "Électrique",
    "PLUMBING":   "Plomberie",
    "MECHANICAL": "Mécanique",
    "SAFETY":     "Sécurité",
    "IT":         "Informatique",
}

# ──────────────────────── Techniciens ────────────────────────
TECHNICIAN_SPECIALIZATIONS: Dict[str, str] = {
    "GENERAL":    "Maintenance générale",
    "ELECTRICAL": "Systèmes électriques",
    "PLUMBING":   "Plomberie",
    "HVAC":       "CVC (Chauffage, Ventilation, Climatisation)",
    "MECHANICAL": "Systèmes mécaniques",
    "IT_SUPPORT": "Support informatique",
}


# ───────────────────────── Libellés ──────────────────────────
def label_for(mapping: Dict[str, str], code: Optional[str]) -> str:
    """Libellé d'un code ; le code brut s'il est inconnu, "" si None."""
    if code is None:
        return ""
    return mapping.get(code, code)


def client_type_label(code: Optional[str]) -> str:
    return label_for(CLIENT_TYPES, code)


def client_status_label(code: Optional[str]) -> str:
    return label_for(CLIENT_STATUS, code)


def contract_type_label(code: Optional[str]) -> str:
    return label_for(CONTRACT_TYPES, code)


def contract_status_label(code: Optional[str]) -> str:
    return label_for(CONTRACT_STATUS, code)


def intervention_status_label(code: Optional[str]) -> str:
    return label_for(INTERVENTION_STATUS, code)


def intervention_priority_label(code: Optional[str]) -> str:
    return label_for(INTERVENTION_PRIORITY, code)


def intervention_type_label(code: Optional[str]) -> str:
    return label_for(INTERVENTION_TYPES, code)


def invoice_status_label(code: Optional[str]) -> str:
    return label_for(INVOICE_STATUS, code)


def payment_method_label(code: Optional[str]) -> str:
    return label_for(PAYMENT_METHODS, code)


def equipment_status_label(code: Optional[str]) -> str:
    return label_for(EQUIPMENT_STATUS, code)


def equipment_type_label(code: Optional[str]) -> str:
    return label_for(EQUIPMENT_TYPES, code)


def technician_specialization_label(code: Optional[str]) -> str:
    return label_for(TECHNICIAN_SPECIALIZATIONS, code)
