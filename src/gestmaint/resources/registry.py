"""Index des configurations de ressources, par identifiant d'onglet."""
from __future__ import annotations

from typing import Dict

from gestmaint.resources import clients, contracts, equipment, interventions, invoices, technicians
from gestmaint.resources.base import ResourceConfig

RESOURCES: Dict[str, ResourceConfig] = {
    cfg.key: cfg
    for cfg in (
        clients.CONFIG,
        contracts.CONFIG,
        interventions.CONFIG,
        equipment.CONFIG,
        invoices.CONFIG,
        technicians.CONFIG,
    )
}

# noms anglais acceptés par la ligne de commande
ALIASES = {
    "contracts": "contrats",
    "invoices": "factures",
    "technicians": "techniciens",
}


def get_config(name: str) -> ResourceConfig:
    key = ALIASES.get(name, name)
    try:
        return RESOURCES[key]
    except KeyError:
        raise KeyError(f"unknown resource {name!r} (choose from {', '.join(RESOURCES)})") from None
