#!/usr/bin/env python3
"""
Tableau de bord : compteurs + aperçu des prochaines interventions.

Les six lectures partent en parallèle. Un seul échec suffit à afficher
le bandeau d'erreur ; les compteurs restent alors à zéro (pas
d'affichage partiel).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from gestmaint.api_client import ApiClient
from gestmaint.batch import fetch_all
from gestmaint.errors import ApiError
from gestmaint.utils import format_currency, format_datetime, full_name

logger = logging.getLogger(__name__)

UPCOMING_PREVIEW = 5
LOAD_ERROR = "Erreur lors du chargement des données du tableau de bord"


@dataclass
class DashboardStats:
    clients_count: int = 0
    contracts_count: int = 0
    invoices_count: int = 0
    interventions_count: int = 0
    total_revenue: float = 0.0
    upcoming_interventions: List[Dict[str, Any]] = field(default_factory=list)


class Dashboard:
    def __init__(self, api: ApiClient) -> None:
        self.api = api
        self.stats = DashboardStats()
        self.loading = False
        self.error: Optional[str] = None

    def load(self) -> bool:
        self.loading = True
        try:
            data = fetch_all(
                {
                    "clients": self.api.list_clients,
                    "contracts": self.api.list_contracts,
                    "invoices": self.api.list_invoices,
                    "interventions": self.api.list_interventions,
                    "revenue": self.api.get_total_revenue,
                    "upcoming": self.api.list_upcoming_interventions,
                }
            )
        except ApiError as exc:
            logger.error("Error loading dashboard data: %s", exc)
            self.stats = DashboardStats()
            self.error = LOAD_ERROR
            return False
        finally:
            self.loading = False

        self.stats = DashboardStats(
            clients_count=len(data["clients"]),
            contracts_count=len(data["contracts"]),
            invoices_count=len(data["invoices"]),
            interventions_count=len(data["interventions"]),
            total_revenue=data["revenue"],
            upcoming_interventions=data["upcoming"][:UPCOMING_PREVIEW],
        )
        self.error = None
        return True

    def summary_lines(self) -> List[str]:
        s = self.stats
        lines = []
        if self.error:
            lines.append(f"⚠️  {self.error}")
        lines += [
            f"Clients            : {s.clients_count}",
            f"Contrats           : {s.contracts_count}",
            f"Factures           : {s.invoices_count}",
            f"Interventions      : {s.interventions_count}",
            f"Chiffre d'affaires : {format_currency(s.total_revenue)}",
            "",
            "Prochaines interventions",
        ]
        if not s.upcoming_interventions:
            lines.append("  Aucune intervention planifiée")
        for intervention in s.upcoming_interventions:
            client = full_name((intervention.get("contract") or {}).get("client"))
            line = f"  {format_datetime(intervention.get('scheduledTime'))}  {intervention.get('title') or '-'}"
            if client:
                line += f"  ({client})"
            lines.append(line)
        return lines
