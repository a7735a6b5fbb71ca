"""Small wrapper around the maintenance-management REST API."""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Union

import requests
from requests import Response
import logging

from gestmaint.config import Config
from gestmaint.errors import DecodeError, HttpStatusError, NetworkError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30

# chemins REST des six ressources
CLIENTS       = "/clients"
CONTRACTS     = "/contracts"
INVOICES      = "/factures"
INTERVENTIONS = "/interventions"
EQUIPMENT     = "/equipment"
TECHNICIANS   = "/techniciens"

JsonBody = Union[Dict[str, Any], List[Any], str, int, float, None]


class ApiClient:  # pylint: disable=too-many-public-methods
    """Client REST minimaliste pour le backend de gestion de maintenance."""

    # ------------------------------------------------------------------ #
    # Construction                                                       #
    # ------------------------------------------------------------------ #
    def __init__(
        self,
        base_url: str,
        *,
        chat_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = "gestmaint/0.1",
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.chat_url = chat_url or f"{self.base_url}/ai/chat"
        self.timeout  = timeout

        # session HTTP
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Content-Type": "application/json",
                "Accept":       "application/json",
                "User-Agent":   user_agent,
            }
        )

    @classmethod
    def from_config(cls) -> "ApiClient":
        cfg = Config.get_api_config()
        return cls(
            cfg["base_url"],
            chat_url=cfg.get("chat_url"),
            timeout=cfg.get("timeout", DEFAULT_TIMEOUT),
            user_agent=cfg.get("user_agent", "gestmaint/0.1"),
        )

    # ------------------------------------------------------------------ #
    # Helpers bas niveau                                                 #
    # ------------------------------------------------------------------ #
    def _build_url(self, endpoint: str) -> str:
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def request(self, method: str, endpoint: str, **kwargs: Any) -> Union[JsonBody, Response]:
        """
        Exécute une requête et décode la réponse.

        - statut >= 400      → HttpStatusError (code + corps)
        - pas de réponse     → NetworkError
        - JSON annoncé       → corps décodé (DecodeError s'il est illisible)
        - autre content-type → l'objet Response brut
        """
        url  = self._build_url(endpoint)
        body = kwargs.get("json")

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "[API ➜] %s %s payload=%s",
                method, endpoint,
                None if body is None else json.dumps(body, ensure_ascii=False, default=str)[:1500],
            )

        try:
            resp: Response = self.session.request(
                method,
                url,
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as exc:  # network error
            logger.warning("Network error on %s %s: %s", method, url, exc)
            raise NetworkError(str(exc)) from exc

        logger.debug("[API ⇠] %s %s status=%s", method, endpoint, resp.status_code)

        if resp.status_code >= 400:
            logger.error(
                "API %s %s → %s\nPayload: %s\nResponse: %s",
                method, url, resp.status_code,
                body,
                resp.text[:500],
            )
            raise HttpStatusError(method, url, resp.status_code, resp.text)

        content_type = resp.headers.get("Content-Type", "")
        if "application/json" not in content_type:
            return resp

        try:
            data = resp.json()
        except ValueError as exc:
            raise DecodeError(f"{method} {url}: invalid JSON body") from exc

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "[API ⇠] %s %s resp=%s",
                method, endpoint,
                json.dumps(data, ensure_ascii=False, default=str)[:1500],
            )
        return data

    # ------------------------------------------------------------------ #
    # CRUD générique                                                     #
    # ------------------------------------------------------------------ #
    def list_resource(self, path: str) -> List[Dict[str, Any]]:
        data = self.request("GET", path)
        if isinstance(data, list):
            return data
        # une liste vide peut revenir sans corps JSON
        if isinstance(data, Response) and not data.content.strip():
            return []
        kind = data.headers.get("Content-Type", "?") if isinstance(data, Response) else type(data).__name__
        raise DecodeError(f"GET {path}: expected a JSON list, got {kind}")

    def get_resource(self, path: str, item_id: int) -> Dict[str, Any]:
        return self.request("GET", f"{path}/{item_id}")

    def create_resource(self, path: str, data: Dict[str, Any]) -> Any:
        return self.request("POST", path, json=data)

    def update_resource(self, path: str, item_id: int, data: Dict[str, Any]) -> Any:
        return self.request("PUT", f"{path}/{item_id}", json=data)

    def delete_resource(self, path: str, item_id: int) -> Any:
        return self.request("DELETE", f"{path}/{item_id}")

    # ------------------------------------------------------------------ #
    # Clients                                                            #
    # ------------------------------------------------------------------ #
    def list_clients(self) -> List[Dict[str, Any]]:
        return self.list_resource(CLIENTS)

    def get_client(self, client_id: int) -> Dict[str, Any]:
        return self.get_resource(CLIENTS, client_id)

    def create_client(self, data: Dict[str, Any]) -> Any:
        return self.create_resource(CLIENTS, data)

    def update_client(self, client_id: int, data: Dict[str, Any]) -> Any:
        return self.update_resource(CLIENTS, client_id, data)

    def delete_client(self, client_id: int) -> Any:
        return self.delete_resource(CLIENTS, client_id)

    # ------------------------------------------------------------------ #
    # Contracts                                                          #
    # ------------------------------------------------------------------ #
    def list_contracts(self) -> List[Dict[str, Any]]:
        return self.list_resource(CONTRACTS)

    def get_contract(self, contract_id: int) -> Dict[str, Any]:
        return self.get_resource(CONTRACTS, contract_id)

    def create_contract(self, data: Dict[str, Any]) -> Any:
        return self.create_resource(CONTRACTS, data)

    def update_contract(self, contract_id: int, data: Dict[str, Any]) -> Any:
        return self.update_resource(CONTRACTS, contract_id, data)

    def delete_contract(self, contract_id: int) -> Any:
        return self.delete_resource(CONTRACTS, contract_id)

    # ------------------------------------------------------------------ #
    # Factures (invoices)                                                #
    # ------------------------------------------------------------------ #
    def list_invoices(self) -> List[Dict[str, Any]]:
        return self.list_resource(INVOICES)

    def get_invoice(self, invoice_id: int) -> Dict[str, Any]:
        return self.get_resource(INVOICES, invoice_id)

    def create_invoice(self, data: Dict[str, Any]) -> Any:
        return self.create_resource(INVOICES, data)

    def update_invoice(self, invoice_id: int, data: Dict[str, Any]) -> Any:
        return self.update_resource(INVOICES, invoice_id, data)

    def delete_invoice(self, invoice_id: int) -> Any:
        return self.delete_resource(INVOICES, invoice_id)

    def get_total_revenue(self) -> float:
        """Chiffre d'affaires total (GET /factures/chiffre-affaires)."""
        data = self.request("GET", f"{INVOICES}/chiffre-affaires")
        if isinstance(data, Response):
            data = data.text.strip()
        try:
            return float(data or 0)
        except (TypeError, ValueError) as exc:
            raise DecodeError(f"unexpected revenue payload: {data!r}") from exc

    # ------------------------------------------------------------------ #
    # Interventions                                                      #
    # ------------------------------------------------------------------ #
    def list_interventions(self) -> List[Dict[str, Any]]:
        return self.list_resource(INTERVENTIONS)

    def get_intervention(self, intervention_id: int) -> Dict[str, Any]:
        return self.get_resource(INTERVENTIONS, intervention_id)

    def create_intervention(self, data: Dict[str, Any]) -> Any:
        return self.create_resource(INTERVENTIONS, data)

    def update_intervention(self, intervention_id: int, data: Dict[str, Any]) -> Any:
        return self.update_resource(INTERVENTIONS, intervention_id, data)

    def delete_intervention(self, intervention_id: int) -> Any:
        return self.delete_resource(INTERVENTIONS, intervention_id)

    def list_upcoming_interventions(self) -> List[Dict[str, Any]]:
        return self.list_resource(f"{INTERVENTIONS}/upcoming")

    # ------------------------------------------------------------------ #
    # Equipment                                                          #
    # ------------------------------------------------------------------ #
    def list_equipment(self) -> List[Dict[str, Any]]:
        return self.list_resource(EQUIPMENT)

    def get_equipment(self, equipment_id: int) -> Dict[str, Any]:
        return self.get_resource(EQUIPMENT, equipment_id)

    def create_equipment(self, data: Dict[str, Any]) -> Any:
        return self.create_resource(EQUIPMENT, data)

    def update_equipment(self, equipment_id: int, data: Dict[str, Any]) -> Any:
        return self.update_resource(EQUIPMENT, equipment_id, data)

    def delete_equipment(self, equipment_id: int) -> Any:
        return self.delete_resource(EQUIPMENT, equipment_id)

    # ------------------------------------------------------------------ #
    # Techniciens                                                        #
    # ------------------------------------------------------------------ #
    def list_technicians(self) -> List[Dict[str, Any]]:
        return self.list_resource(TECHNICIANS)

    def get_technician(self, technician_id: int) -> Dict[str, Any]:
        return self.get_resource(TECHNICIANS, technician_id)

    def create_technician(self, data: Dict[str, Any]) -> Any:
        return self.create_resource(TECHNICIANS, data)

    def update_technician(self, technician_id: int, data: Dict[str, Any]) -> Any:
        return self.update_resource(TECHNICIANS, technician_id, data)

    def delete_technician(self, technician_id: int) -> Any:
        return self.delete_resource(TECHNICIANS, technician_id)

    # ------------------------------------------------------------------ #
    # Assistant IA                                                       #
    # ------------------------------------------------------------------ #
    def chat(self, message: str, history: List[Dict[str, str]]) -> Any:
        """POST {message, history} vers l'assistant ; renvoie le corps décodé."""
        return self.request("POST", self.chat_url, json={"message": message, "history": history})
