#!/usr/bin/env python3
"""Règles propres à chaque écran : champs calculés, libellés, liens entre entités."""

from datetime import datetime

import pytest

from gestmaint.resources import contracts, equipment, interventions, invoices, technicians
from gestmaint.resources.controller import ResourceController
from gestmaint.resources.registry import RESOURCES, get_config


# ══════════════════════════════════════════════════════════════════════════════
# Factures : total = main d'œuvre + matériel
# ══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def invoice_ctrl(api, notifier):
    ctrl = ResourceController(invoices.CONFIG, api, notifier)
    ctrl.open_create()
    return ctrl


def test_total_follows_cost_fields(invoice_ctrl):
    invoice_ctrl.set_field("laborCost", "500.00")
    invoice_ctrl.set_field("materialCost", "200.00")
    assert invoice_ctrl.form["totalAmount"] == "700.00"

    invoice_ctrl.set_field("materialCost", "150.00")
    assert invoice_ctrl.form["totalAmount"] == "650.00"


def test_unparseable_cost_counts_as_zero(invoice_ctrl):
    invoice_ctrl.set_field("laborCost", "abc")
    invoice_ctrl.set_field("materialCost", "")
    assert invoice_ctrl.form["totalAmount"] == "0.00"


def test_total_stays_editable(invoice_ctrl):
    invoice_ctrl.set_field("laborCost", "100")
    invoice_ctrl.set_field("totalAmount", "120")
    assert invoice_ctrl.form["totalAmount"] == "120"

    invoice_ctrl.set_field("notes", "remise")
    assert invoice_ctrl.form["totalAmount"] == "120"


def test_invoice_total_falls_back_to_price():
    form = invoices.CONFIG.record_to_form({"id": 1, "invoiceNumber": "F1", "price": 80.5})
    assert form["totalAmount"] == "80.5"
    assert form["status"] == "DRAFT"


def test_linked_intervention_by_nested_or_id():
    nested = {"id": 1, "title": "Révision", "facture": {"id": 7}}
    by_id = {"id": 2, "title": "Dépannage"}
    aux = {"interventions": [nested, by_id]}

    assert invoices.linked_intervention({"id": 7}, aux) is nested
    assert invoices.linked_intervention({"id": 8, "interventionId": 2}, aux) is by_id
    assert invoices.linked_intervention({"id": 9}, aux) is None


def test_invoice_row_shows_linked_client():
    aux = {"interventions": [{
        "id": 1,
        "title": "Révision",
        "facture": {"id": 7},
        "contract": {"client": {"firstName": "Jane", "lastName": "Roe"}},
    }]}
    row = invoices.CONFIG.render_row(
        {"id": 7, "invoiceNumber": "F7", "totalAmount": 1200, "status": "SENT"}, aux
    )
    assert row[2] == "1 200,00 MAD"
    assert row[3] == "Envoyée"
    assert row[-1] == "Révision (Jane Roe)"


# ══════════════════════════════════════════════════════════════════════════════
# Interventions
# ══════════════════════════════════════════════════════════════════════════════


def _intervention_form(when):
    return {"title": "Révision", "description": "Annuelle", "contractId": "1", "scheduledTime": when}


def test_intervention_in_the_past_is_rejected(api, notifier, requests_mock):
    ctrl = ResourceController(interventions.CONFIG, api, notifier)
    ctrl.open_create()
    ctrl.form.update(_intervention_form("2020-01-01T10:00"))

    assert ctrl.submit() is False

    assert requests_mock.call_count == 0
    assert notifier.last("error")[1] == "Date invalide"


def test_intervention_without_date_has_its_own_title(api, notifier, requests_mock):
    ctrl = ResourceController(interventions.CONFIG, api, notifier)
    ctrl.open_create()
    ctrl.form.update(_intervention_form(""))

    ctrl.submit()

    assert notifier.last("error")[1] == "Date requise"


def test_past_intervention_can_still_be_edited(api, notifier, requests_mock):
    record = {
        "id": 5,
        "title": "Révision",
        "description": "Annuelle",
        "scheduledTime": "2020-01-01T10:00:00",
        "contract": {"id": 1},
    }
    requests_mock.put("http://api.test/api/interventions/5", json=record,
                      headers={"Content-Type": "application/json"})
    requests_mock.get("http://api.test/api/interventions", json=[record],
                      headers={"Content-Type": "application/json"})
    requests_mock.get("http://api.test/api/contracts", json=[],
                      headers={"Content-Type": "application/json"})
    ctrl = ResourceController(interventions.CONFIG, api, notifier)

    ctrl.open_edit(record)
    assert ctrl.form["scheduledTime"] == "2020-01-01T10:00"
    assert ctrl.submit() is True

    assert requests_mock.request_history[0].json() == {
        "title": "Révision",
        "description": "Annuelle",
        "scheduledTime": "2020-01-01T10:00",
        "contractId": 1,
    }


def test_intervention_delete_is_worded_as_cancellation(api, requests_mock):
    from conftest import RecordingNotifier

    notifier = RecordingNotifier(confirm_answer=False)
    ctrl = ResourceController(interventions.CONFIG, api, notifier)
    ctrl.items = [{"id": 3, "title": "Révision"}]

    ctrl.delete(3)

    title, text = notifier.last("confirm")[1:]
    assert title == "Annuler l'intervention"
    assert text == 'Êtes-vous sûr de vouloir annuler "Révision" ?'
    assert interventions.CONFIG.texts.confirm_text == "Oui, annuler"


@pytest.mark.parametrize("when, expected", [
    ("2026-01-01T13:00:00", True),
    ("2026-01-02T12:00:00", True),
    ("2026-01-02T12:01:00", False),
    ("2026-01-01T11:00:00", False),
    (None, False),
    ("demain", False),
])
def test_upcoming_badge_window(when, expected):
    now = datetime(2026, 1, 1, 12, 0)
    assert interventions.is_upcoming_24h(when, now=now) is expected


def test_intervention_row_without_contract():
    row = interventions.CONFIG.render_row({"id": 1, "title": "X", "scheduledTime": None}, {})
    assert row[3] == "#N/A"
    assert row[4] == "Client inconnu"
    assert row[5] == "-"


# ══════════════════════════════════════════════════════════════════════════════
# Contrats / équipements : client introuvable
# ══════════════════════════════════════════════════════════════════════════════


def test_contract_without_client_shows_placeholder():
    assert contracts.client_name({"id": 1}) == "Client inconnu"
    ctx = contracts.CONFIG.describe_record({"id": 1}, {})
    assert ctx == {"name": "Contrat #1", "client": "Client inconnu"}


def test_contract_edit_form_reads_nested_client():
    assert contracts.CONFIG.record_to_form({"id": 2, "client": {"clientId": 8}}) == {"clientId": "8"}


def test_equipment_client_lookup():
    clients = [{"clientId": 4, "firstName": "Ali", "lastName": "Ben"}]

    assert equipment.client_name({"client": {"firstName": "Jane", "lastName": "Roe"}}, clients) == "Jane Roe"
    assert equipment.client_name({"clientId": 4}, clients) == "Ali Ben"
    assert equipment.client_name({"clientId": 99}, clients) == "Client inconnu"
    assert equipment.client_name({}, clients) == "Client inconnu"


def test_equipment_form_from_nested_client():
    form = equipment.CONFIG.record_to_form({
        "id": 1,
        "name": "Chaudière",
        "client": {"clientId": 4},
        "installationDate": "2024-05-01T00:00:00",
    })
    assert form["clientId"] == "4"
    assert form["installationDate"] == "2024-05-01"
    assert form["status"] == "OPERATIONAL"


# ══════════════════════════════════════════════════════════════════════════════
# Techniciens / registre
# ══════════════════════════════════════════════════════════════════════════════


def test_technician_active_flag():
    assert technicians.is_active({}) is True
    assert technicians.is_active({"isActive": False}) is False
    row = technicians.CONFIG.render_row({"firstName": "A", "lastName": "B", "isActive": False}, {})
    assert "Inactif" in row


def test_registry_aliases():
    assert get_config("invoices") is invoices.CONFIG
    assert get_config("contrats") is contracts.CONFIG
    with pytest.raises(KeyError):
        get_config("inconnu")


def test_every_resource_header_matches_row_width():
    for cfg in RESOURCES.values():
        assert len(cfg.render_row({}, {})) == len(cfg.headers), cfg.key
