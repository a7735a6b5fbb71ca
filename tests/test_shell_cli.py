"""Navigation par onglets, page contact et ligne de commande."""

import pytest

from gestmaint import cli
from gestmaint.assistant import AssistantWidget
from gestmaint.dashboard import Dashboard
from gestmaint.resources.controller import ResourceController
from gestmaint.shell import DEFAULT_TAB, TABS, ContactPage, Shell, render_table

from conftest import BASE_URL, JSON, url


# ---------------------------------------------------------------------------
# Shell
# ---------------------------------------------------------------------------

def test_tab_order():
    assert list(TABS) == [
        "dashboard", "clients", "contrats", "interventions", "equipment",
        "factures", "techniciens", "contact", "assistant-ia",
    ]


def test_open_builds_matching_screen(api, notifier):
    shell = Shell(api, notifier)

    assert isinstance(shell.open("dashboard"), Dashboard)
    assert isinstance(shell.open("assistant-ia"), AssistantWidget)
    assert isinstance(shell.open("contact"), ContactPage)
    screen = shell.open("factures")
    assert isinstance(screen, ResourceController)
    assert screen.config.key == "factures"
    assert shell.active == "factures"


def test_open_reuses_mounted_screen(api, notifier):
    shell = Shell(api, notifier)
    assert shell.open("clients") is shell.open("clients")


def test_unknown_tab_falls_back_to_dashboard(api, notifier):
    shell = Shell(api, notifier)

    screen = shell.open("parametres")

    assert isinstance(screen, Dashboard)
    assert shell.active == DEFAULT_TAB


def test_contact_links():
    page = ContactPage("contact@example.com", "212600000000", "Demande d'information")

    assert page.mailto == "mailto:contact@example.com?subject=Demande%20d%27information"
    assert page.whatsapp_url == "https://wa.me/212600000000"
    assert page.lines()[0] == "Contactez-nous"


def test_render_table_aligns_columns():
    out = render_table(["A", "Nom"], [["1", "Jean"], ["22", "Li"]])
    assert out.splitlines() == [
        "A   Nom",
        "--  ----",
        "1   Jean",
        "22  Li",
    ]


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda **kw: None)


def _run(*argv):
    return cli.main(["--api-url", BASE_URL, *argv])


def test_cli_tabs(capsys):
    assert _run("tabs") == 0
    assert "assistant-ia" in capsys.readouterr().out


def test_cli_list_clients(requests_mock, capsys):
    requests_mock.get(
        url("/clients"),
        json=[{"clientId": 1, "firstName": "John", "lastName": "Doe", "email": "john@doe.com"}],
        headers=JSON,
    )

    assert _run("list", "clients") == 0

    out = capsys.readouterr().out
    assert "Gestion des Clients" in out
    assert "John Doe" in out


def test_cli_list_failure_exit_code(requests_mock, capsys):
    requests_mock.get(url("/techniciens"), status_code=503)

    assert _run("list", "technicians") == 1
    assert "Erreur lors du chargement des techniciens" in capsys.readouterr().out


def test_cli_create_invoice_computes_total(requests_mock):
    requests_mock.get(url("/factures"), json=[], headers=JSON)
    requests_mock.get(url("/interventions"), json=[], headers=JSON)
    requests_mock.post(url("/factures"), status_code=201, json={"id": 1}, headers=JSON)

    code = _run(
        "create", "invoices",
        "--set", "invoiceNumber=F-001",
        "--set", "description=Révision",
        "--set", "laborCost=500.00",
        "--set", "materialCost=200.00",
    )

    assert code == 0
    post = next(r for r in requests_mock.request_history if r.method == "POST")
    body = post.json()
    assert body["totalAmount"] == 700.0
    assert body["status"] == "DRAFT"
    assert body["interventionId"] is None


def test_cli_create_invalid_sends_no_post(requests_mock):
    requests_mock.get(url("/clients"), json=[], headers=JSON)

    assert _run("create", "clients", "--set", "firstName=John") == 1
    assert all(r.method == "GET" for r in requests_mock.request_history)


def test_cli_create_skips_unknown_field(requests_mock):
    requests_mock.get(url("/clients"), json=[], headers=JSON)
    requests_mock.post(url("/clients"), status_code=201, json={"clientId": 1}, headers=JSON)

    code = _run(
        "create", "clients",
        "--set", "firstName=John",
        "--set", "lastName=Doe",
        "--set", "email=john@doe.com",
        "--set", "foo=bar",
    )

    assert code == 0
    post = next(r for r in requests_mock.request_history if r.method == "POST")
    assert "foo" not in post.json()
    assert post.json()["email"] == "john@doe.com"


def test_cli_update_unknown_id(requests_mock, capsys):
    requests_mock.get(url("/clients"), json=[], headers=JSON)

    assert _run("update", "clients", "9", "--set", "email=a@b.fr") == 1
    assert "Introuvable" in capsys.readouterr().out


def test_cli_delete_with_yes(requests_mock):
    requests_mock.get(url("/contracts"), json=[{"id": 4, "client": None}], headers=JSON)
    requests_mock.get(url("/clients"), json=[], headers=JSON)
    requests_mock.delete(url("/contracts/4"), status_code=204)

    assert _run("delete", "contracts", "4", "--yes") == 0
    assert any(r.method == "DELETE" for r in requests_mock.request_history)


def test_cli_delete_declined(requests_mock, monkeypatch):
    requests_mock.get(url("/equipment"), json=[{"id": 2, "name": "Pompe"}], headers=JSON)
    requests_mock.get(url("/clients"), json=[], headers=JSON)
    monkeypatch.setattr("builtins.input", lambda prompt="": "n")

    assert _run("delete", "equipment", "2") == 1
    assert not any(r.method == "DELETE" for r in requests_mock.request_history)


def test_cli_chat_loop(requests_mock, monkeypatch, capsys):
    requests_mock.post(url("/ai/chat"), json={"reply": "Bonjour !"}, headers=JSON)
    answers = iter(["salut", "2", "exit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

    assert _run("chat") == 0

    out = capsys.readouterr().out
    assert "[1] Ajouter un client" in out
    assert "Bonjour !" in out
    sent = [r.json()["message"] for r in requests_mock.request_history]
    assert sent == ["salut", "Créer une facture"]


def test_cli_contact(capsys):
    assert _run("contact") == 0
    assert "https://wa.me/" in capsys.readouterr().out


def test_cli_rejects_malformed_assignment():
    with pytest.raises(SystemExit):
        _run("create", "clients", "--set", "firstName")


# ---------------------------------------------------------------------------
# ConsoleNotifier
# ---------------------------------------------------------------------------

def test_console_notifier_confirm_and_loading():
    from gestmaint.notifications import ConsoleNotifier

    lines = []
    notifier = ConsoleNotifier(out=lines.append, ask=lambda prompt: "oui")

    assert notifier.confirm("Supprimer", "Sûr ?") is True
    notifier.show_loading("Suppression en cours...")
    assert notifier.is_loading
    notifier.close_loading()
    assert not notifier.is_loading
    notifier.show_network_error()

    assert lines[0] == "❓ Supprimer : Sûr ?"
    assert lines[-1].startswith("❌ Erreur de connexion")


def test_console_notifier_defaults_to_no():
    from gestmaint.notifications import ConsoleNotifier

    notifier = ConsoleNotifier(out=lambda s: None, ask=lambda prompt: "")
    assert notifier.confirm("Supprimer", "Sûr ?") is False
    assert ConsoleNotifier(out=lambda s: None, assume_yes=True).confirm("t", "x") is True
