#!/usr/bin/env python3
"""
gestmaint.cli
=============

CLI principal pour GESTMAINT - client du backend de gestion de maintenance.

Usage:
    gestmaint tabs                          # Liste les onglets disponibles
    gestmaint dashboard                     # Compteurs + prochaines interventions
    gestmaint list clients                  # Tableau d'une ressource
    gestmaint create clients --set firstName=John --set lastName=Doe ...
    gestmaint update factures 12 --set laborCost=500 --set materialCost=200
    gestmaint delete contrats 4 [--yes]     # Suppression avec confirmation
    gestmaint chat                          # Conversation avec l'assistant IA
    gestmaint contact                       # Liens de contact

Ressources: clients, contrats (contracts), interventions, equipment,
factures (invoices), techniciens (technicians).

Variables d'environnement: GESTMAINT_API_URL, GESTMAINT_CHAT_URL,
GESTMAINT_TIMEOUT, LOG_LEVEL, GESTMAINT_LOG_RETENTION_DAYS.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, List

from gestmaint.api_client import ApiClient
from gestmaint.assistant import QUICK_PROMPTS
from gestmaint.logging_config import setup_logging
from gestmaint.notifications import ConsoleNotifier
from gestmaint.resources.controller import ResourceController
from gestmaint.resources.registry import ALIASES, RESOURCES, get_config
from gestmaint.shell import TABS, Shell, render_resource

logger = logging.getLogger(__name__)


def _parse_assignments(pairs: List[str]) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise argparse.ArgumentTypeError(f"expected key=value, got {pair!r}")
        key, value = pair.split("=", 1)
        values[key.strip()] = value
    return values


def _controller(args: argparse.Namespace) -> ResourceController:
    shell = Shell(args.api, args.notifier)
    return shell.open(get_config(args.resource).key)


def _fill(controller: ResourceController, values: Dict[str, str]) -> None:
    for name, value in values.items():
        if name not in controller.form:
            logger.warning("Champ inconnu pour %s ignoré: %s", controller.config.key, name)
            continue
        controller.set_field(name, value)


# ═══════════════════════════════════════════════════════════════════════════════
# COMMANDES
# ═══════════════════════════════════════════════════════════════════════════════


def cmd_tabs(args: argparse.Namespace) -> int:
    for tab, label in TABS.items():
        print(f"{tab:<15} {label}")
    return 0


def cmd_dashboard(args: argparse.Namespace) -> int:
    """Charge le tableau de bord (6 lectures parallèles, tout ou rien)."""
    dashboard = Shell(args.api, args.notifier).open("dashboard")
    ok = dashboard.load()
    print("\n".join(dashboard.summary_lines()))
    return 0 if ok else 1


def cmd_list(args: argparse.Namespace) -> int:
    controller = _controller(args)
    ok = controller.load()
    print(render_resource(controller))
    return 0 if ok else 1


def cmd_create(args: argparse.Namespace) -> int:
    """
    Crée un enregistrement.

    Workflow:
    1. Charge la liste (et les listes auxiliaires pour les libellés)
    2. Ouvre le formulaire de création avec les valeurs par défaut
    3. Applique les --set key=value (calcul du total pour les factures)
    4. Valide puis envoie
    """
    values = _parse_assignments(args.set)
    controller = _controller(args)
    if not controller.load():
        return 1
    controller.open_create()
    _fill(controller, values)
    return 0 if controller.submit() else 1


def cmd_update(args: argparse.Namespace) -> int:
    values = _parse_assignments(args.set)
    controller = _controller(args)
    if not controller.load():
        return 1
    record = controller.find(args.id)
    if record is None:
        args.notifier.show_error("Introuvable", f"Aucun enregistrement #{args.id}.")
        return 1
    controller.open_edit(record)
    _fill(controller, values)
    return 0 if controller.submit() else 1


def cmd_delete(args: argparse.Namespace) -> int:
    controller = _controller(args)
    if not controller.load():
        return 1
    return 0 if controller.delete(args.id) else 1


def cmd_chat(args: argparse.Namespace) -> int:
    """Boucle interactive ; ligne vide ou 'exit' pour quitter, 1-N pour une suggestion."""
    widget = Shell(args.api, args.notifier).open("assistant-ia")
    print(widget.history[0]["text"])
    for i, prompt in enumerate(QUICK_PROMPTS, 1):
        print(f"  [{i}] {prompt}")
    while True:
        try:
            text = input("> ").strip()
        except EOFError:
            break
        if not text or text.lower() in ("exit", "quit"):
            break
        if text.isdigit() and 1 <= int(text) <= len(QUICK_PROMPTS):
            text = QUICK_PROMPTS[int(text) - 1]
        widget.send(text)
        print(widget.history[-1]["text"])
    return 0


def cmd_contact(args: argparse.Namespace) -> int:
    print("\n".join(Shell(args.api, args.notifier).open("contact").lines()))
    return 0


# ═══════════════════════════════════════════════════════════════════════════════
# PARSER
# ═══════════════════════════════════════════════════════════════════════════════


def build_parser() -> argparse.ArgumentParser:
    resources = sorted(set(RESOURCES) | set(ALIASES))

    parser = argparse.ArgumentParser(
        prog="gestmaint",
        description="Client du backend de gestion de maintenance",
    )
    parser.add_argument("--api-url", help="URL de base de l'API (défaut: GESTMAINT_API_URL)")
    parser.add_argument("--no-log-file", action="store_true", help="Pas de fichier de log")
    parser.add_argument("-v", "--verbose", action="store_true", help="Affiche les messages DEBUG en console")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("tabs", help="Liste les onglets")
    p.set_defaults(func=cmd_tabs)

    p = sub.add_parser("dashboard", help="Tableau de bord")
    p.set_defaults(func=cmd_dashboard)

    p = sub.add_parser("list", help="Affiche une ressource")
    p.add_argument("resource", choices=resources)
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("create", help="Crée un enregistrement")
    p.add_argument("resource", choices=resources)
    p.add_argument("--set", action="append", metavar="KEY=VALUE", default=[])
    p.set_defaults(func=cmd_create)

    p = sub.add_parser("update", help="Modifie un enregistrement")
    p.add_argument("resource", choices=resources)
    p.add_argument("id")
    p.add_argument("--set", action="append", metavar="KEY=VALUE", default=[])
    p.set_defaults(func=cmd_update)

    p = sub.add_parser("delete", help="Supprime un enregistrement")
    p.add_argument("resource", choices=resources)
    p.add_argument("id")
    p.add_argument("--yes", "-y", action="store_true", help="Confirme sans demander")
    p.set_defaults(func=cmd_delete)

    p = sub.add_parser("chat", help="Assistant IA")
    p.set_defaults(func=cmd_chat)

    p = sub.add_parser("contact", help="Liens de contact")
    p.set_defaults(func=cmd_contact)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(log_to_file=not args.no_log_file, verbose=args.verbose)

    if args.api_url:
        args.api = ApiClient(args.api_url)
    else:
        args.api = ApiClient.from_config()
    args.notifier = ConsoleNotifier(assume_yes=getattr(args, "yes", False))

    try:
        return args.func(args)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    except KeyboardInterrupt:
        logger.warning("Interrompu")
        return 130


if __name__ == "__main__":
    sys.exit(main())
