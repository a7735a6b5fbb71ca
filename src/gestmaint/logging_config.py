#!/usr/bin/env python3
"""
Logging de gestmaint.

    logs/gestmaint_YYYYMMDD_HHMMSS.log    un fichier par lancement de la CLI

La console n'affiche que les messages utiles à l'opérateur (INFO, ou
DEBUG avec --verbose). Le fichier suit LOG_LEVEL ; en DEBUG il contient
chaque requête et réponse de l'API (voir api_client.request).

    LOG_LEVEL=DEBUG gestmaint update factures 12 --set laborCost=500

Les fichiers plus anciens que la rétention (7 jours par défaut) sont
supprimés au démarrage.
"""

import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional

from gestmaint.config import Config

CONSOLE_FORMAT = "%(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-7s | %(threadName)s | %(name)s | %(message)s"

# bibliothèques trop bavardes en DEBUG
QUIET_LOGGERS = ("urllib3", "requests", "charset_normalizer")

DUMP_MAX_CHARS = 4000


def purge_old_logs(directory: Path, prefix: str, days: int) -> List[Path]:
    """Supprime `<prefix>_*.log` plus vieux que `days` jours ; renvoie les fichiers supprimés."""
    if not directory.is_dir():
        return []
    limit = datetime.now() - timedelta(days=days)
    removed = []
    for path in sorted(directory.glob(f"{prefix}_*.log")):
        if datetime.fromtimestamp(path.stat().st_mtime) >= limit:
            continue
        try:
            path.unlink()
        except OSError as exc:
            logging.getLogger(__name__).warning("Cannot remove old log %s: %s", path.name, exc)
            continue
        removed.append(path)
    return removed


def setup_logging(*, log_to_file: bool = True, verbose: bool = False) -> Optional[Path]:
    """
    Installe les handlers sur le logger racine.

    Renvoie le chemin du fichier de log, ou None si `log_to_file` est faux.
    Peut être rappelée : les handlers précédents sont remplacés.
    """
    cfg = Config.get_logging_config()
    file_level = getattr(logging, str(cfg["level"]).upper(), logging.INFO)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()
    root.setLevel(logging.DEBUG)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG if verbose else logging.INFO)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root.addHandler(console)

    if not log_to_file:
        return None

    logs_dir = Path(cfg["dir"])
    logs_dir.mkdir(parents=True, exist_ok=True)
    removed = purge_old_logs(logs_dir, cfg["prefix"], cfg["retention_days"])

    log_file = logs_dir / f"{cfg['prefix']}_{datetime.now():%Y%m%d_%H%M%S}.log"
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(file_level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    root.addHandler(handler)

    logging.getLogger(__name__).debug(
        "Log file %s (level=%s, %d old file(s) removed)",
        log_file.name, logging.getLevelName(file_level), len(removed),
    )
    return log_file


def dump(label: str, obj, *, logger: Optional[logging.Logger] = None) -> None:
    """
    Trace un payload en JSON indenté, au niveau DEBUG uniquement.

        dump("facture payload", payload, logger=logger)
    """
    log = logger or logging.getLogger("gestmaint")
    if not log.isEnabledFor(logging.DEBUG):
        return
    text = json.dumps(obj, default=str, indent=2, ensure_ascii=False)
    if len(text) > DUMP_MAX_CHARS:
        text = text[:DUMP_MAX_CHARS] + f"\n... ({len(text) - DUMP_MAX_CHARS} caractères tronqués)"
    log.debug("%s\n%s", label, text)
