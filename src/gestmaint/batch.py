"""Chargement concurrent d'un lot de lectures (tout ou rien)."""
from __future__ import annotations

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Any, Callable, Dict, Mapping

from gestmaint.config import Config

logger = logging.getLogger(__name__)


def fetch_all(calls: Mapping[str, Callable[[], Any]], *, max_workers: int | None = None) -> Dict[str, Any]:
    """
    Exécute les appels en parallèle et renvoie {nom: résultat}.

    Tout ou rien : la première exception est relevée telle quelle et
    aucun résultat partiel n'est renvoyé. Les appels déjà partis ne sont
    pas annulés.
    """
    if not calls:
        return {}

    workers = max_workers or Config.get_batch_config()["max_workers"]
    with ThreadPoolExecutor(max_workers=min(workers, len(calls))) as pool:
        futures = {name: pool.submit(fn) for name, fn in calls.items()}
        done, _ = wait(futures.values(), return_when=FIRST_EXCEPTION)

        for name, fut in futures.items():
            if fut in done and fut.exception() is not None:
                logger.debug("Batch call %r failed: %s", name, fut.exception())
                raise fut.exception()

        return {name: fut.result() for name, fut in futures.items()}
