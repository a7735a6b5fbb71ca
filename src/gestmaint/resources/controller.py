#!/usr/bin/env python3
"""
Moteur CRUD commun aux six écrans de ressources.

Cycle de vie :
    loading ──► ready (modale fermée | create | edit)
        └─────► error (bandeau ; un nouveau load() reste possible)

Chaque opération notifie l'utilisateur via le `Notifier` injecté ;
aucune exception de l'API ne remonte à l'appelant.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from gestmaint.api_client import ApiClient
from gestmaint.batch import fetch_all
from gestmaint.errors import ApiError, ErrorKind, classify_error
from gestmaint.logging_config import dump
from gestmaint.notifications import VALIDATION_TITLE, Notifier
from gestmaint.resources.base import (
    GENERIC_SAVE_ERROR,
    INVALID_DATA_ERROR,
    AuxData,
    Form,
    Record,
    ResourceConfig,
)
from gestmaint.utils import UNKNOWN_CLIENT
from gestmaint.validation import validate

logger = logging.getLogger(__name__)

PRIMARY = "__items__"


class Mode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class ResourceController:
    """État et orchestration d'un écran de ressource."""

    def __init__(self, config: ResourceConfig, api: ApiClient, notifier: Notifier) -> None:
        self.config = config
        self.api = api
        self.notifier = notifier

        self.loading: bool = False
        self.items: List[Record] = []
        self.aux: AuxData = {name: [] for name in config.aux}
        self.error: Optional[str] = None

        self.modal: Optional[Mode] = None
        self.form: Form = config.new_form()
        self.editing: Optional[Record] = None

    # ------------------------------------------------------------------ #
    # État                                                               #
    # ------------------------------------------------------------------ #
    @property
    def state(self) -> str:
        if self.loading:
            return "loading"
        return "error" if self.error else "ready"

    @property
    def is_modal_open(self) -> bool:
        return self.modal is not None

    def find(self, record_id: Any) -> Optional[Record]:
        for record in self.items:
            if str(self.config.record_id(record)) == str(record_id):
                return record
        return None

    # ------------------------------------------------------------------ #
    # Chargement                                                         #
    # ------------------------------------------------------------------ #
    def load(self) -> bool:
        """Charge la liste principale et les listes auxiliaires (tout ou rien)."""
        cfg = self.config
        calls = {PRIMARY: lambda: self.api.list_resource(cfg.path)}
        for name, path in cfg.aux.items():
            calls[name] = lambda path=path: self.api.list_resource(path)

        self.loading = True
        try:
            results = fetch_all(calls)
        except ApiError as exc:
            logger.error("Error loading %s: %s", cfg.key, exc)
            self.error = cfg.texts.load_banner
            if classify_error(exc) is ErrorKind.NETWORK:
                self.notifier.show_network_error()
            else:
                self.notifier.show_error("Erreur de chargement", cfg.texts.load_error)
            return False
        finally:
            self.loading = False

        self.items = results.pop(PRIMARY)
        self.aux = results
        self.error = None
        logger.debug("%s loaded: %d item(s)", cfg.key, len(self.items))
        return True

    # ------------------------------------------------------------------ #
    # Formulaire                                                         #
    # ------------------------------------------------------------------ #
    def open_create(self) -> None:
        self.editing = None
        self.form = self.config.new_form()
        self.modal = Mode.CREATE

    def open_edit(self, record: Record) -> None:
        self.editing = record
        self.form = self.config.record_to_form(record)
        self.modal = Mode.EDIT

    def close_modal(self) -> None:
        self.modal = None

    def set_field(self, name: str, value: Any) -> None:
        self.form[name] = "" if value is None else str(value)
        if self.config.on_change is not None:
            self.config.on_change(self.form, name)

    def _context(self, ctx: Dict[str, str], **extra: Any) -> Dict[str, Any]:
        base = {"name": "", "client": UNKNOWN_CLIENT}
        base.update(extra)
        base.update(ctx)
        return base

    # ------------------------------------------------------------------ #
    # Création / modification                                            #
    # ------------------------------------------------------------------ #
    def submit(self) -> bool:
        """Valide puis envoie le formulaire ; True si l'enregistrement a réussi."""
        cfg, texts = self.config, self.config.texts
        editing = self.modal is Mode.EDIT and self.editing is not None

        err = validate(cfg.rules, self.form, creating=not editing)
        if err is not None:
            self.notifier.show_error(err.title, str(err))
            return False

        try:
            payload = cfg.build_payload(self.form)
        except ValueError:
            self.notifier.show_error(VALIDATION_TITLE, INVALID_DATA_ERROR)
            return False

        dump(f"{cfg.label} payload", payload, logger=logger)
        self.notifier.show_loading(
            texts.updating_title if editing else texts.creating_title,
            texts.saving_text,
        )
        try:
            if editing:
                self.api.update_resource(cfg.path, cfg.record_id(self.editing), payload)
            else:
                self.api.create_resource(cfg.path, payload)
        except ApiError as exc:
            self.notifier.close_loading()
            logger.error("Error saving %s: %s", cfg.label, exc)
            self._notify_save_error(exc, editing)
            return False

        self.notifier.close_loading()
        ctx = self._context(cfg.describe_form(self.form, self.aux))
        self.modal = None
        self.load()

        if editing:
            self.notifier.show_success(texts.updated_title, texts.updated_text.format(**ctx))
        else:
            self.notifier.show_success(texts.created_title, texts.created_text.format(**ctx))
        self.editing = None
        return True

    def _notify_save_error(self, exc: ApiError, editing: bool) -> None:
        texts = self.config.texts
        kind = classify_error(exc)
        if kind is ErrorKind.DUPLICATE:
            self.notifier.show_error(texts.duplicate_title, texts.duplicate_text)
        elif kind is ErrorKind.INVALID:
            self.notifier.show_error(VALIDATION_TITLE, INVALID_DATA_ERROR)
        elif kind is ErrorKind.NETWORK:
            self.notifier.show_network_error()
        elif kind is ErrorKind.CONSTRAINT:
            self.notifier.show_error(texts.constraint_title, texts.constraint_text)
        elif kind is ErrorKind.CONFLICT and texts.conflict_title:
            self.notifier.show_error(texts.conflict_title, texts.conflict_text or "")
        else:
            self.notifier.show_error(
                texts.update_error_title if editing else texts.create_error_title,
                GENERIC_SAVE_ERROR,
            )

    # ------------------------------------------------------------------ #
    # Suppression                                                        #
    # ------------------------------------------------------------------ #
    def delete(self, record_id: Any) -> bool:
        """Demande confirmation puis supprime ; True si supprimé."""
        cfg, texts = self.config, self.config.texts
        record = self.find(record_id)
        if record is not None:
            ctx = self._context(cfg.describe_record(record, self.aux), id=record_id)
        else:
            ctx = self._context({"name": texts.missing_name.format(id=record_id)}, id=record_id)

        confirmed = self.notifier.confirm(
            texts.delete_title,
            texts.delete_question.format(**ctx),
            texts.confirm_text,
            texts.cancel_text,
        )
        if not confirmed:
            logger.debug("Deletion of %s #%s cancelled", cfg.label, record_id)
            return False

        self.notifier.show_loading(texts.deleting_title, texts.deleting_text)
        try:
            self.api.delete_resource(cfg.path, record_id)
        except ApiError as exc:
            self.notifier.close_loading()
            logger.error("Error deleting %s #%s: %s", cfg.label, record_id, exc)
            kind = classify_error(exc)
            if kind is ErrorKind.CONSTRAINT:
                self.notifier.show_error(texts.constraint_title, texts.constraint_text)
            elif kind is ErrorKind.NETWORK:
                self.notifier.show_network_error()
            else:
                self.notifier.show_error(texts.delete_error_title, texts.delete_error_text)
            return False

        self.notifier.close_loading()
        self.load()
        self.notifier.show_success(texts.deleted_title, texts.deleted_text.format(**ctx))
        return True

    # ------------------------------------------------------------------ #
    # Rendu                                                              #
    # ------------------------------------------------------------------ #
    def rows(self) -> List[List[str]]:
        return [self.config.render_row(record, self.aux) for record in self.items]
