"""Namespace scope state machine.

States are ``current``, ``all`` and ``specific(namespace)``. ``toggle`` flips
between ``current`` and ``all`` (leaving ``specific`` always lands on
``current``); ``select`` moves to ``specific``. The scope key used to
partition cached pod lists is a pure function of the state.
"""

from __future__ import annotations

import logging

from kubepick.constants.enums import NamespaceMode
from kubepick.constants.values import SCOPE_ALL, SCOPE_CURRENT
from kubepick.exceptions import InvalidModeError

logger = logging.getLogger(__name__)


class NamespaceState:
    """Tracks the namespace scope the user is viewing."""

    def __init__(self, mode: NamespaceMode | str = NamespaceMode.CURRENT) -> None:
        self._mode = NamespaceMode.CURRENT
        self._selected_namespace: str | None = None
        self._current_namespace: str | None = None
        self.set_mode(mode)

    @property
    def mode(self) -> NamespaceMode:
        return self._mode

    def set_mode(self, mode: NamespaceMode | str) -> None:
        """Set the mode from a raw value.

        Raises:
            InvalidModeError: For unknown modes, or ``specific`` when no
                namespace has been selected yet.
        """
        try:
            resolved = NamespaceMode(mode)
        except ValueError:
            raise InvalidModeError(mode) from None
        if resolved == NamespaceMode.SPECIFIC and not self._selected_namespace:
            raise InvalidModeError(
                mode, "Cannot switch to specific mode without a selected namespace"
            )
        self._mode = resolved

    def toggle(self) -> NamespaceMode:
        """Flip between ``all`` and ``current``."""
        previous = self._mode
        self._mode = (
            NamespaceMode.ALL if previous == NamespaceMode.CURRENT else NamespaceMode.CURRENT
        )
        logger.debug("Namespace mode %s -> %s", previous.value, self._mode.value)
        return self._mode

    def select(self, namespace: str) -> None:
        """Move to ``specific(namespace)``."""
        self._selected_namespace = namespace
        self._mode = NamespaceMode.SPECIFIC
        logger.debug("Namespace mode -> specific(%s)", namespace)

    @property
    def selected_namespace(self) -> str | None:
        """The chosen namespace, or None while the mode is not ``specific``.

        The last selection is kept internally for re-selection but is inert
        outside ``specific`` mode.
        """
        if self._mode != NamespaceMode.SPECIFIC:
            return None
        return self._selected_namespace

    @property
    def current_namespace(self) -> str | None:
        """Cached value of the kubeconfig context's namespace."""
        return self._current_namespace

    @current_namespace.setter
    def current_namespace(self, namespace: str | None) -> None:
        self._current_namespace = namespace

    @property
    def scope_key(self) -> str:
        if self._mode == NamespaceMode.ALL:
            return SCOPE_ALL
        if self._mode == NamespaceMode.SPECIFIC:
            return self._selected_namespace or SCOPE_CURRENT
        return SCOPE_CURRENT

    def command_namespace(self, row_namespace: str | None = None) -> str | None:
        """Namespace to pass to workload commands for a selected row.

        Listing all namespaces uses the row's own namespace; ``specific``
        uses the selected one; ``current`` lets kubectl use the context.
        """
        if self._mode == NamespaceMode.ALL:
            return row_namespace
        if self._mode == NamespaceMode.SPECIFIC:
            return self._selected_namespace
        return None

    def describe(self) -> str:
        """Short label for titles, e.g. ``current (default)`` or ``all``."""
        if self._mode == NamespaceMode.ALL:
            return "all namespaces"
        if self._mode == NamespaceMode.SPECIFIC:
            return f"namespace {self._selected_namespace}"
        if self._current_namespace:
            return f"current ({self._current_namespace})"
        return "current"


__all__ = ["NamespaceState"]
