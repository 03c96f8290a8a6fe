"""
View controllers and the per-session controller registry.

Controllers hold asyncio timers and tasks, which cannot live in Reflex
state vars. Each browser session gets its own controllers, kept in a
bounded module-level registry keyed by the session's client token.
"""

import time
from collections import OrderedDict
from typing import Callable, TypeVar

from notas_ui.controllers.base import ListController
from notas_ui.controllers.invoice_list import Download, InvoiceListController, InvoiceView
from notas_ui.controllers.members import MembersController
from notas_ui.controllers.password import (
    LinkTokens,
    PasswordController,
    PasswordResult,
    parse_link_fragment,
)
from notas_ui.lib import logs

LOG = logs.logger(__file__)

T = TypeVar("T")


class SessionRegistry:
    """
    Controllers per browser session, bounded in count and idle time.

    Sessions that close their tab never sign out, so entries are evicted
    once they sit idle longer than `idle_ttl` seconds or when more than
    `max_sessions` are held (least recently used first). Evicted list
    controllers have their pending work cancelled.
    """

    def __init__(
        self,
        max_sessions: int = 500,
        idle_ttl: float = 60 * 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_sessions = max_sessions
        self.idle_ttl = idle_ttl
        self._clock = clock
        self._sessions: OrderedDict[str, tuple[float, dict[str, object]]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def get(self, session_id: str, name: str, factory: Callable[[], T]) -> T:
        now = self._clock()
        self._evict_idle(now)
        _, controllers = self._sessions.pop(session_id, (now, {}))
        self._sessions[session_id] = (now, controllers)
        controller = controllers.get(name)
        if controller is None:
            controller = factory()
            controllers[name] = controller
            LOG.info("controller_for - session:%s created:%s", session_id[:8], name)
        while len(self._sessions) > self.max_sessions:
            evicted, _ = next(iter(self._sessions.items()))
            self.drop(evicted)
        return controller  # type: ignore[return-value]

    def drop(self, session_id: str) -> None:
        _, controllers = self._sessions.pop(session_id, (0.0, {}))
        for controller in controllers.values():
            if isinstance(controller, ListController):
                controller.cancel_pending()

    def _evict_idle(self, now: float) -> None:
        stale = [
            session_id
            for session_id, (last_used, _) in self._sessions.items()
            if now - last_used > self.idle_ttl
        ]
        for session_id in stale:
            LOG.info("Evicting idle session %s", session_id[:8])
            self.drop(session_id)


_REGISTRY = SessionRegistry()


def controller_for(session_id: str, name: str, factory: Callable[[], T]) -> T:
    """Return the session's controller called `name`, creating it on first use."""
    return _REGISTRY.get(session_id, name, factory)


def drop_session(session_id: str) -> None:
    """Forget every controller of a session (on sign-out)."""
    _REGISTRY.drop(session_id)

__all__ = [
    "Download",
    "InvoiceListController",
    "InvoiceView",
    "LinkTokens",
    "ListController",
    "MembersController",
    "PasswordController",
    "PasswordResult",
    "SessionRegistry",
    "controller_for",
    "drop_session",
    "parse_link_fragment",
]
