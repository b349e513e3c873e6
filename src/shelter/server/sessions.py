"""In-memory session store.

Maps session ids to their ShellController. Each session carries its own
lock so events for one session are processed strictly one at a time,
while different sessions never wait on each other.
"""

import logging
import secrets
import threading
from collections import OrderedDict
from dataclasses import dataclass, field

from shelter.shell import ShellController

logger = logging.getLogger("shelter.server")


@dataclass(slots=True)
class Session:
    """One live session: its id, its controller, and its event lock."""

    id: str
    shell: ShellController
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class SessionStore:
    """Bounded, least-recently-used session registry.

    Thread safety:
        The store's own mapping is guarded by a Lock. Controllers are
        never touched here; callers hold ``Session.lock`` while
        delivering events.
    """

    __slots__ = ("_lock", "_max_sessions", "_sessions")

    def __init__(self, max_sessions: int = 1000) -> None:
        if max_sessions < 1:
            msg = f"max_sessions must be at least 1, got {max_sessions}"
            raise ValueError(msg)
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, Session] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, session_id: str | None) -> Session | None:
        """Return the live session for *session_id*, or None."""
        if not session_id:
            return None
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
            return session

    def add(self, shell: ShellController) -> Session:
        """Register *shell* under a fresh session id, evicting the oldest if full."""
        session = Session(id=secrets.token_urlsafe(24), shell=shell)
        with self._lock:
            self._sessions[session.id] = session
            while len(self._sessions) > self._max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                logger.debug("Evicted session %s", evicted_id[:8])
        return session

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions
