"""Server-side teacher sessions keyed by a signed cookie."""

import logging
import secrets
import time
from dataclasses import dataclass, field

from fastapi import Request
from itsdangerous import BadSignature, TimestampSigner
from starlette.responses import Response

logger = logging.getLogger(__name__)


@dataclass
class SessionData:
    sid: str
    created_at: float = field(default_factory=time.time)
    is_teacher: bool = False


class SessionStore:
    """In-process session table; entries expire ``max_age`` seconds after creation."""

    def __init__(self, max_age: int):
        self.max_age = max_age
        self._sessions: dict[str, SessionData] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def _expired(self, session: SessionData, now: float) -> bool:
        return now - session.created_at >= self.max_age

    def purge_expired(self) -> None:
        now = time.time()
        for sid in [s for s, data in self._sessions.items() if self._expired(data, now)]:
            del self._sessions[sid]

    def create(self) -> SessionData:
        self.purge_expired()
        session = SessionData(sid=secrets.token_urlsafe(32))
        self._sessions[session.sid] = session
        return session

    def get(self, sid: str) -> SessionData | None:
        session = self._sessions.get(sid)
        if session is None:
            return None
        if self._expired(session, time.time()):
            del self._sessions[sid]
            return None
        return session

    def delete(self, sid: str) -> None:
        self._sessions.pop(sid, None)


class SessionManager:
    """Issues, reads and destroys the session cookie for one application."""

    def __init__(
        self,
        secret: str,
        max_age: int,
        cookie_name: str = "sess_eval",
        https_only: bool = False,
        store: SessionStore | None = None,
    ):
        self.max_age = max_age
        self.cookie_name = cookie_name
        self.https_only = https_only
        self.store = store or SessionStore(max_age)
        self._signer = TimestampSigner(secret, salt="evaluaciones.session")

    def load(self, request: Request) -> SessionData | None:
        token = request.cookies.get(self.cookie_name)
        if not token:
            return None
        try:
            sid = self._signer.unsign(token, max_age=self.max_age).decode()
        except BadSignature:
            # also covers SignatureExpired
            return None
        return self.store.get(sid)

    @staticmethod
    def is_teacher_authenticated(session: SessionData | None) -> bool:
        return bool(session and session.is_teacher)

    def mark_teacher_authenticated(
        self, response: Response, session: SessionData | None = None
    ) -> SessionData:
        """Start a fresh teacher session; any previous sid is discarded."""
        if session is not None:
            self.store.delete(session.sid)
        session = self.store.create()
        session.is_teacher = True
        response.set_cookie(
            self.cookie_name,
            self._signer.sign(session.sid).decode(),
            max_age=self.max_age,
            httponly=True,
            samesite="lax",
            secure=self.https_only,
        )
        return session

    def destroy(self, request: Request, response: Response) -> None:
        session = self.load(request)
        if session is not None:
            self.store.delete(session.sid)
        response.delete_cookie(
            self.cookie_name, httponly=True, samesite="lax", secure=self.https_only
        )
