"""In-process store for assessment sessions"""

import threading
import uuid
from typing import Dict, Tuple

from credit_approver.domain.assessment import AssessmentState, AssessmentStateMachine
from credit_approver.domain.exceptions import SessionNotFound


class SessionStore:
    """
    Holds the current AssessmentState of each live session.

    Sessions exist only for the lifetime of the process. Each session id maps
    to exactly one state; the lock only guards the dictionary itself.
    """

    def __init__(self, machine: AssessmentStateMachine):
        self.machine = machine
        self._lock = threading.Lock()
        self._sessions: Dict[str, AssessmentState] = {}

    def create(self) -> Tuple[str, AssessmentState]:
        session_id = str(uuid.uuid4())
        state = self.machine.start()
        with self._lock:
            self._sessions[session_id] = state
        return session_id, state

    def get(self, session_id: str) -> AssessmentState:
        with self._lock:
            try:
                return self._sessions[session_id]
            except KeyError:
                raise SessionNotFound(f"Assessment session {session_id} not found") from None

    def save(self, session_id: str, state: AssessmentState) -> None:
        with self._lock:
            if session_id not in self._sessions:
                raise SessionNotFound(f"Assessment session {session_id} not found")
            self._sessions[session_id] = state

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
