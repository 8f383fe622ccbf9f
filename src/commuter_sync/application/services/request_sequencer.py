"""Per-class request ids and the staleness guard."""

from commuter_sync.domain.models.load_state import RequestKind
from commuter_sync.domain.models.sync_session import SyncSession

_UINT32_MASK = 0xFFFFFFFF


class RequestSequencer:
    """Issues request ids and tells live responses from stale ones.

    Each request class has its own 32-bit counter stored on the session. Ids
    start at 1; 0 means "nothing issued yet" and is never live. There is no
    cancel: issuing a new id is what supersedes the previous request.
    """

    def __init__(self, session: SyncSession) -> None:
        self._session = session

    def issue(self, kind: RequestKind) -> int:
        """Increment and return the counter of ``kind``."""
        next_id = (self._session.request_ids[kind] + 1) & _UINT32_MASK
        if next_id == 0:
            next_id = 1
        self._session.request_ids[kind] = next_id
        return next_id

    def live_id(self, kind: RequestKind) -> int:
        return self._session.request_ids[kind]

    def is_live(self, kind: RequestKind, request_id: int | None) -> bool:
        """True iff ``request_id`` is the last id issued for ``kind``."""
        live = self._session.request_ids[kind]
        return live != 0 and request_id == live
