"""Client-side authentication state."""
from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging

logger = logging.getLogger(__name__)

DEFAULT_SESSION_PATH = Path.home() / ".todo_api" / "session.json"


class AuthSession:
    """
    Token and user held by the client between commands.

    Set after a successful login, cleared on logout or as soon as the
    server rejects the token. When a path is given the state is mirrored to
    a JSON file so it survives restarts.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else None
        self.token: Optional[str] = None
        self.user: Optional[Dict[str, Any]] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def set(self, token: str, user: Dict[str, Any]) -> None:
        self.token = token
        self.user = user
        self._save()

    def clear(self) -> None:
        self.token = None
        self.user = None
        if self.path is not None and self.path.exists():
            self.path.unlink()

    def load(self) -> "AuthSession":
        """Restore state from disk; a missing or unreadable file means logged out."""
        if self.path is None or not self.path.exists():
            return self

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.warning("Ignoring unreadable session file %s", self.path)
            return self

        self.token = data.get("token") or None
        self.user = data.get("user")
        return self

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"token": self.token, "user": self.user}), encoding="utf-8")
        try:
            self.path.chmod(0o600)
        except OSError:
            logger.debug("Could not restrict permissions on %s", self.path)
