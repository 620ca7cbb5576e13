"""Variable store consulted by the recognition service.

Holds `symbol -> value` bindings produced by assignment results. The
orchestrator is the only writer; the whole mapping travels with each request.
"""
from __future__ import annotations

from typing import Dict, Optional


class VariableStore:
    def __init__(self) -> None:
        self._bindings: Dict[str, str] = {}

    def get(self, symbol: str) -> Optional[str]:
        return self._bindings.get(symbol)

    def set(self, symbol: str, value: str) -> None:
        """Bind `symbol`, replacing any earlier value."""
        self._bindings[symbol] = value

    def reset(self) -> None:
        self._bindings.clear()

    def as_dict(self) -> Dict[str, str]:
        """Return a copy suitable for a request payload."""
        return dict(self._bindings)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        return f"VariableStore({self._bindings!r})"
