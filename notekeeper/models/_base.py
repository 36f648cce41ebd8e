from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict


def _env_extra_mode(default: str = "allow") -> str:
    """
    Determine the extra-mode from environment vars.

    NOTEKEEPER_EXTRA: allow|forbid|ignore
    Convenience booleans: "true/1/on" -> forbid (strict), "false/0/off" -> allow
    """
    raw = (os.getenv("NOTEKEEPER_EXTRA") or default).strip().lower()

    if raw in {"allow", "forbid", "ignore"}:
        return raw

    if raw in {"1", "true", "yes", "on", "strict"}:
        return "forbid"
    if raw in {"0", "false", "no", "off", "lenient"}:
        return "allow"

    return default


_EXTRA = _env_extra_mode()


class ApiModel(BaseModel):
    """
    Project-wide base model.

    Default is extra='allow' so fields the server adds are carried through
    unchanged; switch at runtime by setting an env var before import:
      export NOTEKEEPER_EXTRA=forbid   # or allow/ignore

    Instances are frozen: state updates replace whole values.
    """

    model_config = ConfigDict(
        extra=_EXTRA,  # 'allow' | 'forbid' | 'ignore'
        populate_by_name=True,
        frozen=True,
    )

    def to_payload(self) -> dict:
        """JSON-ready dict using wire (camelCase) names, ids omitted when unset."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = ["ApiModel", "_env_extra_mode"]
