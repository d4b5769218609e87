from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional

from quote_service.core.errors import UpstreamError

OutcomeKind = Literal["success", "not_found", "error"]


@dataclass(frozen=True)
class ProviderOutcome:
    """
    Result of one provider call.
      - success:   payload holds the validated response data
      - not_found: provider confirmed the instrument does not exist
      - error:     anything else; ``error`` holds the exception to raise
    """
    kind: OutcomeKind
    payload: Any = None
    error: Optional[UpstreamError] = None

    @classmethod
    def success(cls, payload: Any) -> "ProviderOutcome":
        return cls("success", payload=payload)

    @classmethod
    def not_found(cls) -> "ProviderOutcome":
        return cls("not_found")

    @classmethod
    def failed(cls, error: UpstreamError) -> "ProviderOutcome":
        return cls("error", error=error)

    @property
    def ok(self) -> bool:
        return self.kind == "success"

    @property
    def is_not_found(self) -> bool:
        return self.kind == "not_found"

    @property
    def is_error(self) -> bool:
        return self.kind == "error"
