from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Union


@dataclass(frozen=True)
class Ok:
    data: Any = None
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class Err:
    kind: str
    message: str
    status: Optional[int] = None
    ok: ClassVar[bool] = False


Result = Union[Ok, Err]


def from_envelope(status: int, body) -> Result:
    """Turn a ``{success, data | error, code}`` response body into a Result."""
    if not isinstance(body, dict):
        return Err("BAD_RESPONSE", "Response body is not a JSON object", status)
    if body.get("success"):
        return Ok(body.get("data"))
    return Err(body.get("code") or "ERROR", body.get("error") or "Request failed", status)
