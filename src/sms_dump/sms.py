from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Final

from pydantic import BaseModel

from .errors import BadRequest

ADD_FUNC: Final[str] = "add"

# Whitespace is space, tab, newline, form feed and carriage return; no vertical
# tab and no unicode spaces or digits.
TEXT_RE = re.compile(r"[a-zA-Z \t\n\f\r]+")
DIGITS_RE = re.compile(r"\d+", re.ASCII)

INVALID_FUNC: Final[str] = "Invalid 'func' parameter"
INVALID_FORMAT: Final[str] = "Invalid parameter format"


class SmsRecord(BaseModel):
    func: str
    source: str
    receiver: str
    info: str

    def to_document(self) -> dict[str, Any]:
        """Fresh dict for insertion (the driver adds `_id` to it in place)."""
        return {
            "func": self.func,
            "source": self.source,
            "receiver": self.receiver,
            "info": self.info,
        }


def _matches(pattern: re.Pattern[str], value: str) -> bool:
    return pattern.fullmatch(value) is not None


def parse_record(params: Mapping[str, str]) -> SmsRecord:
    """
    Validate query parameters and build the record to store.

    Missing parameters count as empty strings, which every pattern rejects.
    Raises BadRequest; a record is only returned when all four fields are valid.
    """
    func = params.get("func", "")
    source = params.get("source", "")
    receiver = params.get("receiver", "")
    info = params.get("info", "")

    if func != ADD_FUNC:
        raise BadRequest(INVALID_FUNC)

    if not (
        _matches(TEXT_RE, source) and _matches(DIGITS_RE, receiver) and _matches(TEXT_RE, info)
    ):
        raise BadRequest(INVALID_FORMAT)

    return SmsRecord(func=func, source=source, receiver=receiver, info=info)
