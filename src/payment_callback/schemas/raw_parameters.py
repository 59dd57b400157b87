from __future__ import annotations

from collections.abc import Mapping
from typing import Iterator
from urllib.parse import parse_qsl

SENSITIVE_KEYS = frozenset({"signature", "vnp_SecureHash"})


class RawCallbackParameters(Mapping[str, str]):
    """Query parameters of one gateway redirect, decoded exactly once.

    Later occurrences of a key overwrite earlier ones. Values handed to the
    normalizer are already percent-decoded and must not be decoded again.
    """

    def __init__(self, params: Mapping[str, str] | None = None) -> None:
        self._params: dict[str, str] = {}
        for key, value in (params or {}).items():
            self._params[str(key).strip()] = "" if value is None else str(value).strip()

    @classmethod
    def from_query_string(cls, query: str) -> "RawCallbackParameters":
        """Parse a raw (still percent-encoded) query string.

        Garbled pairs are tolerated: a key without ``=`` maps to an empty
        string and invalid escapes are replaced rather than rejected.
        """
        query = (query or "").lstrip("?")
        pairs = parse_qsl(query, keep_blank_values=True, errors="replace")
        return cls({key: value for key, value in pairs if key.strip()})

    def __getitem__(self, key: str) -> str:
        return self._params[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __repr__(self) -> str:
        return f"RawCallbackParameters({self.redacted()!r})"

    def redacted(self) -> dict[str, str]:
        """Copy suitable for logging, with signatures masked."""
        return {
            key: ("***" if key in SENSITIVE_KEYS else value)
            for key, value in self._params.items()
        }
