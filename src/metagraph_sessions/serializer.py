"""
Deterministic serialization.

Two encodings leave this module:

* ``signable_payload``: the bytes an external wallet signs: the values of the
  command's ``signed_fields`` concatenated in declaration order, no names and
  no separators, integers as decimal strings. Verifiers rebuild the same bytes,
  so the per-command order must never change.
* ``stable_json``: the whole command in wire form, whitespace-free, used as
  the input to the validator proof.
"""

import json
from typing import Any

from metagraph_sessions.models.commands import Command


def _field_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"Cannot sign field of type {type(value).__name__}")


def signable_text(command: Command) -> str:
    return "".join(_field_text(getattr(command, name)) for name in command.signed_fields)


def signable_payload(command: Command) -> bytes:
    return signable_text(command).encode("utf-8")


def stable_json(command: Command) -> str:
    return json.dumps(command.to_wire(), separators=(",", ":"), ensure_ascii=False)
