"""local command parser: short imperative lines -> operations.

one command per line (or separated by semicolons). the grammar is portuguese,
matching the wording users of the tool type:

    renomear 3.P.1 para Projeto I&C revisado
    mover 2.K.1 para 2.M
    adicionar filho em 4.L: Relatório de segurança
    remover 1.C.1
    documento 1.P.1 https://example.org/doc.pdf
    gerar eap Microrreator de pesquisa 50kW

lines that match nothing are skipped. an empty result means there is no local
interpretation and the prompt should go to the remote assistant.
"""

from __future__ import annotations

import re
from typing import Optional

from .operations import Add, AddDoc, GenerateTree, Move, Operation, Remove, Rename


# --- configuration ---

ONLINE_PREFIX = "/online"

_KEY = r"([\w.]+)"
_SEPARATORS = re.compile(r"\n|;+")

_RENAME = re.compile(rf"^renome(?:ar|ia|ie)?\s+{_KEY}\s+para\s+(.+)$", re.IGNORECASE)
_MOVE = re.compile(rf"^mover\s+{_KEY}\s+para\s+{_KEY}$", re.IGNORECASE)
_ADD = re.compile(rf"^adicion(?:ar|e)?\s+filho\s+em\s+{_KEY}\s*[:\-]\s*(.+)$", re.IGNORECASE)
_REMOVE = re.compile(rf"^remover\s+{_KEY}$", re.IGNORECASE)
_ADD_DOC = re.compile(rf"^documento\s+{_KEY}\s+(.+)$", re.IGNORECASE)
_GENERATE = re.compile(r"^gerar\s+eap\b\s*(.*)$", re.IGNORECASE)


def parse_line(line: str) -> Optional[Operation]:
    """parse a single command. returns None if the line is not a command."""
    line = line.strip()

    m = _RENAME.match(line)
    if m:
        return Rename(key=m.group(1), label=m.group(2).strip())
    m = _MOVE.match(line)
    if m:
        return Move(key=m.group(1), new_parent=m.group(2))
    m = _ADD.match(line)
    if m:
        return Add(parent=m.group(1), label=m.group(2).strip())
    m = _REMOVE.match(line)
    if m:
        return Remove(key=m.group(1))
    m = _ADD_DOC.match(line)
    if m:
        return AddDoc(key=m.group(1), doc=m.group(2).strip())
    m = _GENERATE.match(line)
    if m:
        return GenerateTree(description=m.group(1).strip() or None)
    return None


def parse_commands(text: str) -> list[Operation]:
    """parse every recognizable command in `text`, in order."""
    lines = [s.strip() for s in _SEPARATORS.split(text)]
    ops = []
    for line in lines:
        if not line:
            continue
        op = parse_line(line)
        if op is not None:
            ops.append(op)
    return ops


def strip_online_prefix(text: str) -> tuple[bool, str]:
    """detect an explicit request for the remote assistant.

    returns (forced, remaining prompt).
    """
    stripped = text.strip()
    if stripped.lower().startswith(ONLINE_PREFIX):
        rest = stripped[len(ONLINE_PREFIX):]
        if not rest or rest[0].isspace():
            return True, rest.strip()
    return False, stripped
