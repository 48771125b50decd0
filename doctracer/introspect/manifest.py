"""Introspector reading symbol manifests written by a host introspection tool.

A manifest is a JSON or YAML document (``*.symbols.json``, ``*.symbols.yml``,
``*.symbols.yaml``) holding a ``symbols`` list::

    symbols:
      - name: Example\\Acme
        kind: class
        file: Library/Acme.php
        parent: Example\\ParentClass
        interfaces: [Countable]
        doc: |
          /** Summary. */
        constants:
          - {name: VERSION, modifiers: [public], value: "0.1.0"}
        properties:
          - {name: priority, modifiers: [public], type: int, default: "0"}
        methods:
          - name: hello
            type: string
            params:
              - {name: name, type: string}

Members carry either ``default`` (an already printed token) or ``value`` (a
raw value printed by :func:`doctracer.values.print_value`). Without either
the member has no default; a null ``value`` is an explicit null default.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

import yaml

from ..docblock.parser import TagParser
from ..logging import get_logger
from ..models import ClassRecord, MemberKind, MemberRecord, ParamRecord, SymbolKind
from ..values import format_type, print_value
from .base import Introspector

MANIFEST_SUFFIXES = (".symbols.json", ".symbols.yml", ".symbols.yaml")
NAMESPACE_SEPARATOR = "\\"

_MEMBER_SECTIONS: Tuple[Tuple[str, MemberKind], ...] = (
    ("constants", MemberKind.CONSTANT),
    ("properties", MemberKind.PROPERTY),
    ("methods", MemberKind.METHOD),
)


class ManifestError(ValueError):
    """Raised when a symbol manifest cannot be read or has an invalid shape."""


class ManifestIntrospector(Introspector):
    """Reads class records from symbol manifest files."""

    def __init__(self, parser: TagParser | None = None) -> None:
        self.parser = parser or TagParser()
        self.logger = get_logger("introspect.manifest")

    def supports(self, path: Path) -> bool:
        return path.name.lower().endswith(MANIFEST_SUFFIXES)

    def inspect(self, path: Path) -> Iterator[ClassRecord]:
        payload = _read_manifest(path)
        if isinstance(payload, dict):
            symbols = payload.get("symbols", [])
        else:
            symbols = payload
        if not isinstance(symbols, list):
            raise ManifestError(f"{path}: 'symbols' must be a list")

        for index, entry in enumerate(symbols):
            if not isinstance(entry, dict):
                raise ManifestError(f"{path}: symbol #{index} must be a mapping")
            yield self._class_record(entry, path, index)

    def _class_record(self, entry: Dict[str, Any], path: Path, index: int) -> ClassRecord:
        fqn = _require_name(entry, path, f"symbol #{index}").lstrip(NAMESPACE_SEPARATOR)
        namespace, _, short_name = fqn.rpartition(NAMESPACE_SEPARATOR)
        if "namespace" in entry:
            namespace = str(entry["namespace"] or "").strip(NAMESPACE_SEPARATOR)

        kind_value = str(entry.get("kind") or SymbolKind.CLASS.value).lower()
        try:
            kind = SymbolKind(kind_value)
        except ValueError as exc:
            raise ManifestError(f"{path}: {fqn} has unknown kind {kind_value!r}") from exc

        source = entry.get("file")
        source_file = str((path.parent / str(source)).resolve()) if source else str(path.resolve())

        members: Dict[MemberKind, Dict[str, MemberRecord]] = {}
        for section, member_kind in _MEMBER_SECTIONS:
            records: Dict[str, MemberRecord] = {}
            for member_entry in _iter_member_entries(entry.get(section), path, fqn, section):
                record = self._member_record(member_entry, member_kind, path, fqn)
                records[record.name] = record
            members[member_kind] = records

        record = ClassRecord(
            short_name=short_name,
            fully_qualified_name=fqn,
            namespace=namespace,
            source_file=source_file,
            kind=kind,
            modifiers=tuple(_as_str_list(entry.get("modifiers"))),
            parent_fully_qualified_name=str(entry.get("parent") or "").lstrip(NAMESPACE_SEPARATOR),
            implemented_interfaces=tuple(
                name.lstrip(NAMESPACE_SEPARATOR) for name in _as_str_list(entry.get("interfaces"))
            ),
            docblock=self.parser.parse(_as_optional_str(entry.get("doc"))),
            constants=members[MemberKind.CONSTANT],
            properties=members[MemberKind.PROPERTY],
            methods=members[MemberKind.METHOD],
        )
        self.logger.debug(
            "Read %s (%d constants, %d properties, %d methods)",
            fqn,
            len(record.constants),
            len(record.properties),
            len(record.methods),
        )
        return record

    def _member_record(
        self, entry: Dict[str, Any], kind: MemberKind, path: Path, owner: str
    ) -> MemberRecord:
        name = _require_name(entry, path, f"{kind.value} of {owner}")
        params: Tuple[ParamRecord, ...] = ()
        if kind is MemberKind.METHOD:
            params = tuple(
                ParamRecord(
                    name=_require_name(param, path, f"parameter of {owner}::{name}").lstrip("$"),
                    type_annotation=_type_of(param),
                    default_printed=_default_of(param),
                )
                for param in _iter_member_entries(entry.get("params"), path, owner, "params")
            )
        return MemberRecord(
            name=name.lstrip("$"),
            kind=kind,
            modifiers=tuple(_as_str_list(entry.get("modifiers"))),
            type_annotation=_type_of(entry),
            default_value_printed="" if kind is MemberKind.METHOD else _default_of(entry),
            docblock=self.parser.parse(_as_optional_str(entry.get("doc"))),
            params=params,
        )


def _read_manifest(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        if path.name.lower().endswith(".json"):
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ManifestError(f"Failed to parse {path}: {exc}") from exc


def _iter_member_entries(
    value: Any, path: Path, owner: str, section: str
) -> Iterable[Dict[str, Any]]:
    if value is None:
        return []
    if isinstance(value, dict):
        # mapping form: name -> attributes
        entries: List[Dict[str, Any]] = []
        for name, attributes in value.items():
            if attributes is not None and not isinstance(attributes, dict):
                raise ManifestError(f"{path}: {owner} '{section}.{name}' must be a mapping")
            attributes = dict(attributes or {})
            attributes.setdefault("name", name)
            entries.append(attributes)
        return entries
    if isinstance(value, list):
        for item in value:
            if not isinstance(item, dict):
                raise ManifestError(f"{path}: entries of {owner} '{section}' must be mappings")
        return value
    raise ManifestError(f"{path}: {owner} '{section}' must be a list or mapping")


def _require_name(entry: Dict[str, Any], path: Path, where: str) -> str:
    name = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ManifestError(f"{path}: {where} is missing 'name'")
    return name.strip()


def _type_of(entry: Dict[str, Any]) -> str:
    value = entry.get("type")
    if value is not None and not isinstance(value, (str, list)):
        value = str(value)
    return format_type(value, bool(entry.get("nullable")))


def _default_of(entry: Dict[str, Any]) -> str:
    if "default" in entry:
        token = entry["default"]
        if token is None:
            return "null"
        if isinstance(token, bool):
            return "true" if token else "false"
        return str(token)
    if "value" in entry:
        return print_value(entry["value"])
    return ""


def _as_optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, list):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["MANIFEST_SUFFIXES", "ManifestError", "ManifestIntrospector"]
