"""Plain-data export of the catalog for JSON output."""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping

from ..docblock.tags import DocTag, GenericTag, ParamTag, TagClass, TypedTag
from ..models import ClassRecord, DocBlock, MemberRecord


def catalog_as_dict(snapshot: Mapping[str, Mapping[str, ClassRecord]]) -> Dict[str, Any]:
    """Return namespace -> class -> fields as JSON-serialisable dictionaries."""
    return {
        namespace: {name: class_as_dict(record) for name, record in classes.items()}
        for namespace, classes in snapshot.items()
    }


def catalog_as_json(snapshot: Mapping[str, Mapping[str, ClassRecord]]) -> str:
    return json.dumps(catalog_as_dict(snapshot), indent=2, ensure_ascii=False) + "\n"


def class_as_dict(record: ClassRecord) -> Dict[str, Any]:
    return {
        "name": record.short_name,
        "fullname": record.fully_qualified_name,
        "kind": record.kind.value,
        "modifiers": list(record.modifiers),
        "file": record.source_file,
        "extend": record.parent_fully_qualified_name,
        "interfaces": list(record.implemented_interfaces),
        "docblock": docblock_as_dict(record.docblock),
        "constants": {name: member_as_dict(member) for name, member in record.constants.items()},
        "properties": {name: member_as_dict(member) for name, member in record.properties.items()},
        "methods": {name: member_as_dict(member) for name, member in record.methods.items()},
    }


def member_as_dict(member: MemberRecord) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "name": member.name,
        "modifiers": list(member.modifiers),
        "type": member.type_annotation,
        "value": member.default_value_printed,
        "docblock": docblock_as_dict(member.docblock),
    }
    if member.params:
        data["params"] = [
            {"name": param.name, "type": param.type_annotation, "default": param.default_printed}
            for param in member.params
        ]
    return data


def docblock_as_dict(docblock: DocBlock) -> Dict[str, Any]:
    return {
        "summary": docblock.summary,
        "description": docblock.description,
        "tags": {kind: [tag_as_dict(tag) for tag in tags] for kind, tags in docblock.tags.items()},
    }


def tag_as_dict(tag: DocTag) -> Dict[str, Any]:
    if isinstance(tag, ParamTag):
        return {
            "class": TagClass.PARAM.value,
            "name": f"@{tag.name}",
            "type": tag.type,
            "variable": tag.signature,
            "description": tag.description,
            "render": tag.rendered,
        }
    if isinstance(tag, TypedTag):
        return {
            "class": TagClass.TYPED.value,
            "name": f"@{tag.name}",
            "type": tag.type,
            "description": tag.description,
            "render": tag.rendered,
        }
    if isinstance(tag, GenericTag):
        return {"class": TagClass.GENERIC.value, "name": f"@{tag.name}", "render": tag.rendered}
    raise TypeError(f"Unsupported tag variant: {type(tag).__name__}")


__all__ = ["catalog_as_dict", "catalog_as_json", "class_as_dict", "docblock_as_dict", "tag_as_dict"]
