"""Display names for IP address resources.

Names are either taken verbatim from ``spec.name`` or rendered from a template
such as ``{{.Tag}}-{{.Namespace}}-{{.Name}}``. Templates are compiled once, up
front, so a broken template is rejected before any resource is processed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from ipamkeeper.domain.model import IpAddress

TEMPLATE_FIELDS: Final[frozenset[str]] = frozenset({"Tag", "Namespace", "Name"})

_ACTION_RE: Final = re.compile(r"\{\{(.*?)\}\}", re.DOTALL)
_FIELD_RE: Final = re.compile(r"^\s*\.([A-Za-z_][A-Za-z0-9_]*)\s*$")


class NameTemplateError(ValueError):
    """Raised when a name template cannot be compiled."""


@dataclass(frozen=True, slots=True)
class _Literal:
    text: str


@dataclass(frozen=True, slots=True)
class _Field:
    name: str


@dataclass(frozen=True, slots=True)
class NameTemplate:
    source: str
    parts: tuple[_Literal | _Field, ...]

    @classmethod
    def parse(cls, source: str) -> NameTemplate:
        parts: list[_Literal | _Field] = []
        position = 0
        for match in _ACTION_RE.finditer(source):
            _append_literal(parts, source[position : match.start()])
            field_match = _FIELD_RE.match(match.group(1))
            if field_match is None:
                raise NameTemplateError(
                    f"unsupported action {match.group(0)!r} in template {source!r}"
                )
            field_name = field_match.group(1)
            if field_name not in TEMPLATE_FIELDS:
                known = ", ".join(sorted(TEMPLATE_FIELDS))
                raise NameTemplateError(
                    f"unknown field {field_name!r} in template {source!r} (known: {known})"
                )
            parts.append(_Field(field_name))
            position = match.end()
        _append_literal(parts, source[position:])
        if not parts:
            raise NameTemplateError("template is empty")
        return cls(source=source, parts=tuple(parts))

    def render(self, *, tag: str, namespace: str, name: str) -> str:
        values = {"Tag": tag, "Namespace": namespace, "Name": name}
        return "".join(
            part.text if isinstance(part, _Literal) else values[part.name] for part in self.parts
        )


def _append_literal(parts: list[_Literal | _Field], text: str) -> None:
    if not text:
        return
    # a stray "}}" outside an action is plain text
    if "{{" in text:
        raise NameTemplateError(f"unclosed action near {text!r}")
    parts.append(_Literal(text))


@dataclass(frozen=True, slots=True)
class NameResolver:
    """Derive the IPAM-facing name for a resource."""

    tag: str
    template: NameTemplate

    def name_for(self, resource: IpAddress) -> str:
        if resource.spec.name:
            return resource.spec.name
        return self.template.render(
            tag=self.tag,
            namespace=resource.namespace,
            name=resource.name,
        )
