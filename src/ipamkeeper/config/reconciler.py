"""Reconciler identity and naming configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from ipamkeeper.domain.naming import NameTemplate, NameTemplateError

from .env import env_flag, optional_env_var, require_env_vars
from .errors import ConfigurationError

DEFAULT_NAME_TEMPLATE: Final[str] = "{{.Tag}}-{{.Namespace}}-{{.Name}}"


@dataclass(frozen=True)
class ReconcilerConfig:
    """Identity of this reconciler instance.

    ``tag`` feeds the name template, ``provider`` is stamped into the status of
    every address this instance assigns and decides ownership on deletion.
    """

    tag: str
    provider: str
    name_template: NameTemplate
    release_on_persist_failure: bool = False


def compile_name_template(source: str) -> NameTemplate:
    """Compile ``source`` or raise :class:`ConfigurationError`."""

    try:
        return NameTemplate.parse(source)
    except NameTemplateError as exc:
        raise ConfigurationError(f"Invalid IPAM_NAME_TEMPLATE: {exc}") from exc


def get_reconciler_config() -> ReconcilerConfig:
    values = require_env_vars(("IPAM_TAG", "IPAM_PROVIDER"))
    template_source = optional_env_var("IPAM_NAME_TEMPLATE") or DEFAULT_NAME_TEMPLATE
    return ReconcilerConfig(
        tag=values["IPAM_TAG"],
        provider=values["IPAM_PROVIDER"],
        name_template=compile_name_template(template_source),
        release_on_persist_failure=env_flag("IPAM_RELEASE_ON_PERSIST_FAILURE"),
    )
