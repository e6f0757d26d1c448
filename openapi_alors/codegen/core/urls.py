"""
Server and route URL templating.

Converts OpenAPI ``{name}`` placeholders into a target's string
interpolation syntax and derives server descriptors.
"""

import re
from dataclasses import dataclass
from typing import List, Sequence

from .models import Replacement, ServerObject, TargetServer
from .naming import IdentifierPolicy, split_words

_PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")


@dataclass(frozen=True)
class UrlSyntax:
    """Interpolation placeholder of a target, ``{var}`` is the cased variable."""

    placeholder: str
    separator: str = "/"


def interpolate(policy: IdentifierPolicy, syntax: UrlSyntax, template: str) -> str:
    """Replace every ``{name}`` with the target placeholder for ``name``."""

    def _replace(match: "re.Match[str]") -> str:
        return syntax.placeholder.format(var=policy.variable_name(match.group(1)))

    return _PLACEHOLDER_RE.sub(_replace, template)


def render_url(policy: IdentifierPolicy, syntax: UrlSyntax, template: str) -> str:
    """Render a server URL; the result always ends with the separator."""
    url = interpolate(policy, syntax, template)
    if url.endswith(syntax.separator):
        return url
    return f"{url}{syntax.separator}"


def render_path(policy: IdentifierPolicy, syntax: UrlSyntax, template: str) -> str:
    """Render a route path relative to the server URL."""
    return interpolate(policy, syntax, template.lstrip(syntax.separator))


def resolve_servers(
    policy: IdentifierPolicy, syntax: UrlSyntax, servers: Sequence[ServerObject]
) -> List[TargetServer]:
    """
    Build server descriptors.

    A server without a description, or whose description has no word
    characters, is named ``default<index>``; that fallback is already a
    legal identifier and is not re-cased.
    """
    resolved = []
    for index, server in enumerate(servers):
        description = ""
        if server.description and split_words(server.description):
            description = policy.variable_name(server.description)
        if not description:
            description = f"default{index}"
        resolved.append(
            TargetServer(
                url=render_url(policy, syntax, server.url),
                description=description,
                variables=[policy.variable_name(name) for name in server.variables],
                replacements=[
                    Replacement(key=f"{{{name}}}", value=policy.variable_name(name))
                    for name in server.variables
                ],
            )
        )
    return resolved
