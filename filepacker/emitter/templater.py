"""Placeholder substitution for text assets.

A text asset that mentions ``[PATH_PREFIX]``, ``[PATH_HOME]`` or ``[DOMAIN]``
is embedded as a C# interpolated string, so the placeholders resolve at
runtime from the ``pathPrefix`` and ``domain`` arguments of ``GetFile``.
``[DOMAIN_MAIN]`` is substituted as well but does not trigger templating on
its own.
"""

from __future__ import annotations

import unicodedata

PATH_PREFIX = "[PATH_PREFIX]"
PATH_HOME = "[PATH_HOME]"
DOMAIN = "[DOMAIN]"
DOMAIN_MAIN = "[DOMAIN_MAIN]"

TRIGGER_TOKENS: tuple[str, ...] = (PATH_PREFIX, PATH_HOME, DOMAIN)

_SIMPLE_ESCAPES: dict[str, str] = {
    "\0": "\\0",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}

# Unicode categories a C# literal must not contain verbatim.
_ESCAPED_CATEGORIES = frozenset({"Cc", "Cs", "Cn", "Zl", "Zp"})


def csharp_string_literal(value: str) -> str:
    r"""Format *value* as a quoted C# regular string literal.

    ``say "hi"`` followed by a newline becomes ``"say \"hi\"\n"``.
    """
    out = ['"']
    for char in value:
        simple = _SIMPLE_ESCAPES.get(char)
        if simple is not None:
            out.append(simple)
        elif unicodedata.category(char) in _ESCAPED_CATEGORIES:
            code = ord(char)
            out.append(f"\\u{code:04x}" if code <= 0xFFFF else f"\\U{code:08x}")
        else:
            out.append(char)
    out.append('"')
    return "".join(out)


def needs_templating(content: str) -> bool:
    """Return ``True`` if *content* contains a triggering placeholder."""
    return any(token in content for token in TRIGGER_TOKENS)


def decode_text(raw: bytes) -> str:
    """Decode asset bytes as UTF-8, dropping a BOM and replacing bad bytes."""
    return raw.decode("utf-8-sig", errors="replace")


def template_text(content: str, domain_main_call: str) -> str | None:
    """Rewrite *content* into a C# interpolated string literal.

    Args:
        content: Decoded text of the asset.
        domain_main_call: The (possibly namespace-qualified) name of the
            ``DomainMain`` helper, e.g. ``"uwap.WebFramework.Parsers.DomainMain"``.

    Returns:
        The literal including the leading ``$``, or ``None`` when the content
        contains none of the triggering placeholders.
    """
    if not needs_templating(content):
        return None
    literal = csharp_string_literal(content).replace("{", "{{").replace("}", "}}")
    literal = (
        literal.replace(PATH_PREFIX, "{pathPrefix}")
        .replace(PATH_HOME, '{(pathPrefix == "" ? "/" : pathPrefix)}')
        .replace(DOMAIN, "{domain}")
        .replace(DOMAIN_MAIN, "{" + domain_main_call + "(domain)}")
    )
    return "$" + literal
