"""Deterministic resource keys derived from relative asset paths.

A key doubles as the member name of the generated ``PluginFiles`` accessor,
so it must be a valid C# identifier.  The encoding keeps ASCII letters and
digits and writes every other character as ``_<hex>_``, which makes it
reversible and therefore injective.
"""

from __future__ import annotations

from pathlib import Path

from filepacker.errors import DuplicateAssetKeyError

KEY_PREFIX = "File_"


def derive_key(relative_path: str) -> str:
    """Return the resource key for *relative_path*.

    Examples::

        derive_key("/logo.png")    -> "File__2f_logo_2e_png"
        derive_key("/img/a_b.gif") -> "File__2f_img_2f_a_5f_b_2e_gif"
    """
    parts = [KEY_PREFIX]
    for char in relative_path:
        if char.isascii() and char.isalnum():
            parts.append(char)
        else:
            parts.append(f"_{ord(char):x}_")
    return "".join(parts)


def decode_key(key: str) -> str:
    """Invert :func:`derive_key`.

    Raises:
        ValueError: If *key* was not produced by :func:`derive_key`.
    """
    if not key.startswith(KEY_PREFIX):
        raise ValueError(f"Not a resource key: {key!r}")
    body = key[len(KEY_PREFIX):]
    out: list[str] = []
    i = 0
    while i < len(body):
        char = body[i]
        if char != "_":
            out.append(char)
            i += 1
            continue
        end = body.find("_", i + 1)
        if end == -1:
            raise ValueError(f"Unterminated escape in resource key: {key!r}")
        out.append(chr(int(body[i + 1:end], 16)))
        i = end + 1
    return "".join(out)


class AssetKeyRegistry:
    """Tracks the relative paths and keys handed out during one run.

    Both must stay unique: a repeated relative path would produce two switch
    arms for the same case, and a repeated key would silently overwrite a
    bundled resource.
    """

    def __init__(self) -> None:
        self._paths: dict[str, Path] = {}
        self._keys: dict[str, Path] = {}

    def register(self, relative_path: str, source: Path) -> str:
        """Record *relative_path* and return its key.

        Raises:
            DuplicateAssetKeyError: If the path or its key was already seen.
        """
        if relative_path in self._paths:
            raise DuplicateAssetKeyError(relative_path, self._paths[relative_path], source)
        key = derive_key(relative_path)
        if key in self._keys:
            raise DuplicateAssetKeyError(key, self._keys[key], source)
        self._paths[relative_path] = source
        self._keys[key] = source
        return key
