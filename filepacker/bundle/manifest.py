"""Delimited-region patching of the project manifest.

The resource bundle is wired into the ``.csproj`` through a block bounded by
two XML comments.  ``ManifestRegion`` models that block and offers pure
insert/replace/remove operations over the manifest text, so nothing here
touches the file system.
"""

from __future__ import annotations

from dataclasses import dataclass

from filepacker.errors import ManifestAnchorNotFoundError

START_MARKER = "<!--PluginFilePacker start-->"
END_MARKER = "<!--PluginFilePacker end-->"
CLOSING_TAG = "</Project>"

BUNDLE_BODY = (
    '<ItemGroup><Compile Update="Properties\\PluginFiles.Designer.cs">'
    "<DesignTime>True</DesignTime><AutoGen>True</AutoGen>"
    "<DependentUpon>PluginFiles.resx</DependentUpon></Compile></ItemGroup>"
    '<ItemGroup><EmbeddedResource Update="Properties\\PluginFiles.resx">'
    "<Generator>ResXFileCodeGenerator</Generator>"
    "<LastGenOutput>PluginFiles.Designer.cs</LastGenOutput>"
    "</EmbeddedResource></ItemGroup>"
)


@dataclass(frozen=True)
class ManifestRegion:
    """A marker-delimited block inside a manifest."""

    start: str = START_MARKER
    end: str = END_MARKER
    body: str = BUNDLE_BODY

    def render(self) -> str:
        """Return the complete region: start marker, body, end marker."""
        return f"{self.start}{self.body}{self.end}"

    def find(self, text: str) -> tuple[int, int] | None:
        """Locate an existing region.

        The region runs from the first start marker to the last end marker
        that follows it.

        Returns:
            ``(begin, stop)`` slice bounds, or ``None`` if no complete region
            exists.
        """
        begin = text.find(self.start)
        if begin == -1:
            return None
        end = text.rfind(self.end, begin + len(self.start))
        if end == -1:
            return None
        return begin, end + len(self.end)

    def is_current(self, text: str) -> bool:
        """``True`` if *text* already contains this exact region."""
        return self.render() in text

    def apply(self, text: str, *, source: str = "manifest") -> str:
        """Insert the region or bring an existing one up to date.

        * An exact copy already present leaves *text* unchanged.
        * An existing region (or a lone start marker) is replaced in place.
        * Otherwise the region goes on its own line before the last
          ``</Project>``, indented two spaces deeper than the closing tag.

        Args:
            text: Current manifest text.
            source: Manifest name used in the error message.

        Raises:
            ManifestAnchorNotFoundError: If there is neither a marker nor a
                closing ``</Project>`` tag.
        """
        if self.is_current(text):
            return text
        rendered = self.render()

        begin = text.find(self.start)
        if begin != -1:
            span = self.find(text)
            stop = span[1] if span else begin + len(self.start)
            return text[:begin] + rendered + text[stop:]

        close = text.rfind(CLOSING_TAG)
        if close == -1:
            raise ManifestAnchorNotFoundError(source)
        before, after = text[:close], text[close + len(CLOSING_TAG):]

        newline = before.rfind("\n")
        indent = before[newline + 1:]
        if newline == -1 or indent.strip():
            return before + rendered + CLOSING_TAG + after
        eol = "\r\n" if before[:newline].endswith("\r") else "\n"
        return (
            before[: newline + 1]
            + indent + "  " + rendered + eol
            + indent + CLOSING_TAG + after
        )

    def remove(self, text: str) -> tuple[str, bool]:
        """Remove an existing region.

        When the region is the only content of its line, the whole line is
        dropped so that ``remove(apply(text))`` restores *text*.

        Returns:
            ``(new_text, removed)``.
        """
        span = self.find(text)
        if span is None:
            return text, False
        begin, stop = span

        line_start = text.rfind("\n", 0, begin) + 1
        line_end = text.find("\n", stop)
        tail_end = len(text) if line_end == -1 else line_end
        if not text[line_start:begin].strip() and not text[stop:tail_end].strip():
            if line_end == -1:
                return text[:line_start], True
            return text[:line_start] + text[line_end + 1:], True
        return text[:begin] + text[stop:], True


BUNDLE_REGION = ManifestRegion()
