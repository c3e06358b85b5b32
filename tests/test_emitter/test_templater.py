"""Tests for placeholder templating (filepacker.emitter.templater).

Covers:
- C# string literal escaping
- Triggering tokens
- Brace doubling and token replacement order
- UTF-8 decoding of asset bytes
"""

from __future__ import annotations

import pytest

from filepacker.emitter.templater import (
    csharp_string_literal,
    decode_text,
    needs_templating,
    template_text,
)

pytestmark = pytest.mark.unit

QUALIFIED = "uwap.WebFramework.Parsers.DomainMain"


class TestCsharpStringLiteral:
    def test_plain_text(self):
        assert csharp_string_literal("hello") == '"hello"'

    def test_quotes_and_backslashes(self):
        assert csharp_string_literal('say "hi" \\ bye') == '"say \\"hi\\" \\\\ bye"'

    def test_whitespace_escapes(self):
        assert csharp_string_literal("a\r\n\tb") == '"a\\r\\n\\tb"'

    def test_nul_and_bell(self):
        assert csharp_string_literal("\0\a\b\f\v") == '"\\0\\a\\b\\f\\v"'

    def test_other_control_characters(self):
        assert csharp_string_literal("\x01\x7f") == '"\\u0001\\u007f"'

    def test_line_and_paragraph_separators(self):
        assert csharp_string_literal("\u2028\u2029") == '"\\u2028\\u2029"'

    def test_single_quote_untouched(self):
        assert csharp_string_literal("it's") == '"it\'s"'

    def test_non_ascii_kept(self):
        assert csharp_string_literal("grüß €") == '"grüß €"'


class TestNeedsTemplating:
    @pytest.mark.parametrize("token", ["[PATH_PREFIX]", "[PATH_HOME]", "[DOMAIN]"])
    def test_triggering_tokens(self, token):
        assert needs_templating(f"x {token} y") is True

    def test_domain_main_alone_does_not_trigger(self):
        assert needs_templating("[DOMAIN_MAIN]") is False

    def test_lowercase_token_ignored(self):
        assert needs_templating("[domain]") is False

    def test_other_brackets_ignored(self):
        assert needs_templating("[HOST] [PATH]") is False


class TestTemplateText:
    def test_no_tokens_returns_none(self):
        assert template_text("body{color:red}", QUALIFIED) is None

    def test_domain_with_braces(self):
        assert template_text("body{color:[DOMAIN]}", QUALIFIED) == '$"body{{color:{domain}}}"'

    def test_path_prefix(self):
        assert template_text("[PATH_PREFIX]/app.js", QUALIFIED) == '$"{pathPrefix}/app.js"'

    def test_path_home(self):
        result = template_text('<a href="[PATH_HOME]">', QUALIFIED)
        assert result == '$"<a href=\\"{(pathPrefix == "" ? "/" : pathPrefix)}\\">"'

    def test_domain_main_replaced_when_triggered(self):
        result = template_text("[DOMAIN] [DOMAIN_MAIN]", QUALIFIED)
        assert result == '$"{domain} {uwap.WebFramework.Parsers.DomainMain(domain)}"'

    def test_domain_main_unqualified(self):
        result = template_text("[DOMAIN_MAIN][PATH_PREFIX]", "Parsers.DomainMain")
        assert result == '$"{Parsers.DomainMain(domain)}{pathPrefix}"'

    def test_all_occurrences_replaced(self):
        result = template_text("[DOMAIN]/[DOMAIN]", QUALIFIED)
        assert result == '$"{domain}/{domain}"'

    def test_unknown_bracket_text_untouched(self):
        result = template_text("[DOMAIN] [VERSION]", QUALIFIED)
        assert result == '$"{domain} [VERSION]"'

    def test_multiline_content_escaped(self):
        result = template_text('a\n"[PATH_PREFIX]"', QUALIFIED)
        assert result == '$"a\\n\\"{pathPrefix}\\""'

    def test_existing_interpolation_syntax_is_literal(self):
        result = template_text("${x} [DOMAIN]", QUALIFIED)
        assert result == '$"${{x}} {domain}"'


class TestDecodeText:
    def test_utf8(self):
        assert decode_text("grüß".encode("utf-8")) == "grüß"

    def test_bom_stripped(self):
        assert decode_text(b"\xef\xbb\xbf[DOMAIN]") == "[DOMAIN]"

    def test_invalid_bytes_replaced(self):
        assert decode_text(b"a\xffb") == "a\ufffdb"
