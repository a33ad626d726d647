"""Tests for link location and rewriting."""

from __future__ import annotations

import pytest

from notebuild.domain.links import (
    LinkKind,
    MarkdownLink,
    RewriteOptions,
    classify_target,
    count_links,
    extract_links,
    find_links,
    internal_href,
    markdown_links_to_html,
    parse_link,
    rewrite_link,
)

EXTERNAL_ATTRS = 'rel="noreferrer" target="_blank"'

# ---------------------------------------------------------------------------
# find_links
# ---------------------------------------------------------------------------


class TestFindLinks:
    def test_single_link(self) -> None:
        assert find_links("See [notes](other.md).") == ["[notes](other.md)"]

    def test_document_order(self) -> None:
        body = "[b](b.md) then [a](https://a.io) then [c](c.md)"
        assert find_links(body) == ["[b](b.md)", "[a](https://a.io)", "[c](c.md)"]

    def test_no_links(self) -> None:
        assert find_links("Plain text with no links at all.") == []

    def test_empty_body(self) -> None:
        assert find_links("") == []

    def test_link_with_title(self) -> None:
        body = 'Go to [Example](https://example.com "t") now'
        assert find_links(body) == ['[Example](https://example.com "t")']

    def test_target_with_spaces(self) -> None:
        assert find_links("[My Note](./sub/My Note.md)") == ["[My Note](./sub/My Note.md)"]

    def test_ignores_bare_brackets(self) -> None:
        assert find_links("This has [brackets] and (parens) apart.") == []

    def test_ignores_images(self) -> None:
        assert find_links("![diagram](diagram.png)") == []

    def test_image_next_to_link(self) -> None:
        body = "![img](a.png) and [link](b.md)"
        assert find_links(body) == ["[link](b.md)"]

    def test_nested_brackets_use_narrowest_match(self) -> None:
        body = "[see [note](x.md)]"
        assert find_links(body) == ["[note](x.md)"]

    def test_unbalanced_parens_not_matched(self) -> None:
        assert find_links("[broken](no-close.md") == []

    def test_balanced_parens_in_target(self) -> None:
        body = "See [Foo](https://en.wikipedia.org/wiki/Foo_(bar)) and [a](./a (copy).md)."
        assert find_links(body) == [
            "[Foo](https://en.wikipedia.org/wiki/Foo_(bar))",
            "[a](./a (copy).md)",
        ]

    def test_escaped_bracket_not_matched(self) -> None:
        assert find_links(r"\[not a link](x.md) but [this](y.md)") == ["[this](y.md)"]

    def test_wikilinks_ignored_by_default(self) -> None:
        assert find_links("Link to [[My Note]].") == []

    def test_wikilinks_when_enabled(self) -> None:
        body = "[[My Note]] and [md](x.md) and [[Other|shown]]"
        assert find_links(body, wikilinks=True) == [
            "[[My Note]]",
            "[md](x.md)",
            "[[Other|shown]]",
        ]

    def test_links_across_lines(self) -> None:
        body = "First [one](1.md).\nSecond [two](2.md)."
        assert len(find_links(body)) == 2


# ---------------------------------------------------------------------------
# parse_link / extract_links
# ---------------------------------------------------------------------------


class TestParseLink:
    def test_plain(self) -> None:
        link = parse_link("[notes](other.md)")
        assert link == MarkdownLink(raw="[notes](other.md)", text="notes", target="other.md")

    def test_double_quoted_title(self) -> None:
        link = parse_link('[Example](https://example.com "A title")')
        assert link.target == "https://example.com"
        assert link.title == "A title"

    def test_single_quoted_title(self) -> None:
        link = parse_link("[Example](https://example.com 'A title')")
        assert link.target == "https://example.com"
        assert link.title == "A title"

    def test_target_with_spaces_keeps_spaces(self) -> None:
        link = parse_link("[My Note](./sub/My Note.md)")
        assert link.text == "My Note"
        assert link.target == "./sub/My Note.md"
        assert link.title is None

    def test_empty_target(self) -> None:
        link = parse_link("[nothing]()")
        assert link.target == ""

    def test_wikilink(self) -> None:
        link = parse_link("[[My Note]]")
        assert link.text == "My Note"
        assert link.target == "My Note"

    def test_wikilink_with_display(self) -> None:
        link = parse_link("[[ My Note | the note ]]")
        assert link.text == "the note"
        assert link.target == "My Note"

    def test_angle_bracket_target_unwrapped(self) -> None:
        link = parse_link('[a](<My Note.md> "t")')
        assert link.target == "My Note.md"
        assert link.title == "t"

    def test_target_with_balanced_parens(self) -> None:
        link = parse_link("[Foo](https://en.wikipedia.org/wiki/Foo_(bar))")
        assert link.target == "https://en.wikipedia.org/wiki/Foo_(bar)"

    def test_rejects_non_link(self) -> None:
        with pytest.raises(ValueError, match="Not a link"):
            parse_link("just text")

    def test_rejects_surrounding_text(self) -> None:
        with pytest.raises(ValueError):
            parse_link("see [a](b.md)")

    def test_extract_links(self) -> None:
        links = extract_links("[a](a.md) [b](https://b.io)")
        assert [link.target for link in links] == ["a.md", "https://b.io"]


# ---------------------------------------------------------------------------
# classify_target / internal_href
# ---------------------------------------------------------------------------


class TestClassifyTarget:
    @pytest.mark.parametrize(
        "target",
        [
            "http://example.com",
            "https://example.com/path?q=1#frag",
            "ftp://files.example.com/pub/file.txt",
            "mailto:someone@example.com",
        ],
    )
    def test_external(self, target: str) -> None:
        assert classify_target(target) is LinkKind.EXTERNAL

    @pytest.mark.parametrize(
        "target",
        ["./x.md", "../y", "note", "sub/dir/Note.md", "", "http:no-authority"],
    )
    def test_internal(self, target: str) -> None:
        assert classify_target(target) is LinkKind.INTERNAL

    def test_pure(self) -> None:
        assert classify_target("note.md") == classify_target("note.md")


class TestInternalHref:
    def test_strips_directory_and_extension(self) -> None:
        assert internal_href("./sub/My Note.md") == "/my-note/"

    def test_bare_name(self) -> None:
        assert internal_href("note") == "/note/"

    def test_parent_directory(self) -> None:
        assert internal_href("../y") == "/y/"

    def test_windows_separators(self) -> None:
        assert internal_href("sub\\Other Note.md") == "/other-note/"

    def test_empty_target(self) -> None:
        assert internal_href("") == "/"


# ---------------------------------------------------------------------------
# rewrite_link
# ---------------------------------------------------------------------------


class TestRewriteLink:
    def test_external_with_title(self) -> None:
        html = rewrite_link('[Example](https://example.com "t")')
        assert html == (
            f'<a href="https://example.com" {EXTERNAL_ATTRS}>Example &#x2197;</a>'
        )

    def test_external_href_unmodified(self) -> None:
        html = rewrite_link("[Q](https://Example.com/A_Path?x=1)")
        assert 'href="https://Example.com/A_Path?x=1"' in html

    def test_internal(self) -> None:
        assert rewrite_link("[My Note](./sub/My Note.md)") == '<a href="/my-note/">My Note</a>'

    def test_internal_has_no_extra_attributes(self) -> None:
        html = rewrite_link("[n](note.md)")
        assert "target=" not in html
        assert "rel=" not in html

    def test_empty_target_does_not_raise(self) -> None:
        assert rewrite_link("[nothing]()") == '<a href="/">nothing</a>'

    def test_wikilink_is_internal(self) -> None:
        assert rewrite_link("[[My Note|the note]]") == '<a href="/my-note/">the note</a>'

    def test_custom_marker_and_attributes(self) -> None:
        options = RewriteOptions(external_marker="↗", external_attributes='rel="external"')
        html = rewrite_link("[x](https://x.io)", options=options)
        assert html == '<a href="https://x.io" rel="external">x ↗</a>'

    def test_empty_marker_leaves_text(self) -> None:
        options = RewriteOptions(external_marker="")
        html = rewrite_link("[x](https://x.io)", options=options)
        assert html.endswith(">x</a>")


# ---------------------------------------------------------------------------
# markdown_links_to_html
# ---------------------------------------------------------------------------


class TestMarkdownLinksToHtml:
    def test_end_to_end(self) -> None:
        body = "See [notes](other.md) or [site](https://x.io)."
        assert markdown_links_to_html(body) == (
            'See <a href="/other/">notes</a> or '
            f'<a href="https://x.io" {EXTERNAL_ATTRS}>site &#x2197;</a>.'
        )

    def test_body_without_links_unchanged(self) -> None:
        body = "# Heading\n\nNo links *here*, just [brackets] and (parens).\n"
        assert markdown_links_to_html(body) == body

    def test_deterministic(self) -> None:
        body = "[a](a.md) [b](https://b.io) [c](./C Note.md)"
        assert markdown_links_to_html(body) == markdown_links_to_html(body)

    def test_rewritten_html_is_left_alone(self) -> None:
        once = markdown_links_to_html("[a](https://a.io)")
        assert markdown_links_to_html(once) == once

    def test_images_untouched(self) -> None:
        body = "![alt](pic.png) and [pic](pic.png)"
        assert markdown_links_to_html(body) == '![alt](pic.png) and <a href="/pic/">pic</a>'

    def test_surrounding_text_untouched(self) -> None:
        body = "before [x](x.md) middle [y](y.md) after"
        assert markdown_links_to_html(body) == (
            'before <a href="/x/">x</a> middle <a href="/y/">y</a> after'
        )

    def test_balanced_parens_in_target(self) -> None:
        body = "[Foo](https://en.wikipedia.org/wiki/Foo_(bar)) [a](./a (copy).md)"
        assert markdown_links_to_html(body) == (
            f'<a href="https://en.wikipedia.org/wiki/Foo_(bar)" {EXTERNAL_ATTRS}>Foo &#x2197;</a>'
            ' <a href="/a-copy/">a</a>'
        )

    def test_escaped_bracket_left_as_text(self) -> None:
        body = r"\[literal](x.md)"
        assert markdown_links_to_html(body) == body

    def test_angle_bracket_target(self) -> None:
        assert markdown_links_to_html("[n](<My Note.md>)") == '<a href="/my-note/">n</a>'

    def test_wikilinks_option(self) -> None:
        body = "Read [[Other Note]]."
        assert markdown_links_to_html(body) == body
        rewritten = markdown_links_to_html(body, options=RewriteOptions(wikilinks=True))
        assert rewritten == 'Read <a href="/other-note/">Other Note</a>.'


class TestCountLinks:
    def test_counts_by_kind(self) -> None:
        body = "[a](a.md) [b](https://b.io) [c](c.md)"
        assert count_links(body) == {LinkKind.EXTERNAL: 1, LinkKind.INTERNAL: 2}

    def test_no_links(self) -> None:
        assert count_links("plain") == {LinkKind.EXTERNAL: 0, LinkKind.INTERNAL: 0}
