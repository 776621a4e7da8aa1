"""
Unit tests for AtlassianRenderer.

Most tests render real Markdown through the markdown-it event source and
compare the exact markup; state-machine details that Markdown cannot express
directly are driven with hand-built event lists.
"""

import io

import pytest

from core.errors import UnknownFlavorError
from wiki.events import (
    EndTag,
    Flavor,
    Heading,
    InlineCode,
    ListItem,
    Paragraph,
    StartTag,
    TagKind,
    TaskMarker,
    Text,
)
from wiki.renderer import TOC_MACRO, AtlassianRenderer, render, write_toc


class FailingSink:
    """Text sink that raises after a number of successful writes."""

    def __init__(self, fail_after: int):
        self.fail_after = fail_after
        self.writes: list[str] = []

    def write(self, text: str) -> int:
        if len(self.writes) >= self.fail_after:
            raise OSError("disk full")
        self.writes.append(text)
        return len(text)


class TestHeadings:
    def test_h1(self, render_markdown):
        assert render_markdown("# hello world") == "h1. hello world\n"

    def test_h2(self, render_markdown):
        assert render_markdown("## hello world") == "h2. hello world\n"

    @pytest.mark.parametrize("level", range(1, 7))
    @pytest.mark.parametrize("shift", [-6, -3, -1, 0, 1, 3, 6])
    def test_shifted_levels(self, render_markdown, level, shift):
        result = render_markdown(f"{'#' * level} text", heading_shift=shift)

        shifted = level + shift
        if shifted <= 0:
            assert result == ""
        elif shifted > 6:
            assert result == "text\n"
        else:
            assert result == f"h{shifted}. text\n"

    def test_shift_to_zero_drops_inline_content(self, render_markdown):
        assert render_markdown("# hello world `inline code`", heading_shift=-1) == ""

    def test_dropped_heading_keeps_following_paragraph(self, render_markdown):
        assert render_markdown("# gone\n\nkept", heading_shift=-1) == "\nkept\n"

    def test_heading_after_paragraph_gets_blank_line(self, render_markdown):
        assert render_markdown("para\n\n## Title") == "\npara\n\nh2. Title\n"

    def test_heading_beyond_six_after_paragraph(self, render_markdown):
        assert render_markdown("para\n\n###### Deep", heading_shift=1) == "\npara\n\nDeep\n"

    def test_suppressed_writes_do_not_touch_newline_tracking(self, render_events):
        events = [
            Text("a"),
            StartTag(Heading(level=1)),
            Text("hidden\n"),
            EndTag(TagKind.HEADING),
            StartTag(ListItem()),
        ]

        assert render_events(events, heading_shift=-1) == "a\n "


class TestBlocks:
    def test_paragraph(self, render_markdown):
        assert render_markdown("hello") == "\nhello\n"

    def test_blockquote(self, render_markdown):
        assert render_markdown("> hello blockquote") == "\n{quote}\nhello blockquote\n{quote}\n"

    def test_horizontal_rule(self, render_markdown):
        assert render_markdown("---") == "\n----\n"

    def test_softbreak_is_a_space(self, render_markdown):
        assert render_markdown("new\nline") == "\nnew line\n"

    def test_hardbreak_is_a_newline(self, render_markdown):
        assert render_markdown("new  \nline") == "\nnew\nline\n"


class TestCodeBlocks:
    def test_jira_language(self, render_markdown):
        markdown = '```java\nSystem.out.println("hello world")\n```'

        assert render_markdown(markdown) == '\n{code:java}\nSystem.out.println("hello world")\n{code}\n'

    def test_confluence_language(self, render_markdown):
        markdown = '```java\nSystem.out.println("hello world")\n```'

        result = render_markdown(markdown, flavor=Flavor.CONFLUENCE)

        assert result == '\n{code:language=java}\nSystem.out.println("hello world")\n{code}\n'

    def test_console_maps_to_bash(self, render_markdown):
        markdown = "```console\n$ ./console-test.sh\nshould be bash\n```"

        assert render_markdown(markdown) == "\n{code:bash}\n$ ./console-test.sh\nshould be bash\n{code}\n"

    def test_console_maps_to_bash_confluence(self, render_markdown):
        result = render_markdown("```console\nls\n```", flavor=Flavor.CONFLUENCE)

        assert result == "\n{code:language=bash}\nls\n{code}\n"

    def test_unknown_language_is_text(self, render_markdown):
        assert render_markdown("```foo\nshould be text\n```") == "\n{code:text}\nshould be text\n{code}\n"

    def test_unknown_language_is_text_confluence(self, render_markdown):
        result = render_markdown("```foo\nx\n```", flavor=Flavor.CONFLUENCE)

        assert result == "\n{code:language=text}\nx\n{code}\n"

    def test_language_is_lowercased(self, render_markdown):
        assert render_markdown("```Python\npass\n```") == "\n{code:python}\npass\n{code}\n"

    def test_only_first_info_word_counts(self, render_markdown):
        assert render_markdown("```js title=app.js\nx()\n```") == "\n{code:javascript}\nx()\n{code}\n"

    def test_fence_without_language(self, render_markdown):
        assert render_markdown("```\ncode\n```") == "\n{code}\ncode\n{code}\n"

    def test_indented_code_block(self, render_markdown):
        assert render_markdown("    code") == "\n{code}\ncode\n{code}\n"

    def test_body_is_not_escaped(self, render_markdown):
        assert render_markdown("```\n{a}*-\n```") == "\n{code}\n{a}*-\n{code}\n"


class TestInlineCode:
    def test_inline_code(self, render_markdown):
        assert render_markdown("some `inline code` here") == "\nsome {{inline code}} here\n"

    def test_inline_code_is_escaped(self, render_markdown):
        markdown = "`inline code with an asterisk *` like `rm -rf ./*.extension`"

        expected = "\n{{inline code with an asterisk \\*}} like {{rm -rf ./\\*.extension}}\n"
        assert render_markdown(markdown) == expected

    def test_leading_hyphen_is_escaped(self, render_markdown):
        assert render_markdown("a flag like `-r`") == "\na flag like {{\\-r}}\n"

    def test_space_inserted_before_trailing_word(self, render_markdown):
        assert render_markdown("`inline`s content") == "\n{{inline}} s content\n"

    def test_existing_space_is_not_doubled(self, render_markdown):
        assert render_markdown("`inline` s") == "\n{{inline}} s\n"

    def test_pending_space_cleared_by_spaced_text(self, render_events):
        events = [InlineCode("a"), Text(" b"), Text("c")]

        assert render_events(events) == "{{a}} bc"

    def test_text_is_written_verbatim(self, render_events):
        assert render_events([Text("{not escaped}*")]) == "{not escaped}*"


class TestLists:
    def test_unordered_list(self, render_markdown):
        markdown = "* item one\n* item two\n* item three"

        assert render_markdown(markdown) == "\n* item one\n* item two\n* item three\n"

    def test_ordered_list(self, render_markdown):
        markdown = "1. item one\n2. item two\n3. item three"

        assert render_markdown(markdown) == "\n# item one\n# item two\n# item three\n"

    def test_nested_unordered_list(self, render_markdown):
        markdown = "* item one\n* item two\n  * nested item one\n  * nested item two\n* item three"

        expected = "\n* item one\n* item two\n** nested item one\n** nested item two\n* item three\n"
        assert render_markdown(markdown) == expected

    def test_nested_ordered_in_unordered_list(self, render_markdown):
        markdown = "* item one\n* item two\n  1. nested item one\n  2. nested item two\n* item three"

        expected = "\n* item one\n* item two\n*# nested item one\n*# nested item two\n* item three\n"
        assert render_markdown(markdown) == expected

    def test_marker_stack_is_empty_after_list(self, event_source):
        renderer = AtlassianRenderer()

        renderer.render(event_source.events("* a\n  * b"), io.StringIO())

        assert renderer.list_marker_stack == []

    def test_task_markers_ignore_checked_state(self, render_events):
        events = [TaskMarker(checked=False), Text("todo"), TaskMarker(checked=True), Text("done")]

        assert render_events(events) == "\n[] todo\n[] done"


class TestTables:
    def test_header_and_body(self, render_markdown):
        markdown = "| header 1 | header 2 |\n|----------|----------|\n| item 1   | item 2   |"

        assert render_markdown(markdown) == "\n||header 1||header 2||\n|item 1|item 2|\n"

    def test_header_flag_reset_after_head(self, event_source):
        renderer = AtlassianRenderer()

        renderer.render(event_source.events("| a |\n|---|\n| b |"), io.StringIO())

        assert renderer.in_table_header is False


class TestInlineFormatting:
    def test_emphasis(self, render_markdown):
        assert render_markdown("this is _italics_ in a string") == "\nthis is _italics_ in a string\n"

    def test_bold(self, render_markdown):
        assert render_markdown("this is **bold** in a string") == "\nthis is *bold* in a string\n"

    def test_bold_italics(self, render_markdown):
        assert render_markdown("this is _**bold italics**_ in a string") == "\nthis is _*bold italics*_ in a string\n"

    def test_strikethrough(self, render_markdown):
        assert render_markdown("this is ~~strikethrough~~ in a string") == "\nthis is -strikethrough- in a string\n"


class TestLinksAndImages:
    def test_link(self, render_markdown):
        assert render_markdown("[link](https://example.com)") == "\n[link|https://example.com]\n"

    def test_link_with_formatted_text(self, render_markdown):
        assert render_markdown("[**bold** link](http://x.io)") == "\n[*bold* link|http://x.io]\n"

    def test_image(self, render_markdown):
        result = render_markdown("![img title](https://example.com/image.jpg)")

        assert result == '\n!https://example.com/image.jpg|title="img title",alt=""!\n'

    def test_image_caption_is_escaped(self, render_markdown):
        result = render_markdown("![a {b}](x.png)")

        assert result == '\n!x.png|title="a &#123;b&#125;",alt=""!\n'


class TestRawHtml:
    def test_details_without_summary(self, render_markdown):
        result = render_markdown("<details>Content</details>", flavor=Flavor.CONFLUENCE)

        assert result == "{expand}\nContent\n{expand}\n"

    def test_details_with_summary(self, render_markdown):
        result = render_markdown("<details><summary>Summary</summary>Content</details>", flavor=Flavor.CONFLUENCE)

        assert result == "{expand|title=Summary}\nContent\n{expand}\n"

    def test_details_split_around_markdown(self, render_markdown):
        markdown = "<details>\n<summary>More</summary>\n\nHidden *text*\n\n</details>"

        assert render_markdown(markdown) == "\nHidden _text_\n{expand|title=More}\n\n{expand}\n"

    def test_inline_html_is_transparent(self, render_markdown):
        assert render_markdown("text <b>bold</b> end") == "\ntext bold end\n"

    def test_unbalanced_html_at_end_is_dropped(self, render_markdown):
        assert render_markdown("<div>\nunclosed") == ""

    def test_accumulator_cleared_after_translation(self, event_source):
        renderer = AtlassianRenderer()

        renderer.render(event_source.events("<details>x</details>"), io.StringIO())

        assert renderer.html_accumulator == ""


class TestRendererContract:
    def test_write_toc(self):
        sink = io.StringIO()

        write_toc(sink)

        assert sink.getvalue() == "{toc}\n\n"
        assert TOC_MACRO == "{toc}\n\n"

    def test_write_toc_independent_of_rendering(self, event_source):
        sink = io.StringIO()
        render(event_source.events("# a\n\n* b"), sink)

        toc_sink = io.StringIO()
        write_toc(toc_sink)

        assert toc_sink.getvalue() == "{toc}\n\n"

    def test_output_is_deterministic(self, render_markdown):
        markdown = "# T\n\n* a\n  1. b\n\n| h |\n|---|\n| c |\n\n<details>d</details>"

        assert render_markdown(markdown) == render_markdown(markdown)

    def test_renderer_state_resets_between_runs(self, event_source):
        renderer = AtlassianRenderer()
        unclosed = [StartTag(Paragraph()), StartTag(Heading(level=1)), Text("x")]
        renderer.render(unclosed, io.StringIO())

        sink = io.StringIO()
        renderer.render(event_source.events("* a"), sink)

        assert sink.getvalue() == "\n* a\n"
        assert renderer.suppress_output is False

    def test_io_error_aborts_rendering(self, event_source):
        sink = FailingSink(fail_after=2)

        with pytest.raises(OSError, match="disk full"):
            render(event_source.events("first\n\nsecond"), sink)

        assert sink.writes == ["\n", "first"]

    def test_unknown_flavor_is_rejected(self):
        with pytest.raises(UnknownFlavorError):
            AtlassianRenderer(flavor="markdown")

    def test_plain_string_flavor_is_rejected(self):
        with pytest.raises(UnknownFlavorError):
            AtlassianRenderer(flavor="jira")

    def test_unsupported_event_raises(self, render_events):
        with pytest.raises(TypeError):
            render_events([object()])
