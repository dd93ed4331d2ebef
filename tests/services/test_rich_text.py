from app.services.rich_text import PrismicHtmlRenderer, resolve_link

renderer = PrismicHtmlRenderer()


def test_paragraphs_and_headings():
    html = renderer.as_html(
        [
            {"type": "heading2", "text": "Intro", "spans": []},
            {"type": "paragraph", "text": "Hello world", "spans": []},
        ]
    )
    assert html == "<h2>Intro</h2><p>Hello world</p>"


def test_text_is_escaped():
    html = renderer.as_html([{"type": "paragraph", "text": "<script>x</script> & co"}])
    assert html == "<p>&lt;script&gt;x&lt;/script&gt; &amp; co</p>"


def test_spans_wrap_their_ranges():
    html = renderer.as_html(
        [
            {
                "type": "paragraph",
                "text": "bold and italic",
                "spans": [
                    {"start": 0, "end": 4, "type": "strong"},
                    {"start": 9, "end": 15, "type": "em"},
                ],
            }
        ]
    )
    assert html == "<p><strong>bold</strong> and <em>italic</em></p>"


def test_overlapping_spans_produce_balanced_markup():
    html = renderer.as_html(
        [
            {
                "type": "paragraph",
                "text": "abcd",
                "spans": [
                    {"start": 0, "end": 3, "type": "strong"},
                    {"start": 1, "end": 4, "type": "em"},
                ],
            }
        ]
    )
    assert html == (
        "<p><strong>a</strong><strong><em>bc</em></strong><em>d</em></p>"
    )


def test_hyperlinks_render_web_and_document_links():
    html = renderer.as_html(
        [
            {
                "type": "paragraph",
                "text": "site post",
                "spans": [
                    {
                        "start": 0,
                        "end": 4,
                        "type": "hyperlink",
                        "data": {
                            "link_type": "Web",
                            "url": "https://example.com",
                            "target": "_blank",
                        },
                    },
                    {
                        "start": 5,
                        "end": 9,
                        "type": "hyperlink",
                        "data": {"link_type": "Document", "uid": "other"},
                    },
                ],
            }
        ]
    )
    assert '<a href="https://example.com" target="_blank" rel="noopener">site</a>' in html
    assert '<a href="/post/other">post</a>' in html


def test_unsafe_link_schemes_are_dropped():
    assert resolve_link({"link_type": "Web", "url": "javascript:alert(1)"}) is None
    html = renderer.as_html(
        [
            {
                "type": "paragraph",
                "text": "click",
                "spans": [
                    {
                        "start": 0,
                        "end": 5,
                        "type": "hyperlink",
                        "data": {"link_type": "Web", "url": "javascript:alert(1)"},
                    }
                ],
            }
        ]
    )
    assert html == "<p>click</p>"


def test_list_items_are_grouped():
    html = renderer.as_html(
        [
            {"type": "list-item", "text": "one"},
            {"type": "list-item", "text": "two"},
            {"type": "o-list-item", "text": "first"},
            {"type": "paragraph", "text": "after"},
        ]
    )
    assert html == (
        "<ul><li>one</li><li>two</li></ul><ol><li>first</li></ol><p>after</p>"
    )


def test_trailing_list_is_closed():
    assert renderer.as_html([{"type": "list-item", "text": "x"}]) == "<ul><li>x</li></ul>"


def test_images_and_line_breaks():
    html = renderer.as_html(
        [
            {"type": "image", "url": "https://img/a.png", "alt": 'a "quote"'},
            {"type": "preformatted", "text": "line1\nline2"},
        ]
    )
    assert '<img src="https://img/a.png" alt="a &#34;quote&#34;">' in html
    assert "<pre>line1<br />line2</pre>" in html


def test_out_of_range_spans_are_ignored():
    html = renderer.as_html(
        [{"type": "paragraph", "text": "abc", "spans": [{"start": 2, "end": 10, "type": "em"}]}]
    )
    assert html == "<p>abc</p>"


def test_as_text_joins_block_text():
    assert renderer.as_text([{"text": "a"}, {"type": "image"}, {"text": "b"}]) == "a b"
    assert renderer.as_html([]) == ""
