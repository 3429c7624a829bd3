from webfetch.content import (
    count_image_tags,
    count_links,
    extract_image_sources,
    extract_page_stats,
)

PAGE = """<html><body>
<a href="https://one.test/">one</a>
<a href="http://two.test/">two</a>
<a href="/local">local</a>
<a href="#top">top</a>
<img src="/img/logo.png" alt="logo">
<p>An <img class="x" src="https://cdn.test/pic.jpg"> inline image.</p>
</body></html>"""


def test_count_links_covers_both_schemes():
    assert count_links(PAGE) == 2


def test_count_links_ignores_relative_links():
    assert count_links('<a href="/x">x</a><a href="page.html">y</a>') == 0


def test_no_images():
    stats = extract_page_stats("<p>nothing here</p>", collect_sources=True)
    assert stats.images == 0
    assert stats.image_sources == []


def test_adjacent_images_are_each_counted():
    text = '<img src="a.png"><img src="b.png"><img src="c.png">'
    assert count_image_tags(text) == 3
    assert extract_image_sources(text) == ["a.png", "b.png", "c.png"]


def test_duplicate_sources_are_kept_in_order():
    text = '<img src="a.png"><img src="b.png"><img src="a.png">'
    assert extract_image_sources(text) == ["a.png", "b.png", "a.png"]


def test_data_src_is_not_src():
    assert extract_image_sources('<img data-src="lazy.png" src="real.png">') == ["real.png"]


def test_stats_without_sources_is_a_tag_count():
    stats = extract_page_stats(PAGE)
    assert stats.num_links == 2
    assert stats.images == 2
    assert stats.image_sources == []


def test_stats_with_sources():
    stats = extract_page_stats(PAGE, collect_sources=True)
    assert stats.images == 2
    assert stats.image_sources == ["/img/logo.png", "https://cdn.test/pic.jpg"]


def test_tag_count_includes_images_without_src():
    text = '<img alt="no source"><img src="a.png">'
    assert extract_page_stats(text).images == 2
    assert extract_page_stats(text, collect_sources=True).images == 1
