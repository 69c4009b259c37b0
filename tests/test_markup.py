"""Tests for the element tree and its serializer."""

import pytest
from markupsafe import Markup

from camgi.markup import Document, Element, render


def test_nested_render():
    div = Element("div", {"class": "row", "id": "r1"})
    div.add("span").text("hi")
    assert div.render() == '<div class="row" id="r1"><span>hi</span></div>'


def test_attribute_order_is_insertion_order():
    a = Element("a", {"href": "#"}).set("class", "x").set("target", "_blank")
    assert a.render() == '<a href="#" class="x" target="_blank"></a>'


def test_attribute_set_once():
    el = Element("div", {"id": "a"})
    with pytest.raises(ValueError):
        el.set("id", "b")


def test_text_is_escaped():
    assert Element("p").text("<b> & \"x\"").render() == "<p>&lt;b&gt; &amp; &#34;x&#34;</p>"


def test_markup_passed_to_text_is_still_escaped():
    assert Element("p").text(Markup("<b>")).render() == "<p>&lt;b&gt;</p>"


def test_raw_is_verbatim():
    assert Element("style").raw(Markup("a > b { }")).render() == "<style>a > b { }</style>"


def test_raw_rejects_plain_strings():
    with pytest.raises(TypeError):
        Element("script").raw("alert(1)")


def test_attribute_values_are_escaped():
    el = Element("div", {"title": 'say "hi" <now>'})
    assert el.render() == '<div title="say &#34;hi&#34; &lt;now&gt;"></div>'


def test_void_elements_have_no_end_tag():
    head = Element("head")
    head.add("meta", {"charset": "utf-8"})
    head.add("hr")
    assert head.render() == '<head><meta charset="utf-8"><hr></head>'


def test_pre_whitespace_preserved():
    text = "line one\n    indented\n\ttab\n"
    assert Element("pre").text(text).render() == f"<pre>{text}</pre>"


def test_find_all_document_order():
    root = Element("div")
    root.add("span").text("1")
    inner = root.add("div")
    inner.add("span").text("2")
    root.add("span").text("3")
    assert [s.children[0] for s in root.find_all("span")] == ["1", "2", "3"]


def test_document_render():
    html = Element("html", {"lang": "en"})
    html.add("head").add("title").text("t")
    html.add("body")
    doc = Document(html)
    assert doc.head.tag == "head"
    assert doc.body.tag == "body"
    assert render(doc) == (
        '<!DOCTYPE html>\n<html lang="en"><head><title>t</title></head><body></body></html>\n'
    )
