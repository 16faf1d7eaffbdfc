from arxiv_agent.agents.extract import ExtractAgent
from conftest import entry_xml, feed_xml

def test_drops_entry_without_title_and_keeps_order():
    """
    Three well-formed entries plus one without a title yield exactly three records, in order.
    """
    xml = feed_xml(
        entry_xml(title="First"),
        entry_xml(title=None),
        entry_xml(title="Second"),
        entry_xml(title="Third"),
    )
    records = ExtractAgent().process(xml)
    assert [r.title for r in records] == ["First", "Second", "Third"]

def test_drops_entry_without_summary():
    xml = feed_xml(entry_xml(summary=None), entry_xml(title="Kept"))
    assert [r.title for r in ExtractAgent().process(xml)] == ["Kept"]

def test_fields_are_cleaned_and_truncated():
    """
    Title/summary are trimmed with newlines collapsed; date is cut to 10 chars.
    """
    xml = feed_xml(entry_xml(
        title="\n  Quantum Key\nDistribution  \n",
        summary="  Line one\nline two ",
        published="2025-01-31T10:00:00Z",
        arxiv_id="http://arxiv.org/abs/2501.01234v2",
        term="quant-ph",
    ))
    (r,) = ExtractAgent().process(xml)
    assert r.title == "Quantum Key Distribution"
    assert r.abstract == "Line one line two"
    assert r.published == "2025-01-31"
    assert r.link == "http://arxiv.org/abs/2501.01234v2"
    assert r.category == "quant-ph"

def test_at_most_three_authors():
    xml = feed_xml(entry_xml(authors=("A One", "B Two", "C Three", "D Four")))
    (r,) = ExtractAgent().process(xml)
    assert r.authors == "A One, B Two, C Three"

def test_missing_optional_fields_get_defaults():
    xml = feed_xml(entry_xml(authors=(), published=None, arxiv_id=None, term=None))
    (r,) = ExtractAgent().process(xml)
    assert r.authors == "Unknown Author"
    assert r.published == "Unknown Date"
    assert r.link == ""
    assert r.category == "Unknown"

def test_out_of_order_fields():
    block = (
        "<entry><summary>Abstract first</summary>"
        '<category term="math.CO"/><name>Solo Author</name>'
        "<title>Late title</title></entry>"
    )
    (r,) = ExtractAgent().process(block)
    assert r.title == "Late title"
    assert r.authors == "Solo Author"
    assert r.category == "math.CO"

def test_garbage_and_empty_input_do_not_raise():
    ex = ExtractAgent()
    assert ex.process("") == []
    assert ex.process("   ") == []
    assert ex.process("<html>Service Unavailable</html>") == []
    assert ex.process("<entry><title>unterminated") == []
