"""
Unit Tests for toc_sectioner.pipeline.assembler
"""

from dataclasses import replace

from toc_sectioner.config import NO_OUTLINE_WHOLE
from toc_sectioner.pipeline.assembler import assemble
from toc_sectioner.pipeline.sectioner import BACKWARD


def make_state(settings, **overrides):
    state = {
        "settings": settings,
        "title": "Jahresbericht",
        "topic": "bericht.pdf",
        "language": "de",
        "pages": ["Intro hello world ", "Methods foo bar ", "Results done"],
        "outline_titles": ["Intro", "Methods", "Results"],
        "preamble": "Cover ",
        "sections": [
            {"title": "Intro", "text": " hello world ", "start": 5, "end": 18},
            {"title": "Methods", "text": " foo bar ", "start": 25, "end": 34},
        ],
    }
    state.update(overrides)
    return state


class TestAssemble:
    """Tests for assemble()"""

    def test_one_record_per_section(self, settings):
        records = assemble(make_state(settings))["records"]
        assert records == [
            {"title": "Jahresbericht", "topic": "bericht.pdf", "language": "de",
             "text": " hello world ", "paragraph": "Intro"},
            {"title": "Jahresbericht", "topic": "bericht.pdf", "language": "de",
             "text": " foo bar ", "paragraph": "Methods"},
        ]

    def test_exactly_five_fields(self, settings):
        for record in assemble(make_state(settings))["records"]:
            assert set(record) == {"title", "topic", "language", "text", "paragraph"}
            assert all(isinstance(v, str) for v in record.values())

    def test_keeps_match_order(self, settings):
        """Sections are not re-sorted"""
        state = make_state(settings, sections=[
            {"title": "Results", "text": " done", "start": 41, "end": 46},
            {"title": "Intro", "text": " a ", "start": 5, "end": 8},
        ])
        assert [r["paragraph"] for r in assemble(state)["records"]] == ["Results", "Intro"]

    def test_no_matches_no_records(self, settings):
        assert assemble(make_state(settings, sections=[]))["records"] == []

    def test_preamble_label_forward(self, settings):
        state = make_state(replace(settings, preamble_title="Intro"))
        records = assemble(state)["records"]
        assert records[0]["paragraph"] == "Intro"
        assert records[0]["text"] == "Cover "
        assert len(records) == 3

    def test_preamble_label_backward(self, settings):
        state = make_state(replace(settings, preamble_title="Vorwort", direction=BACKWARD))
        records = assemble(state)["records"]
        assert records[-1]["paragraph"] == "Vorwort"


class TestNoOutlinePolicy:
    """Documents without outline titles"""

    def test_skip(self, settings):
        state = make_state(settings, outline_titles=[], sections=[])
        assert assemble(state)["records"] == []

    def test_whole_document(self, settings):
        state = make_state(replace(settings, no_outline_policy=NO_OUTLINE_WHOLE), outline_titles=[])
        records = assemble(state)["records"]
        assert len(records) == 1
        assert records[0]["text"] == "Intro hello world Methods foo bar Results done"
        assert records[0]["paragraph"] == "Jahresbericht"
