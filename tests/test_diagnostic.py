from pathlib import Path

import pytest

from escargot.diagnostic import (
    Applicability,
    Diagnostic,
    DiagnosticCode,
    DiagnosticLevel,
    DiagnosticSpan,
    DiagnosticSpanLine,
    DiagnosticSpanMacroExpansion,
)

LINE = {"text": "pub fn add(a: i32, b: i32) -> i32 {", "highlight_start": 1, "highlight_end": 36}

SPAN = {
    "file_name": "src/lib.rs",
    "byte_start": 0,
    "byte_end": 33,
    "line_start": 3,
    "line_end": 5,
    "column_start": 1,
    "column_end": 2,
    "is_primary": True,
    "text": [LINE],
    "label": None,
    "suggested_replacement": None,
    "suggestion_applicability": None,
    "expansion": None,
}

CHILD = {
    "message": "the lint level is defined here",
    "code": None,
    "level": "note",
    "spans": [],
    "children": [],
    "rendered": None,
}

DIAG = {
    "message": "missing documentation for a function",
    "code": {"code": "missing_docs", "explanation": None},
    "level": "warning",
    "spans": [SPAN],
    "children": [CHILD],
    "rendered": "warning: missing documentation for a function\n",
}


def test_span_line_from_dict():
    line = DiagnosticSpanLine.from_dict(LINE)
    assert line.text == LINE["text"]
    assert (line.highlight_start, line.highlight_end) == (1, 36)


def test_span_from_dict():
    span = DiagnosticSpan.from_dict(SPAN)
    assert span.file_name == Path("src/lib.rs")
    assert span.byte_end == SPAN["byte_end"]
    assert span.line_start == SPAN["line_start"]
    assert span.is_primary is True
    assert span.text[0].text == LINE["text"]
    assert span.expansion is None
    assert span.suggestion_applicability is None


@pytest.mark.parametrize("key", ["file_name", "byte_start", "is_primary", "text"])
def test_span_missing_required_field(key):
    data = {k: v for k, v in SPAN.items() if k != key}
    with pytest.raises(ValueError, match=key):
        DiagnosticSpan.from_dict(data)


def test_span_optional_fields_may_be_absent():
    data = {k: v for k, v in SPAN.items() if k not in ("label", "expansion")}
    span = DiagnosticSpan.from_dict(data)
    assert span.label is None
    assert span.expansion is None


def test_span_rejects_negative_offset():
    with pytest.raises(ValueError):
        DiagnosticSpan.from_dict({**SPAN, "byte_start": -1})


def test_span_rejects_bool_as_number():
    with pytest.raises(ValueError):
        DiagnosticSpan.from_dict({**SPAN, "line_start": True})


def test_span_with_applicability_and_replacement():
    span = DiagnosticSpan.from_dict(
        {
            **SPAN,
            "suggested_replacement": "}",
            "suggestion_applicability": "MachineApplicable",
        }
    )
    assert span.suggested_replacement == "}"
    assert span.suggestion_applicability is Applicability.MACHINE_APPLICABLE


def test_macro_expansion_nested():
    expansion = {"span": SPAN, "macro_decl_name": "println!", "def_site_span": None}
    span = DiagnosticSpan.from_dict({**SPAN, "expansion": expansion})
    assert isinstance(span.expansion, DiagnosticSpanMacroExpansion)
    assert span.expansion.macro_decl_name == "println!"
    assert span.expansion.span.line_start == SPAN["line_start"]
    assert span.expansion.def_site_span is None


def test_macro_expansion_with_def_site():
    exp = DiagnosticSpanMacroExpansion.from_dict(
        {"span": SPAN, "macro_decl_name": "#[derive(Eq)]", "def_site_span": SPAN}
    )
    assert exp.def_site_span == exp.span


@pytest.mark.parametrize(
    "member", [m for m in Applicability if m is not Applicability.UNKNOWN]
)
def test_applicability_round_trip(member):
    assert Applicability.parse(member.value) is member


def test_applicability_unknown_string():
    assert Applicability.parse("SomethingNew") is Applicability.UNKNOWN


def test_applicability_rejects_non_string():
    with pytest.raises(ValueError):
        Applicability.parse(3)


def test_level_internal_compiler_error():
    assert DiagnosticLevel.parse("error: internal compiler error") is DiagnosticLevel.ICE


@pytest.mark.parametrize(
    "member", [m for m in DiagnosticLevel if m is not DiagnosticLevel.UNKNOWN]
)
def test_level_round_trip(member):
    assert DiagnosticLevel.parse(member.value) is member


def test_level_unknown():
    assert DiagnosticLevel.parse("failure-note") is DiagnosticLevel.UNKNOWN


def test_code_from_dict():
    code = DiagnosticCode.from_dict({"code": "E0308", "explanation": "mismatched"})
    assert code.code == "E0308"
    assert code.explanation == "mismatched"


def test_diagnostic_from_dict():
    diag = Diagnostic.from_dict(DIAG)
    assert diag.message == DIAG["message"]
    assert diag.level is DiagnosticLevel.WARNING
    assert diag.code.code == "missing_docs"
    assert diag.rendered == DIAG["rendered"]
    assert len(diag.spans) == 1
    assert diag.children[0].level is DiagnosticLevel.NOTE
    assert diag.children[0].message == CHILD["message"]
    assert diag.children[0].children == []


def test_diagnostic_rendered_may_be_absent():
    data = {k: v for k, v in DIAG.items() if k != "rendered"}
    assert Diagnostic.from_dict(data).rendered is None


def test_diagnostic_requires_children_list():
    data = {k: v for k, v in DIAG.items() if k != "children"}
    with pytest.raises(ValueError, match="children"):
        Diagnostic.from_dict(data)


def test_diagnostic_rejects_non_object():
    with pytest.raises(ValueError):
        Diagnostic.from_dict(["not", "an", "object"])