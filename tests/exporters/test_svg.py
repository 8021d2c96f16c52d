"""Tests for SVG primitives and document serialization."""

from __future__ import annotations

from decimal import Decimal

from exporters.svg import LineTo, MoveTo, PathElement, QuadraticCurveTo, SvgDocument, format_number

D = Decimal


def test_format_number_strips_trailing_zeros() -> None:
    assert format_number(D("12.500")) == "12.5"
    assert format_number(D("3.0")) == "3"
    assert format_number(D("-0.0")) == "0"
    assert format_number(D("1E+2")) == "100"


def test_quadratic_box_is_tight() -> None:
    curve = QuadraticCurveTo((D(0), D(0)), (D(5), D(-10)), (D(10), D(0)))

    assert curve.as_aabb().rect.bounds() == (D(0), D(-5), D(10), D(0))


def test_path_element_serializes_commands() -> None:
    start = (D(0), D(0))
    element = PathElement(
        primitives=(MoveTo(start), QuadraticCurveTo(start, (D(5), D(2)), (D(10), D(0)))),
        element_id="front-edge-2",
    )

    svg = element.to_svg()

    assert 'd="M 0 0 Q 5 2 10 0"' in svg
    assert 'id="front-edge-2"' in svg
    assert 'fill="none"' in svg


def test_document_sizes_from_units_in_meter() -> None:
    document = SvgDocument()
    document.add(PathElement(primitives=(MoveTo((D(0), D(0))), LineTo((D(0), D(0)), (D(12), D(0))))))
    document.set_viewport(D(0), D(0), D(12), D(0))
    document.comments.append("units_in_meter: 100")

    text = document.to_string(margin=D(1), units_in_meter=D(100))

    assert 'viewBox="-1 -1 14 2"' in text
    assert 'width="140mm" height="20mm"' in text
    assert "<!-- units_in_meter: 100 -->" in text
    assert text.rstrip().endswith("</svg>")


def test_comments_never_contain_double_hyphens() -> None:
    document = SvgDocument(comments=["size --large", "a---b"])

    text = document.to_string()

    assert "<!-- size - -large -->" in text
    assert "<!-- a- - -b -->" in text
    for line in text.splitlines():
        if line.startswith("<!--"):
            assert "--" not in line[4:-3]
