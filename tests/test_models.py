"""
Tests for the element model: creation, cloning, immutability, document
invariants.
"""

import dataclasses

import pytest

from label_designer.core.exceptions import InvalidGridSizeError
from label_designer.core.models import (
    BarcodeElement,
    LabelDocument,
    LabelSize,
    LineElement,
    Settings,
    TextElement,
    clone_element,
    create_element,
    element_spec,
    find_label_size,
    modify_element,
)


class TestCreateElement:
    def test_fills_defaults_for_kind(self):
        """Unspecified fields come from the toolbar defaults."""
        el = create_element("barcode", x=10)
        assert isinstance(el, BarcodeElement)
        assert el.x == 10
        assert el.symbology == "CODE128"
        assert el.show_text is True
        assert el.rotation == 0.0
        assert el.visible is True
        assert el.locked is False

    def test_assigns_unique_ids(self):
        """Every created element gets its own id."""
        ids = {create_element("text").id for _ in range(200)}
        assert len(ids) == 200

    def test_rejects_supplied_id(self):
        """Ids are only issued by create/clone."""
        with pytest.raises(ValueError):
            create_element("text", id="mine")

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            create_element("hexagon")

    def test_invalid_enum_value(self):
        """Enumerated fields are validated."""
        with pytest.raises(ValueError):
            create_element("qrcode", error_correction_level="Z")
        with pytest.raises(ValueError):
            create_element("shape", shape_type="triangle")

    def test_non_numeric_geometry(self):
        with pytest.raises(TypeError):
            create_element("text", x="10")

    def test_non_string_content(self):
        with pytest.raises(TypeError):
            create_element("barcode", value=123456)
        with pytest.raises(TypeError):
            create_element("text", content=5)

    def test_data_field_optional(self):
        assert create_element("qrcode").data_field is None
        with pytest.raises(TypeError):
            create_element("qrcode", is_variable=True, data_field=1)


class TestLineElement:
    def test_width_height_follow_endpoints(self):
        """Line width/height are derived, whatever endpoint order."""
        line = create_element("line", x=50, y=50, x2=10, y2=20, width=999)
        assert line.width == 40
        assert line.height == 30

    def test_modify_rederives_extent(self):
        line = create_element("line", x=0, y=0, x2=10, y2=0)
        moved = modify_element(line, x2=30)
        assert moved.width == 30


class TestImmutability:
    def test_elements_are_frozen(self):
        el = create_element("text")
        with pytest.raises(dataclasses.FrozenInstanceError):
            el.x = 3

    def test_modify_returns_new_value(self):
        """modify_element leaves the original untouched."""
        el = create_element("text", content="Old")
        new = modify_element(el, content="New")
        assert el.content == "Old"
        assert new.content == "New"
        assert new.id == el.id

    def test_modify_cannot_change_id(self):
        el = create_element("text")
        with pytest.raises(ValueError):
            modify_element(el, id="other")


class TestCloneElement:
    def test_new_id_same_content(self):
        el = create_element("text", content="Hello", x=10, y=20)
        copy = clone_element(el)
        assert copy.id != el.id
        assert copy.content == "Hello"
        assert (copy.x, copy.y) == (10, 20)

    def test_offset(self):
        el = create_element("shape", x=10, y=20)
        copy = clone_element(el, 5, 7)
        assert (copy.x, copy.y) == (15, 27)

    def test_offset_moves_both_line_endpoints(self):
        line = create_element("line", x=0, y=0, x2=10, y2=10)
        copy = clone_element(line, 2, 3)
        assert (copy.x, copy.y, copy.x2, copy.y2) == (2, 3, 12, 13)


class TestElementSpec:
    def test_spec_has_type_and_no_id(self):
        el = create_element("text", content="A")
        spec = element_spec(el)
        assert spec["type"] == "text"
        assert "id" not in spec
        assert spec["content"] == "A"


class TestLabelSize:
    def test_positive_dimensions_required(self):
        with pytest.raises(ValueError):
            LabelSize("bad", 0, 1)
        with pytest.raises(ValueError):
            LabelSize("bad", 2, -1)

    def test_category_validated(self):
        with pytest.raises(ValueError):
            LabelSize("bad", 1, 1, "envelope")

    def test_find_standard_size(self):
        size = find_label_size("4×6 Shipping")
        assert (size.width, size.height, size.category) == (4, 6, "shipping")
        with pytest.raises(KeyError):
            find_label_size("nope")


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.grid_size > 0
        assert s.show_grid is True
        assert s.units == "inches"

    def test_non_positive_grid_rejected(self):
        with pytest.raises(InvalidGridSizeError):
            Settings(grid_size=0)


class TestLabelDocument:
    def test_elements_stored_as_tuple(self, small_size):
        doc = LabelDocument(size=small_size, elements=[create_element("text")])
        assert isinstance(doc.elements, tuple)

    def test_duplicate_ids_rejected(self, small_size):
        el = create_element("text")
        with pytest.raises(ValueError):
            LabelDocument(size=small_size, elements=(el, el))

    def test_get_element(self, small_size):
        a = create_element("text")
        b = create_element("barcode")
        doc = LabelDocument(size=small_size, elements=(a, b))
        assert doc.get_element(b.id) is b
        assert doc.get_element("missing") is None
        assert doc.element_ids() == (a.id, b.id)
        assert doc.index_of(b.id) == 1

    def test_type_tag(self):
        assert TextElement.type == "text"
        assert LineElement.type == "line"
