"""
Tests for the built-in template library.
"""

import pytest

from label_designer.core.binding import resolve_document
from label_designer.core.document import add_element, new_document
from label_designer.core.models import LabelDocument, LineElement, QRCodeElement, create_element
from label_designer.core.templates import (
    TEMPLATES,
    apply_template,
    get_template,
    instantiate_template,
    template_from_document,
    templates_by_category,
)


class TestLibrary:
    @pytest.mark.parametrize("template", TEMPLATES, ids=lambda t: t.id)
    def test_every_template_instantiates(self, template):
        elements, size = instantiate_template(template)
        assert len(elements) == len(template.elements)
        assert size == template.size
        LabelDocument(size=size, elements=tuple(elements))

    def test_get_template(self):
        assert get_template("location-basic").size.name == "2×1 Small"
        with pytest.raises(KeyError):
            get_template("nope")

    def test_by_category(self):
        grouped = templates_by_category()
        assert [t.id for t in grouped["pallet"]] == ["pallet-comprehensive"]
        assert set(grouped) == {"location", "product", "pallet", "shipping"}

    def test_pallet_layout(self):
        elements, _ = instantiate_template(get_template("pallet-comprehensive"))
        assert len(elements) == 12
        assert sum(isinstance(e, LineElement) for e in elements) == 2
        qr = next(e for e in elements if isinstance(e, QRCodeElement))
        assert qr.data_field == "pallet.number"


class TestInstantiate:
    def test_fresh_ids_each_time(self):
        """Two instantiations share no element id."""
        t = get_template("product-standard")
        first, _ = instantiate_template(t)
        second, _ = instantiate_template(t)
        assert not {e.id for e in first} & {e.id for e in second}

    def test_apply_replaces_content_and_size(self, small_size):
        doc = add_element(new_document(small_size), create_element("text"))
        out = apply_template(doc, get_template("shipping-standard"))
        assert out.size.name == "4×6 Shipping"
        assert len(out.elements) == 3
        assert out.settings == doc.settings

    def test_apply_merge_keeps_size_and_elements(self, small_size):
        existing = create_element("text")
        doc = add_element(new_document(small_size), existing)
        out = apply_template(doc, get_template("location-basic"), merge=True)
        assert out.size == small_size
        assert out.elements[0] is existing
        assert len(out.elements) == 3

    def test_merge_twice_no_duplicate_ids(self, small_size):
        t = get_template("location-basic")
        doc = apply_template(apply_template(new_document(small_size), t, merge=True), t, merge=True)
        assert len(set(doc.element_ids())) == 4

    def test_location_template_resolves(self, location_context):
        elements, size = instantiate_template(get_template("location-basic"))
        doc = resolve_document(LabelDocument(size=size, elements=tuple(elements)), location_context)
        text, barcode = doc.elements
        assert text.content == "WH01-A01-S01-01"
        assert barcode.value == "WH01A01S0101"


class TestTemplateFromDocument:
    def test_captures_specs_without_ids(self, small_size):
        el = create_element("text", content="Saved", x=12)
        doc = add_element(new_document(small_size), el)
        t = template_from_document(doc, "my-bin", "My Bin", category="location")
        assert t.size == small_size
        assert "id" not in t.elements[0]

        elements, _ = instantiate_template(t)
        assert elements[0].content == "Saved"
        assert elements[0].x == 12
        assert elements[0].id != el.id
