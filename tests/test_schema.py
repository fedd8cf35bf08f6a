"""Tests for the Pydantic and dict adapters in formsmith.forms.schema."""

from __future__ import annotations

import datetime
import enum
from typing import Literal

import pytest
from pydantic import BaseModel, Field as PydanticField, SecretStr

from formsmith.forms.core import render_form
from formsmith.forms.model import FieldKind
from formsmith.forms.schema import (
    CSRF_FIELD_NAME,
    FormModel,
    FormSchemaError,
    _form_registry,
    build_form,
    camel_to_kebab,
    derive_form_name,
    form_from_dict,
    get_form_model,
)


@pytest.fixture(autouse=True)
def clean_registry():
    """Save and restore the form registry around each test."""
    saved = _form_registry.copy()
    _form_registry.clear()
    yield
    _form_registry.clear()
    _form_registry.update(saved)


class Role(str, enum.Enum):
    ADMIN = "admin"
    POWER_USER = "power"


class Address(BaseModel):
    street: str
    city: str = ""


class LineItem(BaseModel):
    sku: str
    quantity: int = 1


class Order(BaseModel):
    customer: str = PydanticField(
        json_schema_extra={"label": "Customer name", "placeholder": "Jane Doe", "help_text": "As on the card"}
    )
    notes: str = PydanticField(default="", json_schema_extra={"widget": "textarea"})
    gift: bool = False
    count: int = 0
    ship_on: datetime.date | None = None
    ordered_at: datetime.datetime | None = None
    password: SecretStr | None = None
    role: Role = Role.ADMIN
    size: Literal["s", "m", "l"] = "m"
    address: Address
    items: list[LineItem] = []


# ---------------------------------------------------------------------------
# Name helpers and registry
# ---------------------------------------------------------------------------


class TestNames:
    def test_camel_to_kebab(self):
        assert camel_to_kebab("NewsletterSignup") == "newsletter-signup"
        assert camel_to_kebab("Step2Form") == "step2-form"
        assert camel_to_kebab("") == ""

    def test_derive_form_name_strips_suffix(self):
        class ContactUsForm:
            pass

        assert derive_form_name(ContactUsForm) == "contact-us"

    def test_form_model_registers_derived_name(self):
        class NewsletterSignupForm(FormModel):
            email: str

        assert get_form_model("newsletter-signup") is NewsletterSignupForm

    def test_form_model_explicit_name(self):
        class Whatever(FormModel, form_name="custom"):
            email: str

        assert get_form_model("custom") is Whatever
        assert build_form(Whatever).name == "custom"

    def test_unknown_form_lists_registered_names(self):
        class AlphaForm(FormModel):
            x: str

        with pytest.raises(LookupError, match="Registered: alpha"):
            get_form_model("missing")


# ---------------------------------------------------------------------------
# build_form
# ---------------------------------------------------------------------------


class TestBuildForm:
    def test_name_derived_from_model(self):
        assert build_form(Order).name == "order"

    def test_field_order_follows_model(self):
        assert [f.name for f in build_form(Order)][:3] == ["customer", "notes", "gift"]

    @pytest.mark.parametrize(
        "name,kind",
        [
            ("customer", FieldKind.TEXT),
            ("notes", FieldKind.TEXTAREA),
            ("gift", FieldKind.BOOLEAN),
            ("count", FieldKind.INTEGER),
            ("ship_on", FieldKind.DATE),
            ("ordered_at", FieldKind.DATETIME),
            ("password", FieldKind.PASSWORD),
            ("role", FieldKind.SELECT),
            ("size", FieldKind.SELECT),
            ("address", FieldKind.COMPOSITE),
            ("items", FieldKind.LIST),
        ],
    )
    def test_kind_inference(self, name, kind):
        assert build_form(Order)[name].kind == kind

    def test_extra_metadata(self):
        customer = build_form(Order)["customer"]
        assert customer.label == "Customer name"
        assert customer.description.placeholder == "Jane Doe"
        assert customer.description.hint == "As on the card"
        assert customer.required is True

    def test_default_label_and_optional_flag(self):
        ship_on = build_form(Order)["ship_on"]
        assert ship_on.label == "Ship On"
        assert ship_on.required is False

    def test_choices(self):
        form = build_form(Order)
        assert form["role"].choices == (("admin", "Admin"), ("power", "Power User"))
        assert form["size"].choices == (("s", "s"), ("m", "m"), ("l", "l"))
        assert form["role"].value == "admin"

    def test_checkbox_widget_alias(self):
        class Prefs(BaseModel):
            news: str = PydanticField(default="", json_schema_extra={"widget": "checkbox"})

        assert build_form(Prefs)["news"].kind == FieldKind.BOOLEAN

    def test_values_and_errors(self):
        form = build_form(
            Order,
            values={"customer": "Ann", "count": 3},
            errors={"customer": "Too short", "count": ["Too many", "Odd"]},
        )
        assert form["customer"].value == "Ann"
        assert form["customer"].errors == ("Too short",)
        assert form["count"].errors == ("Too many", "Odd")

    def test_composite_children(self):
        form = build_form(Order, values={"address": {"city": "Oslo"}}, errors={"address": {"street": "Required"}})
        address = form["address"]
        assert [f.id for f in address.form] == ["address-street", "address-city"]
        assert [f.name for f in address.form] == ["address.street", "address.city"]
        assert address.form["address.city"].value == "Oslo"
        assert address.form["address.street"].errors == ("Required",)

    def test_list_entries_get_index_ids(self):
        form = build_form(
            Order,
            values={"items": [{"sku": "A"}, {"sku": "B", "quantity": 2}]},
            errors={"items": [{}, {"quantity": "Out of stock"}]},
        )
        items = form["items"]
        assert [e.id for e in items.entries] == ["items-0", "items-1"]
        second = items.entries[1]
        assert second.kind == FieldKind.COMPOSITE
        assert [f.id for f in second.form] == ["items-1-sku", "items-1-quantity"]
        assert second.form["items.1.quantity"].errors == ("Out of stock",)

    def test_csrf_token_appended(self):
        form = build_form(Order, csrf_token="tok")
        csrf = list(form)[-1]
        assert csrf.name == CSRF_FIELD_NAME
        assert csrf.kind == FieldKind.CSRF_TOKEN
        assert csrf.value == "tok"

    def test_built_form_renders(self):
        form = build_form(Order, values={"items": [{"sku": "A"}]}, csrf_token="tok")
        html = render_form(form, "order", form_name_uniquifier="1")
        assert 'id="order-1-items-0-sku"' in html
        assert 'id="order-1-address-street"' in html
        assert 'name="_csrf" value="tok"' in html


# ---------------------------------------------------------------------------
# form_from_dict
# ---------------------------------------------------------------------------


class TestFormFromDict:
    def test_basic(self):
        form = form_from_dict(
            {
                "name": "contact",
                "fields": [
                    {"name": "email", "label": "Email", "required": True, "placeholder": "you@x.org"},
                    {"name": "topic", "kind": "select", "choices": [["a", "A"], ["b", "B"]]},
                    {"name": "shade", "kind": "colour"},
                ],
            }
        )
        assert form.name == "contact"
        assert form["email"].required is True
        assert form["email"].description.placeholder == "you@x.org"
        assert form["topic"].choices == (("a", "A"), ("b", "B"))
        assert form["shade"].kind == "colour"

    def test_nested(self):
        form = form_from_dict(
            {
                "name": "order",
                "fields": [
                    {"name": "address", "kind": "composite", "fields": [{"name": "city", "id": "address-city"}]},
                    {"name": "tags", "kind": "list", "entries": [{"name": "tags.0", "id": "tags-0"}]},
                ],
            }
        )
        assert form["address"].form["city"].id == "address-city"
        assert form["tags"].entries[0].id == "tags-0"

    def test_string_errors(self):
        form = form_from_dict({"name": "f", "fields": [{"name": "x", "errors": "Bad"}]})
        assert form["x"].errors == ("Bad",)

    @pytest.mark.parametrize(
        "data",
        [
            [],
            {"fields": []},
            {"name": "f", "fields": "nope"},
            {"name": "f", "fields": [{"label": "no name"}]},
            {"name": "f", "fields": [{"name": "x", "choices": ["abc"]}]},
        ],
    )
    def test_malformed(self, data):
        with pytest.raises(FormSchemaError):
            form_from_dict(data)
