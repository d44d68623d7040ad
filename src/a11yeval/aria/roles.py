"""
WAI-ARIA Catalog

Roles, properties and states recognized by the ARIA validator. The catalog is
read-only; custom roles are merged into a fresh mapping per validator.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from ..types import ARIARoleSpec, RoleCategory

_LABELS = ("aria-label", "aria-labelledby")


def _role(
    name: str,
    category: RoleCategory,
    required: Iterable[str] = (),
    supported: Iterable[str] = (),
    parent: Iterable[str] | None = None,
    children: Iterable[str] | None = None,
    implicit: str | None = None,
) -> ARIARoleSpec:
    return ARIARoleSpec(
        name=name,
        category=category,
        required_properties=frozenset(required),
        supported_properties=frozenset(supported),
        required_parent=frozenset(parent) if parent is not None else None,
        required_children=frozenset(children) if children is not None else None,
        implicit_semantics=implicit,
    )


W = RoleCategory.WIDGET
D = RoleCategory.DOCUMENT
L = RoleCategory.LANDMARK

_ROLES = [
    # Widgets
    _role("button", W, supported=("aria-expanded", "aria-pressed", "aria-disabled"), implicit="button"),
    _role("checkbox", W, required=("aria-checked",),
          supported=("aria-required", "aria-readonly", "aria-disabled"),
          implicit='input[type="checkbox"]'),
    _role("combobox", W, required=("aria-expanded",),
          supported=("aria-autocomplete", "aria-controls", "aria-haspopup", "aria-required",
                     "aria-activedescendant"),
          implicit="select"),
    _role("gridcell", W, supported=("aria-selected", "aria-readonly", "aria-required"),
          parent=("row",), implicit="td"),
    _role("link", W, supported=("aria-expanded", "aria-disabled"), implicit="a[href]"),
    _role("listbox", W, supported=("aria-multiselectable", "aria-required", "aria-orientation"),
          children=("option",), implicit="select[multiple]"),
    _role("menu", W, supported=("aria-orientation", "aria-activedescendant"),
          children=("menuitem", "menuitemcheckbox", "menuitemradio")),
    _role("menubar", W, supported=("aria-orientation", "aria-activedescendant"),
          children=("menuitem", "menuitemcheckbox", "menuitemradio")),
    _role("menuitem", W, supported=("aria-disabled", "aria-expanded", "aria-haspopup"),
          parent=("menu", "menubar", "group")),
    _role("menuitemcheckbox", W, required=("aria-checked",), supported=("aria-disabled",),
          parent=("menu", "menubar", "group")),
    _role("menuitemradio", W, required=("aria-checked",),
          supported=("aria-disabled", "aria-posinset", "aria-setsize"),
          parent=("menu", "menubar", "group")),
    _role("option", W, supported=("aria-selected", "aria-checked", "aria-posinset", "aria-setsize"),
          parent=("listbox", "group"), implicit="option"),
    _role("progressbar", W, supported=("aria-valuenow", "aria-valuemin", "aria-valuemax",
                                       "aria-valuetext"),
          implicit="progress"),
    _role("radio", W, required=("aria-checked",), supported=("aria-posinset", "aria-setsize"),
          implicit='input[type="radio"]'),
    _role("radiogroup", W, supported=("aria-required", "aria-readonly", "aria-orientation"),
          children=("radio",)),
    _role("scrollbar", W, required=("aria-valuenow",),
          supported=("aria-controls", "aria-orientation", "aria-valuemin", "aria-valuemax")),
    _role("slider", W, required=("aria-valuenow",),
          supported=("aria-valuemin", "aria-valuemax", "aria-valuetext", "aria-orientation",
                     "aria-readonly"),
          implicit='input[type="range"]'),
    _role("switch", W, required=("aria-checked",), supported=("aria-readonly", "aria-required")),
    _role("tab", W, supported=("aria-selected", "aria-controls", "aria-disabled"),
          parent=("tablist",)),
    _role("tablist", W, supported=("aria-orientation", "aria-multiselectable"), children=("tab",)),
    _role("tabpanel", W, supported=("aria-labelledby",)),
    _role("textbox", W, supported=("aria-multiline", "aria-placeholder", "aria-readonly",
                                   "aria-required", "aria-autocomplete"),
          implicit='input[type="text"]'),
    _role("tree", W, supported=("aria-multiselectable", "aria-required"), children=("treeitem",)),
    _role("treeitem", W, supported=("aria-expanded", "aria-selected", "aria-level"),
          parent=("tree", "group")),
    _role("grid", W, supported=("aria-multiselectable", "aria-readonly", "aria-rowcount",
                                "aria-colcount"),
          children=("row",), implicit="table"),
    _role("row", W, supported=("aria-selected", "aria-expanded", "aria-level", "aria-rowindex"),
          parent=("grid", "table", "treegrid", "rowgroup"), implicit="tr"),
    _role("separator", W, supported=("aria-orientation", "aria-valuenow"), implicit="hr"),
    _role("toolbar", W, supported=("aria-orientation",)),
    _role("alert", W, supported=("aria-live", "aria-atomic")),
    _role("status", W, supported=("aria-live", "aria-atomic"), implicit="output"),
    _role("tooltip", W, supported=_LABELS),
    # Windows
    _role("dialog", RoleCategory.WINDOW,
          supported=("aria-modal", "aria-label", "aria-labelledby", "aria-describedby"),
          implicit="dialog"),
    _role("alertdialog", RoleCategory.WINDOW,
          supported=("aria-modal", "aria-label", "aria-labelledby", "aria-describedby")),
    # Document structure
    _role("article", D, supported=("aria-posinset", "aria-setsize"), implicit="article"),
    _role("group", D, supported=("aria-activedescendant", "aria-disabled"), implicit="fieldset"),
    _role("heading", D, required=("aria-level",), implicit="h1"),
    _role("img", D, supported=_LABELS, implicit="img"),
    _role("list", D, children=("listitem",), implicit="ul"),
    _role("listitem", D, supported=("aria-level", "aria-posinset", "aria-setsize"),
          parent=("list", "group"), implicit="li"),
    _role("none", D),
    _role("presentation", D),
    # Landmarks
    _role("banner", L, supported=_LABELS, implicit="header"),
    _role("complementary", L, supported=_LABELS, implicit="aside"),
    _role("contentinfo", L, supported=_LABELS, implicit="footer"),
    _role("form", L, supported=_LABELS, implicit="form"),
    _role("main", L, supported=_LABELS, implicit="main"),
    _role("navigation", L, supported=_LABELS, implicit="nav"),
    _role("region", L, supported=_LABELS, implicit="section"),
    _role("search", L, supported=_LABELS),
]

ARIA_ROLES: Mapping[str, ARIARoleSpec] = MappingProxyType({role.name: role for role in _ROLES})

# Checked in this order, so issue order follows it
ARIA_PROPERTIES: tuple[str, ...] = (
    "aria-label",
    "aria-labelledby",
    "aria-describedby",
    "aria-controls",
    "aria-haspopup",
    "aria-expanded",
    "aria-hidden",
    "aria-invalid",
    "aria-required",
    "aria-readonly",
    "aria-disabled",
    "aria-checked",
    "aria-selected",
    "aria-pressed",
    "aria-level",
    "aria-valuemin",
    "aria-valuemax",
    "aria-valuenow",
    "aria-valuetext",
    "aria-orientation",
    "aria-live",
    "aria-atomic",
    "aria-relevant",
    "aria-busy",
    "aria-modal",
    "aria-activedescendant",
    "aria-owns",
    "aria-flowto",
    "aria-posinset",
    "aria-setsize",
    "aria-rowcount",
    "aria-colcount",
    "aria-current",
    "aria-autocomplete",
    "aria-multiselectable",
    "aria-multiline",
    "aria-placeholder",
    "aria-sort",
    "aria-rowindex",
    "aria-colindex",
    "aria-errormessage",
    "aria-details",
    "aria-keyshortcuts",
    "aria-roledescription",
)

ARIA_STATES: frozenset[str] = frozenset(
    {
        "aria-busy",
        "aria-checked",
        "aria-current",
        "aria-disabled",
        "aria-expanded",
        "aria-grabbed",
        "aria-hidden",
        "aria-invalid",
        "aria-pressed",
        "aria-selected",
    }
)

DEPRECATED_ATTRIBUTES: frozenset[str] = frozenset({"aria-grabbed", "aria-dropeffect"})

LANDMARK_ROLES: tuple[str, ...] = ("main", "navigation", "complementary", "banner", "contentinfo")

REDUNDANT_ROLE_SELECTOR = (
    'button[role="button"], nav[role="navigation"], main[role="main"], '
    'aside[role="complementary"]'
)


def merge_roles(custom_roles: Iterable[ARIARoleSpec]) -> Mapping[str, ARIARoleSpec]:
    """Built-in roles plus ``custom_roles``; a custom role replaces a built-in of the same name."""
    roles = dict(ARIA_ROLES)
    roles.update((role.name, role) for role in custom_roles)
    return MappingProxyType(roles)
