from __future__ import annotations

from types import SimpleNamespace

import pytest

from catalog import TranslationCatalog
from extraction import ExtractionSession, LiveEnvironmentError, LiveInstance, UnsupportedOperationError
from extraction.parsers import (
    DYNAMIC_ITEMS,
    BlockTemplatesParser,
    DynamicItemParser,
    PhpParser,
    RegistryItem,
    get_all_parsers,
    select_parsers,
)
from utils.config import AppConfig


def _instance(**registries) -> LiveInstance:
    return LiveInstance("9.2.1", {name: (lambda items=items: items) for name, items in registries.items()})


def test_directory_parsers_reject_live_instances() -> None:
    catalog = TranslationCatalog()
    for parser in (PhpParser(), BlockTemplatesParser()):
        with pytest.raises(UnsupportedOperationError):
            parser.extract_from_live_instance(catalog, _instance())
    assert len(catalog) == 0


def test_dynamic_parser_rejects_directories(make_tree) -> None:
    root = make_tree(["blocks/a/templates/view"])
    with pytest.raises(UnsupportedOperationError):
        DynamicItemParser().extract_from_directory(TranslationCatalog(), root)


@pytest.mark.parametrize("instance", [None, LiveInstance("")])
def test_live_extraction_requires_a_versioned_instance(instance) -> None:
    catalog = TranslationCatalog()
    with pytest.raises(LiveEnvironmentError):
        DynamicItemParser().extract_from_live_instance(catalog, instance)
    assert len(catalog) == 0


def test_dynamic_items_read_registered_names() -> None:
    instance = _instance(
        permission_access_entity_types=[
            SimpleNamespace(name="Group"),
            {"name": "User"},
            SimpleNamespace(name="Group"),
            SimpleNamespace(name=""),
            SimpleNamespace(handle="no_name"),
            {"name": None},
        ]
    )
    catalog = DynamicItemParser().extract_from_live_instance(None, instance)
    assert [(entry.msgctxt, entry.msgid) for entry in catalog] == [
        ("PermissionAccessEntityTypeName", "Group"),
        ("PermissionAccessEntityTypeName", "User"),
    ]
    assert all(entry.occurrences == [] for entry in catalog)


def test_unavailable_items_are_skipped() -> None:
    parser = DynamicItemParser(
        items=[RegistryItem("attribute_types", "AttributeTypeName"), *DYNAMIC_ITEMS],
    )
    catalog = parser.extract_from_live_instance(None, _instance(permission_access_entity_types=[{"name": "Group"}]))
    assert [entry.msgid for entry in catalog] == ["Group"]
    assert len(parser.extract_from_live_instance(None, _instance())) == 0


def test_registry_shares_one_scanner() -> None:
    parsers = get_all_parsers(AppConfig(use_external_tool=False))
    assert [parser.name for parser in parsers] == ["PHP Parser", "Block templates", "Dynamic items"]
    assert len({id(parser.scanner) for parser in parsers}) == 1
    assert [parser.name for parser in select_parsers(parsers, directory=True)] == ["PHP Parser", "Block templates"]
    assert [parser.name for parser in select_parsers(parsers, live=True)] == ["Dynamic items"]
    assert select_parsers(parsers, directory=True, live=True) == []


def test_session_runs_every_directory_parser(make_tree, builtin_config: AppConfig) -> None:
    root = make_tree(
        ["blocks/form/templates/compact"],
        {"blocks/form/controller.php": '<?php\n$this->set("label", t("Submit"));\n'},
    )
    session = ExtractionSession(builtin_config)
    catalog = session.extract_directory(root, "concrete")
    assert catalog.find(None, "Submit").occurrences == [("concrete/blocks/form/controller.php", "2")]
    assert catalog.find("TemplateFileName", "Compact").occurrences == [("concrete/blocks/form/templates/compact", "")]
    assert len(session.scanner) == 1


def test_session_memoises_until_cleared(make_tree, builtin_config: AppConfig) -> None:
    root = make_tree(["blocks/a/templates/first"])
    session = ExtractionSession(builtin_config)
    session.extract_directory(root)
    (root / "blocks" / "a" / "templates" / "second").mkdir()
    assert session.extract_directory(root).find("TemplateFileName", "Second") is None
    session.clear()
    assert session.extract_directory(root).find("TemplateFileName", "Second") is not None


def test_session_live_extraction() -> None:
    session = ExtractionSession(AppConfig(use_external_tool=False))
    catalog = TranslationCatalog()
    session.extract_live_instance(_instance(permission_access_entity_types=[{"name": "Group"}]), catalog)
    assert catalog.find("PermissionAccessEntityTypeName", "Group") is not None
    with pytest.raises(LiveEnvironmentError):
        session.extract_live_instance(None)
