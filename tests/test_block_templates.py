from __future__ import annotations

import os

import pytest

from catalog import TranslationCatalog
from extraction import DirectoryAccessError
from extraction.parsers import BlockTemplatesParser, humanize_handle
from utils.config import AppConfig


def _entries(catalog: TranslationCatalog):
    return [(entry.msgctxt, entry.msgid, entry.occurrences) for entry in catalog]


def test_directories_and_files_inside_templates_become_handles(make_tree) -> None:
    root = make_tree(["blocks/autonav/templates/breadcrumb"], {"blocks/autonav/templates/view.php": "<?php"})
    catalog = BlockTemplatesParser().extract_from_directory(None, root)
    assert sorted(_entries(catalog)) == [
        ("TemplateFileName", "Breadcrumb", [("blocks/autonav/templates/breadcrumb", "")]),
        ("TemplateFileName", "View", [("blocks/autonav/templates/view.php", "")]),
    ]


def test_same_handle_in_several_blocks_is_one_entry(make_tree) -> None:
    root = make_tree(
        ["blocks/a/templates/card_list", "blocks/b/templates/card_list"],
        {"blocks/c/templates/card_list.php": "<?php"},
    )
    catalog = BlockTemplatesParser().extract_from_directory(None, root)
    assert len(catalog) == 1
    entry = catalog.find("TemplateFileName", "Card List")
    assert sorted(path for path, _ in entry.occurrences) == [
        "blocks/a/templates/card_list",
        "blocks/b/templates/card_list",
        "blocks/c/templates/card_list.php",
    ]


def test_references_are_prefixed_and_may_match_through_the_prefix(make_tree) -> None:
    root = make_tree(["templates/gallery"])
    catalog = BlockTemplatesParser().extract_from_directory(None, root, "blocks/slider")
    assert _entries(catalog) == [("TemplateFileName", "Gallery", [("blocks/slider/templates/gallery", "")])]


def test_nested_blocks_folders_are_matched(make_tree) -> None:
    root = make_tree(["packages/shop/blocks/cart/templates/mini"])
    catalog = BlockTemplatesParser().extract_from_directory(None, root)
    assert catalog.find("TemplateFileName", "Mini").occurrences == [("packages/shop/blocks/cart/templates/mini", "")]


def test_ignores_hidden_foreign_and_deeper_entries(make_tree) -> None:
    root = make_tree(
        ["blocks/a/templates/.svn", "blocks/a/templates/view/css", "blocks/a/other/skip", "myblocks/a/templates/no"],
        {
            "blocks/a/templates/.hidden.php": "",
            "blocks/a/templates/readme.txt": "",
            "blocks/a/templates/.php": "",
            "blocks/a/templates/view/css/style.php": "",
        },
    )
    catalog = BlockTemplatesParser().extract_from_directory(None, root)
    assert [entry.msgid for entry in catalog] == ["View"]


def test_vendor_blocks_are_skipped(make_tree) -> None:
    root = make_tree(["vendor/blocks/a/templates/x", "blocks/a/templates/y"])
    catalog = BlockTemplatesParser().extract_from_directory(None, root)
    assert [entry.msgid for entry in catalog] == ["Y"]


def test_existing_entries_gain_references(make_tree) -> None:
    root = make_tree(["blocks/a/templates/view"])
    catalog = TranslationCatalog()
    catalog.insert("TemplateFileName", "View").occurrences.append(("concrete/blocks/x/templates/view.php", ""))
    BlockTemplatesParser().extract_from_directory(catalog, root)
    assert len(catalog) == 1
    assert [path for path, _ in catalog.find("TemplateFileName", "View").occurrences] == [
        "concrete/blocks/x/templates/view.php",
        "blocks/a/templates/view",
    ]


def test_context_comes_from_configuration(make_tree) -> None:
    root = make_tree(["blocks/a/templates/view"])
    catalog = BlockTemplatesParser(AppConfig(template_context="Template")).extract_from_directory(None, root)
    assert catalog.find("Template", "View") is not None


def test_unlistable_templates_folder_leaves_catalog_untouched(make_tree, monkeypatch: pytest.MonkeyPatch) -> None:
    root = make_tree(["blocks/a/templates/view", "blocks/b/templates"], {"blocks/b/templates/list.php": ""})
    parser = BlockTemplatesParser()
    parser.scanner.scan(root)
    real_scandir = os.scandir

    def guarded(path="."):
        if str(path).endswith("/templates"):
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", guarded)
    catalog = TranslationCatalog()
    with pytest.raises(DirectoryAccessError) as excinfo:
        parser.extract_from_directory(catalog, root)
    assert "Unable to parse directory" in str(excinfo.value)
    assert len(catalog) == 0


@pytest.mark.parametrize(
    ("handle", "label"),
    [
        ("view", "View"),
        ("hi_there", "Hi There"),
        ("image-slider", "Image Slider"),
        ("a/b_c", "A B C"),
        ("already Spaced", "Already Spaced"),
        ("x__y", "X  Y"),
        ("mIxed_case", "MIxed Case"),
        ("", ""),
    ],
)
def test_humanize_handle(handle: str, label: str) -> None:
    assert humanize_handle(handle) == label
