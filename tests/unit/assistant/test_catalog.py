import pytest

from ssx.server.assistant.catalog import (
    MODULES,
    ModuleGroup,
    UnknownModule,
    filter_by_text,
    get_module,
    run_instrument_prompt,
)


def test_blank_query_returns_every_group_in_order():
    groups = filter_by_text("   ")

    assert [group for group, _ in groups] == list(ModuleGroup)
    assert sum(len(modules) for _, modules in groups) == len(MODULES)


def test_filter_matches_name_group_and_description():
    by_name = filter_by_text("WORKFLOW")
    assert [module.id for _, modules in by_name for module in modules] == ["workflow"]

    by_group = filter_by_text("assurance")
    assert [group for group, _ in by_group] == [ModuleGroup.ASSURANCE]
    assert [module.id for module in by_group[0][1]] == ["eval", "explain"]

    by_description = filter_by_text("top-k")
    assert [module.id for _, modules in by_description for module in modules] == ["source_picker"]


def test_filter_preserves_catalog_order():
    groups = filter_by_text("policy")
    ids = [module.id for _, modules in groups for module in modules]

    assert ids == [module.id for module in MODULES if module.id in ids]


def test_filter_without_matches_is_empty():
    assert filter_by_text("quantum") == []


def test_get_module_and_prompt():
    module = get_module("hitl")

    assert module.name == "Human approval"
    assert run_instrument_prompt(module) == "Run instrument: Human approval"

    with pytest.raises(UnknownModule):
        get_module("missing")
