import logging

import pytest
from glossary_extractor.glossary import Glossary, normalize_key

def test_keys_differing_by_case_are_one_entry():
    g = Glossary("t.xlsx")
    g.add_entry("Foo", "a")
    g.add_entry("FOO", "b")
    assert dict(g.entries) == {"foo": "b"}
    assert len(g.errors) == 1
    assert g.duplicates == [{"key": "foo", "new_value": "b", "old_value": "a"}]

def test_distinct_keys_have_no_errors():
    g = Glossary("t.xlsx")
    g.add_entry("a", "1")
    g.add_entry("b", "2")
    assert dict(g.entries) == {"a": "1", "b": "2"}
    assert g.errors == []

def test_latest_value_wins():
    g = Glossary("t.xlsx")
    for value in ["one", "two", "three", "four"]:
        g.add_entry("Key", value)
    assert g.entries["key"] == "four"

def test_error_count_is_calls_minus_distinct_keys():
    g = Glossary("t.xlsx")
    keys = ["a", "A", "b", "c", "B", "a", "d", "C", "e"]
    for i, k in enumerate(keys):
        g.add_entry(k, str(i))
    distinct = {k.lower() for k in keys}
    assert len(g) == len(distinct)
    assert len(g.errors) == len(keys) - len(distinct)

def test_values_keep_their_case():
    g = Glossary("t.xlsx")
    g.add_entry("MENU_Title", "Main MENU")
    assert dict(g.entries) == {"menu_title": "Main MENU"}

def test_error_message_names_key_old_and_new_value():
    g = Glossary("t.xlsx")
    g.add_entry("id1", "Hello")
    g.add_entry("ID1", "Hi")
    assert g.errors == ['string id id1 duplicated. Was: "Hello" Now: "Hi"']

def test_add_pair_same_as_add_entry():
    a = Glossary("a")
    b = Glossary("b")
    for k, v in [("X", "1"), ("y", "2"), ("x", "3")]:
        a.add_entry(k, v)
        b.add_pair((k, v))
    assert dict(a.entries) == dict(b.entries)
    assert a.duplicates == b.duplicates

def test_reject_policy_keeps_first_value_and_still_logs():
    g = Glossary("t.xlsx", on_duplicate="reject")
    g.add_entry("id1", "Hello")
    g.add_entry("Id1", "Hi")
    g.add_entry("ID1", "Hey")
    assert g.entries["id1"] == "Hello"
    assert len(g.errors) == 2
    assert g.errors[0] == 'string id id1 duplicated. Kept: "Hello" Ignored: "Hi"'

def test_unknown_policy_raises():
    with pytest.raises(ValueError, match="unknown duplicate policy"):
        Glossary("t.xlsx", on_duplicate="first-wins")  # type: ignore[arg-type]

def test_entries_view_is_read_only():
    g = Glossary("t.xlsx")
    g.add_entry("a", "1")
    with pytest.raises(TypeError):
        g.entries["b"] = "2"  # type: ignore[index]

def test_name_and_empty_state():
    g = Glossary("example.xlsx")
    assert g.name == "example.xlsx"
    assert len(g) == 0
    assert g.errors == []

def test_duplicate_logs_warning(caplog):
    g = Glossary("t.xlsx")
    with caplog.at_level(logging.WARNING, logger="glossary_extractor.glossary"):
        g.add_entry("a", "1")
        g.add_entry("A", "2")
    assert "Duplicate string id 'a'" in caplog.text

def test_normalize_key_lower_cases():
    assert normalize_key("StringID_Main") == "stringid_main"
