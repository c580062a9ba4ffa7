from __future__ import annotations

from integrations.contacts import CONTACTS, contacts_by_id, filter_contacts


def test_filter_contacts_is_case_insensitive() -> None:
    assert [contact.name for contact in filter_contacts(CONTACTS, "  sMiTh ")] == ["Alice Smith"]
    assert filter_contacts(CONTACTS, "") == list(CONTACTS)
    assert filter_contacts(CONTACTS, "zelda") == []


def test_contacts_by_id_keeps_directory_order() -> None:
    assert [contact.id for contact in contacts_by_id(CONTACTS, ["4", "1", "9"])] == ["1", "4"]
