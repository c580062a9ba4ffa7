"""Read-only contact directory used by the invite step."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class Contact:
    id: str
    name: str
    favorite: bool = False
    recent: bool = False


CONTACTS: tuple[Contact, ...] = (
    Contact(id="1", name="Alice Smith", favorite=True, recent=True),
    Contact(id="2", name="Bob Johnson", recent=True),
    Contact(id="3", name="Carol Williams", favorite=True),
    Contact(id="4", name="David Brown", recent=True),
)


def filter_contacts(contacts: Iterable[Contact], search_term: str) -> list[Contact]:
    """Return contacts whose name contains ``search_term`` (case-insensitive)."""

    needle = search_term.strip().lower()
    if not needle:
        return list(contacts)
    return [contact for contact in contacts if needle in contact.name.lower()]


def contacts_by_id(contacts: Iterable[Contact], ids: Iterable[str]) -> list[Contact]:
    wanted = set(ids)
    return [contact for contact in contacts if contact.id in wanted]


__all__ = ["CONTACTS", "Contact", "contacts_by_id", "filter_contacts"]
