"""In-memory inverted index keyed by normalized tag or date strings."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from note_indexer.domain.model import DocumentRef


def normalize_key(raw_key: str) -> str:
    """Trim surrounding whitespace and lower-case a raw key."""
    return raw_key.strip().lower()


class InvertedIndex:
    """Map each normalized key to the ordered postings of notes carrying it.

    Postings are append-only and keep insertion order. Duplicates are kept: a
    note listed twice under the same key yields two postings.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._keys: set[str] = set()
        self._postings: dict[str, list[DocumentRef]] = {}

    def add(self, raw_key: str, document_id: str, title: str, sort_field: str = "") -> None:
        key = normalize_key(raw_key)
        if not key:
            return
        self._keys.add(key)
        self._postings.setdefault(key, []).append(DocumentRef(document_id, title, sort_field))

    def add_many(self, raw_keys: Iterable[str], document_id: str, title: str, sort_field: str = "") -> None:
        """Add one posting per raw key; ``sort_field`` describes the note, not the key."""
        for raw_key in raw_keys:
            self.add(raw_key, document_id, title, sort_field)

    def postings_of(self, raw_key: str) -> Sequence[DocumentRef] | None:
        """Return the postings for a key, or None when the key was never added."""
        postings = self._postings.get(normalize_key(raw_key))
        if postings is None:
            return None
        return tuple(postings)

    def count_of(self, raw_key: str) -> int:
        return len(self._postings.get(normalize_key(raw_key), ()))

    def all_keys(self) -> set[str]:
        return set(self._keys)

    def counts(self) -> dict[str, int]:
        """Posting count per key."""
        return {key: len(postings) for key, postings in self._postings.items()}

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, raw_key: object) -> bool:
        return isinstance(raw_key, str) and normalize_key(raw_key) in self._keys

    def __repr__(self) -> str:
        return f"InvertedIndex(name={self.name!r}, keys={len(self._keys)})"
