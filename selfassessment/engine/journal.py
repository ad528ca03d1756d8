"""
Journal models.

A journal is a participant's full state: the structure (which tests and info
pages they work through, in order) and the log (what they answered). The
structure is persisted in its minimal form, set ids plus the chosen test ids,
and rebuilt from the course config on resume. The log is persisted as lists
of ``{"key": test_id, "val": answer}`` pairs, one list per set.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Any, Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from selfassessment.engine.errors import MalformedJournal
from selfassessment.engine.schema import InfoPage, SingleTest


class TestElement(BaseModel):
    """A single test placed in a set."""

    __test__ = False

    element_type: Literal["test"] = "test"
    test: SingleTest

    @property
    def id(self) -> int:
        return self.test.id


class InfoPageElement(BaseModel):
    """An info page placed in a set, before the element it belongs to."""

    element_type: Literal["infopage"] = "infopage"
    page: InfoPage

    @property
    def id(self) -> int:
        return self.page.id


SetElement = Annotated[
    Union[TestElement, InfoPageElement], Field(discriminator="element_type")
]


class StructureSet(BaseModel):
    """A test set with groups expanded and info pages inlined."""

    id: int
    elements: list[SetElement] = Field(default_factory=list)
    score_independent_text: str = ""
    score_dependent_texts: list[tuple[int, str]] = Field(default_factory=list)

    def tests(self) -> Iterator[SingleTest]:
        """Iterate the tests of this set in order, skipping info pages."""
        for element in self.elements:
            if isinstance(element, TestElement):
                yield element.test


class JournalStructure(BaseModel):
    """Ordered sets a participant works through."""

    sets: list[StructureSet] = Field(default_factory=list)

    def test_ids(self) -> list[int]:
        return [test.id for test_set in self.sets for test in test_set.tests()]


class MinimalSet(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    set_id: int = Field(alias="set")
    tests: list[int] = Field(default_factory=list)


class MinimalStructure(BaseModel):
    """Persisted form of a journal structure: set ids and chosen test ids."""

    course: str
    language: str
    sets: list[MinimalSet] = Field(default_factory=list)

    def tests_for(self, set_id: int) -> list[int] | None:
        """Recorded test ids for a set, or None if the set was not recorded."""
        for minimal_set in self.sets:
            if minimal_set.set_id == set_id:
                return minimal_set.tests
        return None

    def all_tests(self) -> list[int]:
        return [test_id for minimal_set in self.sets for test_id in minimal_set.tests]


@dataclass
class JournalLog:
    """Answers of a participant, one mapping ``test id -> answer`` per set."""

    sets: list[dict[int, Any]] = field(default_factory=list)

    @classmethod
    def empty_for(cls, structure: JournalStructure) -> "JournalLog":
        """Create an empty log with one mapping per structure set."""
        return cls(sets=[{} for _ in structure.sets])

    def find(self, test_id: int) -> tuple[bool, Any]:
        """Look up the answer recorded for a test in any set.

        Returns a ``(found, answer)`` pair since ``None`` and ``False`` are
        legitimate recorded answers.
        """
        for entries in self.sets:
            if test_id in entries:
                return True, entries[test_id]
        return False, None

    def find_in_set(self, set_index: int, test_id: int) -> tuple[bool, Any]:
        """Look up the answer recorded for a test in one set.

        Falls back to searching every set when the log holds fewer sets than
        the structure or the set has no entry for the test.
        """
        if set_index < len(self.sets) and test_id in self.sets[set_index]:
            return True, self.sets[set_index][test_id]
        return self.find(test_id)

    def record(self, set_index: int, test_id: int, answer: Any) -> None:
        """Record or replace the answer for a test in a set."""
        while len(self.sets) <= set_index:
            self.sets.append({})
        self.sets[set_index][test_id] = answer

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the ``{"sets": [{"maps": [{key, val}]}]}`` shape."""
        return {
            "sets": [
                {"maps": [{"key": key, "val": val} for key, val in entries.items()]}
                for entries in self.sets
            ]
        }

    @classmethod
    def from_wire(cls, payload: Any) -> "JournalLog":
        """Parse the wire shape back into mappings.

        Raises:
            MalformedJournal: if the payload has the wrong shape, a key is not
                an integer test id or a key repeats within one set.
        """
        if payload is None:
            return cls()
        if not isinstance(payload, dict) or not isinstance(payload.get("sets", []), list):
            raise MalformedJournal("journal log must be an object with a 'sets' list")

        sets: list[dict[int, Any]] = []
        for set_index, raw_set in enumerate(payload.get("sets", [])):
            maps = raw_set.get("maps", []) if isinstance(raw_set, dict) else None
            if not isinstance(maps, list):
                raise MalformedJournal(f"journal log set {set_index} has no 'maps' list")
            entries: dict[int, Any] = {}
            for pair in maps:
                if not isinstance(pair, dict) or "key" not in pair:
                    raise MalformedJournal(
                        f"journal log set {set_index} holds an entry without a key"
                    )
                key = pair["key"]
                if isinstance(key, bool) or not isinstance(key, int):
                    raise MalformedJournal(
                        f"journal log set {set_index} has non-integer key {key!r}"
                    )
                if key in entries:
                    raise MalformedJournal(
                        f"journal log set {set_index} repeats key {key}"
                    )
                entries[key] = pair.get("val")
            sets.append(entries)
        return cls(sets=sets)


@dataclass
class Journal:
    """Structure and log of one participant."""

    structure: JournalStructure
    log: JournalLog = field(default_factory=JournalLog)
