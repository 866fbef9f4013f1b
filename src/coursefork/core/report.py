from collections.abc import Iterable
from typing import Any

from attrs import Factory, frozen


@frozen
class Score:
    grade: float
    maximum: float

    def __add__(self, other: "Score") -> "Score":
        return Score(self.grade + other.grade, self.maximum + other.maximum)


ZERO_SCORE = Score(0, 0)


def total_score(scores: Iterable[Score]) -> Score:
    return sum(scores, ZERO_SCORE)


@frozen
class TestReport:
    """Results of running the tests of one chapter.

    `raw` is the mapping produced by the test runner, kept unchanged.
    `sections` maps each test section to its score.
    """

    __test__ = False

    sections: dict[str, Score] = Factory(dict)
    raw: dict[str, Any] = Factory(dict)

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "TestReport":
        results = raw.get("results") or {}
        sections = {
            name: Score(grade=score["grade"], maximum=score["maximum"])
            for name, score in results.items()
        }
        return cls(sections=sections, raw=raw)

    @property
    def total(self) -> Score:
        return total_score(self.sections.values())


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def format_score(score: Score) -> str:
    return f"{format_number(score.grade)} {format_number(score.maximum)}"
