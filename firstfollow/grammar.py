from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Mapping, Self, Sequence


EOF = "$"
EPS = "epsilon"
MATH_NA = "∅"


class GrammarError(ValueError):
    """Grammar violates a precondition of the set computations"""


class Kind(Enum):
    TERMINAL = "terminal"
    NONTERMINAL = "nonterminal"
    EPSILON = "epsilon"
    EOF = "eof"


@dataclass(frozen=True)
class Symbol:
    text: str
    kind: Kind

    @classmethod
    def classify(cls, text: str) -> Self:
        if text == EPS:
            return cls(text, Kind.EPSILON)
        if text == EOF:
            return cls(text, Kind.EOF)
        if text.lower() == text:
            return cls(text, Kind.TERMINAL)
        return cls(text, Kind.NONTERMINAL)

    def is_terminal(self) -> bool:
        return self.kind is Kind.TERMINAL

    def is_nonterminal(self) -> bool:
        return self.kind is Kind.NONTERMINAL

    def is_epsilon(self) -> bool:
        return self.kind is Kind.EPSILON

    def __str__(self) -> str:
        return self.text


Production = tuple[Symbol, ...]


@dataclass
class Rule:
    lhs: str
    rhs: list[str]

    def __str__(self) -> str:
        return f"{self.lhs} -> {' '.join(self.rhs)}"


class Grammar:
    """Productions per non-terminal plus a designated goal symbol.

    Symbols are classified once here, so the solvers never look at the
    spelling of a token again. Non-terminals keep the order in which they
    were first defined.
    """

    def __init__(self, goal: str, rules: list[Rule]):
        self.goal = goal
        self.rules: tuple[Rule, ...] = tuple(Grammar.clean_rules(rules))

        alternatives: dict[str, list[Production]] = {}
        for rule in self.rules:
            rhs = tuple(Symbol.classify(v) for v in rule.rhs)
            alternatives.setdefault(rule.lhs, []).append(rhs)
        self._productions: dict[str, tuple[Production, ...]] = {
            lhs: tuple(v) for lhs, v in alternatives.items()
        }

        self.nonterminal: tuple[str, ...] = tuple(self._productions)
        self.terminal: frozenset[str] = frozenset(
            s.text for p in self.all_productions() for s in p if s.is_terminal()
        )
        self.check()

    @classmethod
    def from_dict(cls, goal: str, productions: Mapping[str, Sequence[Sequence[str]]]) -> Self:
        rules = [
            Rule(lhs=lhs, rhs=list(rhs))
            for lhs, alternatives in productions.items()
            for rhs in alternatives
        ]
        return cls(goal, rules)

    @staticmethod
    def clean_rules(rules: list[Rule]) -> list[Rule]:
        new_rules = []
        for v in rules:
            rhs = v.rhs.copy() if v.rhs else [EPS]
            new_rules.append(Rule(lhs=v.lhs, rhs=rhs))
        return new_rules

    def check(self):
        if self.goal not in self._productions:
            raise GrammarError(f"Goal symbol {self.goal!r} has no productions")

        for lhs, production in self.items():
            for s in production:
                if s.kind is Kind.EOF:
                    raise GrammarError(
                        f"End-of-input marker {EOF!r} used in production {lhs} -> {render(production)}"
                    )
                if s.is_nonterminal() and s.text not in self._productions:
                    raise GrammarError(
                        f"Undefined non-terminal {s.text!r} in production {lhs} -> {render(production)}"
                    )

    def productions(self, nt: str) -> tuple[Production, ...]:
        return self._productions[nt]

    def all_productions(self) -> Iterator[Production]:
        for alternatives in self._productions.values():
            yield from alternatives

    def items(self) -> Iterator[tuple[str, Production]]:
        """Yields every (lhs, production) pair in definition order."""
        for lhs, alternatives in self._productions.items():
            for production in alternatives:
                yield lhs, production

    def __contains__(self, nt: str) -> bool:
        return nt in self._productions

    def __len__(self) -> int:
        return len(self._productions)

    def __str__(self) -> str:
        return "\n".join(
            f"{lhs} -> {' | '.join(render(p) for p in alternatives)}"
            for lhs, alternatives in self._productions.items()
        )


def render(production: Production) -> str:
    return " ".join(s.text for s in production)
