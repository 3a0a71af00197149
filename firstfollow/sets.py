import logging
from dataclasses import dataclass, field
from pprint import pformat
from typing import Callable, Sequence

from firstfollow.grammar import EOF, EPS, Grammar, GrammarError, Symbol


log = logging.getLogger(__name__)

FirstSets = dict[str, set[str]]
FollowSets = dict[str, set[str]]


class ConvergenceError(RuntimeError):
    """Fixed point was not reached within the pass cap"""


def first_of(symbols: Sequence[str | Symbol], first: FirstSets) -> set[str]:
    """Returns FIRST of a symbol sequence.

    Terminals stand for themselves, epsilon vanishes, and epsilon is part of
    the result only when every symbol of the sequence can vanish. The empty
    sequence therefore gives ``{epsilon}``.
    """
    result = set()
    for v in symbols:
        s = v if isinstance(v, Symbol) else Symbol.classify(v)
        if s.is_epsilon():
            continue
        if not s.is_nonterminal():
            result.add(s.text)
            return result
        result |= first[s.text] - {EPS}
        if EPS not in first[s.text]:
            return result
    result.add(EPS)
    return result


def first_pass(grammar: Grammar, first: FirstSets) -> bool:
    """One sweep of the FIRST rules over every production. Returns True on growth."""
    changed = False
    for lhs, production in grammar.items():
        target = first[lhs]
        before = len(target)

        for s in production:
            # epsilon vanishes, a terminal ends the scan
            if s.is_epsilon():
                continue
            if not s.is_nonterminal():
                target.add(s.text)
                break
            target |= first[s.text] - {EPS}
            if EPS not in first[s.text]:
                break
        else:
            target.add(EPS)

        changed = changed or len(target) > before
    return changed


def follow_pass(grammar: Grammar, first: FirstSets, follow: FollowSets) -> bool:
    """One sweep of the FOLLOW rules over every production. Returns True on growth."""
    changed = False
    for lhs, production in grammar.items():
        for i, s in enumerate(production):
            if not s.is_nonterminal():
                continue
            target = follow[s.text]
            before = len(target)

            trailer = first_of(production[i + 1:], first)
            target |= trailer - {EPS}
            if EPS in trailer:
                target |= follow[lhs]

            changed = changed or len(target) > before
    return changed


def converge(name: str, grammar: Grammar, sweep: Callable[[], bool]) -> int:
    # every changing pass adds at least one symbol to some set
    cap = len(grammar) * (len(grammar.terminal) + 2) + 2

    for n in range(1, cap + 1):
        changed = sweep()
        log.debug("%s pass %d changed=%s", name, n, changed)
        if not changed:
            log.info("%s sets converged after %d passes", name, n)
            return n
    raise ConvergenceError(f"{name} sets did not converge within {cap} passes")


class First:

    def __init__(self, grammar: Grammar, first: FirstSets | None = None):
        self.grammar = grammar
        self.first: FirstSets = first if first is not None else {}
        for nt in grammar.nonterminal:
            self.first.setdefault(nt, set())
        self.passes = converge("FIRST", grammar, self.sweep)

    def sweep(self) -> bool:
        return first_pass(self.grammar, self.first)

    def __getitem__(self, symbols: str | Sequence[str]) -> set[str]:
        if isinstance(symbols, str):
            symbols = [symbols]
        return first_of(symbols, self.first)

    def __str__(self) -> str:
        return pformat(self.first)


class Follow:

    def __init__(
        self,
        grammar: Grammar,
        first: First | FirstSets,
        follow: FollowSets | None = None,
        start: str | None = None,
    ):
        self.grammar = grammar
        self.first: FirstSets = first.first if isinstance(first, First) else first
        self.start = grammar.goal if start is None else start
        if self.start not in grammar:
            raise GrammarError(f"Start symbol {self.start!r} has no productions")

        self.follow: FollowSets = follow if follow is not None else {}
        for nt in grammar.nonterminal:
            self.follow.setdefault(nt, set())
        self.follow[self.start].add(EOF)

        self.passes = converge("FOLLOW", grammar, self.sweep)

    def sweep(self) -> bool:
        return follow_pass(self.grammar, self.first, self.follow)

    def __getitem__(self, nt: str) -> set[str]:
        return self.follow[nt]

    def __str__(self) -> str:
        return pformat(self.follow)


def compute_first(grammar: Grammar, first: FirstSets | None = None) -> FirstSets:
    return First(grammar, first).first


def compute_follow(
    grammar: Grammar,
    first: FirstSets,
    follow: FollowSets | None = None,
    start: str | None = None,
) -> FollowSets:
    return Follow(grammar, first, follow, start).follow


@dataclass(frozen=True)
class Analysis:
    grammar: Grammar
    first: FirstSets
    follow: FollowSets | None = None
    passes: dict[str, int] = field(default_factory=dict)


def analyze(grammar: Grammar, follow: bool = True, start: str | None = None) -> Analysis:
    """Computes FIRST sets and, unless ``follow`` is False, FOLLOW sets seeded at ``start``."""
    first = First(grammar)
    passes = {"FIRST": first.passes}
    if not follow:
        return Analysis(grammar, first.first, None, passes)

    follow_sets = Follow(grammar, first, start=start)
    passes["FOLLOW"] = follow_sets.passes
    return Analysis(grammar, first.first, follow_sets.follow, passes)
