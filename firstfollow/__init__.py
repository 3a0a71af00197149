from firstfollow.grammar import EOF, EPS, Grammar, GrammarError, Kind, Rule, Symbol
from firstfollow.sets import (
    Analysis,
    ConvergenceError,
    First,
    Follow,
    analyze,
    compute_first,
    compute_follow,
    first_of,
)
