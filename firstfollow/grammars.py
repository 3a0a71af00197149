from firstfollow.grammar import EPS, Grammar, Rule


expression = Grammar(
    goal="E",
    rules=[
        Rule(lhs="E", rhs=["T", "E'"]),
        Rule(lhs="E'", rhs=["+", "T", "E'"]),
        Rule(lhs="E'", rhs=[EPS]),
        Rule(lhs="T", rhs=["(", "E", ")"]),
        Rule(lhs="T", rhs=["id"]),
    ],
)

sequence = Grammar(
    goal="S",
    rules=[
        Rule(lhs="S", rhs=["A", "B"]),
        Rule(lhs="S", rhs=["C", "D"]),
        Rule(lhs="A", rhs=["a"]),
        Rule(lhs="A", rhs=[EPS]),
        Rule(lhs="B", rhs=["b"]),
        Rule(lhs="C", rhs=["c"]),
        Rule(lhs="D", rhs=["d"]),
    ],
)

GRAMMARS: dict[str, Grammar] = {
    "expression": expression,
    "sequence": sequence,
}
