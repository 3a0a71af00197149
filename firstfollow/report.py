from typing import Iterable

import networkx as nx
import pandas as pd

from firstfollow.grammar import EOF, EPS, MATH_NA, Grammar
from firstfollow.sets import Analysis


def ordered(symbols: Iterable[str]) -> list[str]:
    """Ordinary terminals sorted, then epsilon, then end-of-input."""
    rank = {EPS: 1, EOF: 2}
    return sorted(symbols, key=lambda s: (rank.get(s, 0), s))


def format_set(symbols: Iterable[str]) -> str:
    items = ordered(symbols)
    if not items:
        return "{ }"
    return f"{{ {', '.join(items)} }}"


def render_sets(title: str, grammar: Grammar, sets: dict[str, set[str]]) -> str:
    lines = [f"{title} sets:"]
    for nt in grammar.nonterminal:
        lines.append(f"{nt}: {format_set(sets[nt])}")
    return "\n".join(lines)


def render(analysis: Analysis) -> str:
    text = render_sets("FIRST", analysis.grammar, analysis.first)
    if analysis.follow is not None:
        text += "\n\n" + render_sets("FOLLOW", analysis.grammar, analysis.follow)
    return text


def to_frame(analysis: Analysis) -> pd.DataFrame:
    records = []
    for nt in analysis.grammar.nonterminal:
        record = {"Symbol": nt, "FIRST": format_set(analysis.first[nt]), "FOLLOW": None}
        if analysis.follow is not None:
            record["FOLLOW"] = format_set(analysis.follow[nt])
        records.append(record)

    df = pd.DataFrame.from_records(records, columns=["Symbol", "FIRST", "FOLLOW"])
    df = df.set_index("Symbol")
    df = df.fillna(MATH_NA)
    return df


def dependency_graph(grammar: Grammar) -> nx.DiGraph:
    """Edge ``N -> X`` for every non-terminal X used in a production of N."""
    graph = nx.DiGraph()
    graph.add_nodes_from(grammar.nonterminal)

    for lhs, production in grammar.items():
        for s in production:
            if s.is_nonterminal():
                graph.add_edge(lhs, s.text)
    return graph


def visualize(grammar: Grammar):
    from matplotlib import pyplot as plt

    graph = dependency_graph(grammar)
    pos = nx.circular_layout(graph)

    nx.draw(graph, pos, arrows=True, node_shape="o", node_size=1500, alpha=0.4)
    nx.draw_networkx_labels(graph, pos, labels={v: v for v in graph.nodes})
    plt.show()
