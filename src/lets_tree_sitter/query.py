from typing import List, Optional

from tree_sitter import Language, Node, Query, QueryCursor, QueryError

from .errors import QuerySyntaxError
from .models import NodeMatch
from .parser import load_language


class LetsQueryHelper:
    """Runs declarative tree-sitter queries and flattens their captures.

    Compiled queries are cached per helper. A new ``QueryCursor`` is used for
    every evaluation.
    """

    def __init__(self, language: Optional[Language] = None):
        self.language = language or load_language()
        self._compiled: dict[str, Query] = {}

    def compile(self, query_text: str) -> Query:
        query = self._compiled.get(query_text)
        if query is None:
            try:
                query = Query(self.language, query_text)
            except QueryError as e:
                raise QuerySyntaxError(f"invalid query: {e}") from e
            self._compiled[query_text] = query
        return query

    def query(self, query_text: str, node: Node) -> List[NodeMatch]:
        """Evaluate a query under node, in document order.

        Each capture name maps to the first node it bound in the match;
        ``NodeMatch.node`` is the outermost captured node.
        """
        cursor = QueryCursor(self.compile(query_text))

        results = []
        for _, captures_dict in cursor.matches(node):
            captures = {name: nodes[0] for name, nodes in captures_dict.items() if nodes}
            if not captures:
                continue
            outermost = min(captures.values(), key=lambda n: (n.start_byte, -n.end_byte))
            results.append(NodeMatch(node=outermost, captures=captures))
        return results

    def captures_named(self, query_text: str, node: Node, capture_name: str) -> List[Node]:
        """All nodes bound to one capture name, across every match"""
        return [m.captures[capture_name] for m in self.query(query_text, node) if capture_name in m.captures]
