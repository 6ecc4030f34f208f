from __future__ import annotations
import logging
import networkx as nx
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from decimal_parser import parse as parse_decimal
from errors import ExpressionError
from rational import Rational

logger = logging.getLogger(__name__)

# Expression DAG over exact rationals, stored in a networkx.DiGraph.
# Edges run child -> parent, so a topological order evaluates operands first.
@dataclass
class Node:
	type: str  # 'VAR','CONST','OP'
	symbol: str
	value: Optional[Rational] = None
	op: Optional[str] = None
	is_unary: bool = False
	children: List[str] = field(default_factory=list)  # ordered child node ids

class EDAG:
	def __init__(self) -> None:
		self.g = nx.DiGraph()
		self.root: Optional[str] = None
		self._id = 0
	def _nid(self) -> str:
		self._id += 1
		return f"n{self._id}"
	def add_node(self, node: Node) -> str:
		nid = self._nid()
		self.g.add_node(nid, data=node)
		return nid
	def add_op(self, op: str, children: List[str], is_unary: bool=False) -> str:
		nid = self.add_node(Node('OP', op, op=op, is_unary=is_unary, children=children))
		for c in children:
			self.g.add_edge(c, nid)
		return nid
	def node(self, nid: str) -> Node:
		return self.g.nodes[nid]['data']

	def _norm(self, name: str, v: Any) -> Rational:
		if isinstance(v, Rational):
			return v
		if isinstance(v, int):
			return Rational.from_integer(v)
		if isinstance(v, str):
			return parse_decimal(v)
		raise ExpressionError(f"Variable '{name}' must be a Rational, int or decimal literal")
	def _apply(self, data: Node, values: List[Rational]) -> Rational:
		if data.is_unary and data.op == '-':
			return -values[0]
		a, b = values
		if data.op == '+': return a + b
		if data.op == '-': return a - b
		if data.op == '*': return a * b
		if data.op == '/': return a / b
		if data.op == '^':
			if not b.is_int():
				raise ExpressionError(f"Exponent must be an integer, got {b}")
			return a ** b.to_int()
		raise ExpressionError(f"Unknown op {data.op}")
	def eval(self, env: Dict[str, Any] | None = None) -> Rational:
		if self.root is None:
			raise ExpressionError('no expression parsed')
		env = env or {}
		results: Dict[str, Rational] = {}
		# only the part of the graph feeding the root matters
		needed = nx.ancestors(self.g, self.root) | {self.root}
		order = [nid for nid in nx.topological_sort(self.g) if nid in needed]
		logger.debug("evaluating %d nodes", len(order))
		for nid in order:
			data = self.node(nid)
			if data.type == 'CONST':
				results[nid] = data.value
			elif data.type == 'VAR':
				if data.symbol not in env:
					raise ExpressionError(f"Variable '{data.symbol}' not in env")
				results[nid] = self._norm(data.symbol, env[data.symbol])
			elif data.type == 'OP':
				results[nid] = self._apply(data, [results[c] for c in data.children])
			else:
				raise ExpressionError('Unknown node type')
		return results[self.root]
