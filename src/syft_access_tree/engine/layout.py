from dataclasses import dataclass
from typing import Protocol

from syft_access_tree.engine.graph import GraphModel, Position


class LayoutAdapter(Protocol):
    def __call__(self, graph: GraphModel) -> GraphModel: ...


@dataclass(frozen=True)
class LayeredLayout:
    """Top-down tree layout: one rank per depth, parents centered over
    their children, leaves laid out left to right in edge order."""

    node_width: float = 220
    node_height: float = 60
    rank_sep: float = 100
    node_sep: float = 40

    def __call__(self, graph: GraphModel) -> GraphModel:
        node_ids = graph.node_ids()
        known = set(node_ids)

        children: dict[str, list[str]] = {node_id: [] for node_id in node_ids}
        parent_of: dict[str, str] = {}
        for edge in graph.edges:
            if edge.source not in known or edge.target not in known:
                continue
            if edge.target in parent_of or edge.target == edge.source:
                continue
            parent_of[edge.target] = edge.source
            children[edge.source].append(edge.target)

        positions: dict[str, Position] = {}
        next_x = 0.0

        def place(root_id: str) -> None:
            nonlocal next_x
            # frames: node id, depth, next child index, x of placed children
            positions[root_id] = Position(x=0.0, y=0.0)
            stack: list[tuple[str, int, int, list[float]]] = [(root_id, 0, 0, [])]
            while stack:
                node_id, depth, index, placed = stack[-1]
                siblings = children[node_id]
                while index < len(siblings) and siblings[index] in positions:
                    index += 1
                if index < len(siblings):
                    child = siblings[index]
                    stack[-1] = (node_id, depth, index + 1, placed)
                    # mark before descending so cycles terminate
                    positions[child] = Position(x=0.0, y=0.0)
                    stack.append((child, depth + 1, 0, []))
                    continue

                stack.pop()
                if placed:
                    x = (placed[0] + placed[-1]) / 2
                else:
                    x = next_x
                    next_x += self.node_width + self.node_sep
                positions[node_id] = Position(
                    x=x, y=depth * (self.node_height + self.rank_sep)
                )
                if stack:
                    stack[-1][3].append(x)

        for node_id in node_ids:
            if node_id not in positions and node_id not in parent_of:
                place(node_id)
        for node_id in node_ids:
            if node_id not in positions:
                place(node_id)

        nodes = [
            node.model_copy(update={"position": positions[node.id]})
            for node in graph.nodes
        ]
        return GraphModel(nodes=nodes, edges=list(graph.edges))


def layered_layout(graph: GraphModel, **spacing: float) -> GraphModel:
    return LayeredLayout(**spacing)(graph)
