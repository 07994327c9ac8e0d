from io import StringIO

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from syft_access_tree.engine.access import PermissionAccess
from syft_access_tree.engine.graph import (
    FolderNode,
    GraphModel,
    RoleNode,
    ShowMoreNode,
)

ACCESS_STYLES = {
    PermissionAccess.FULL: "green",
    PermissionAccess.PARTIAL: "yellow",
    PermissionAccess.NONE: "red",
}

ACCESS_MARKERS = {
    PermissionAccess.FULL: "✓",
    PermissionAccess.PARTIAL: "~",
    PermissionAccess.NONE: "✗",
}


def _role_label(node: RoleNode) -> str:
    return (
        f"[bold]{escape(node.subject.value)}[/] "
        f"[dim]in {escape(node.environment_name)}[/]"
    )


def _folder_label(node: FolderNode) -> str:
    style = ACCESS_STYLES[node.access]
    actions = " ".join(
        f"[{ACCESS_STYLES[access]}]{ACCESS_MARKERS[access]} {escape(action)}[/]"
        for action, access in node.actions.items()
    )
    name = node.name or node.path
    return (
        f"[bold {style}]{escape(name)}[/] [dim]{escape(node.path)}[/]  "
        f"[{style}]{node.access.value}[/]  {actions}"
    )


def _show_more_label(node: ShowMoreNode) -> str:
    return (
        f"[italic cyan]… show {node.remaining} more[/] "
        f"[dim]({escape(node.parent_id)})[/]"
    )


def build_rich_tree(graph: GraphModel) -> Tree | None:
    """Turn the node/edge model back into a nested rich Tree rooted at the role."""
    role = graph.role_node
    if role is None:
        return None

    nodes = {node.id: node for node in graph.nodes}
    children: dict[str, list[str]] = {}
    for edge in graph.edges:
        children.setdefault(edge.source, []).append(edge.target)

    tree = Tree(_role_label(role), guide_style="dim")
    stack = [(role.id, tree)]
    seen = {role.id}
    while stack:
        node_id, branch = stack.pop()
        pending = []
        for child_id in children.get(node_id, []):
            child = nodes.get(child_id)
            if child is None or child_id in seen:
                continue
            seen.add(child_id)
            if isinstance(child, FolderNode):
                pending.append((child_id, branch.add(_folder_label(child))))
            elif isinstance(child, ShowMoreNode):
                branch.add(_show_more_label(child))
        stack.extend(reversed(pending))
    return tree


def render_access_tree(graph: GraphModel, width: int = 120) -> str:
    console = Console(
        file=StringIO(),
        record=True,
        force_jupyter=False,
        width=width,
    )
    tree = build_rich_tree(graph)
    if tree is None:
        console.print("[dim]No folders to show[/]")
    else:
        console.print(tree)
    return console.export_text()
