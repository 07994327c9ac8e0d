from dataclasses import dataclass
from typing import Annotated, Literal, Mapping, Union

from pydantic import BaseModel, Field

from syft_access_tree.engine.access import FolderAccess, PermissionAccess
from syft_access_tree.engine.disclosure import LevelState
from syft_access_tree.engine.grouping import ROOT_LEVEL, ParentKey
from syft_access_tree.engine.subjects import PermissionSubject
from syft_access_tree.spec.folder import Folder
from syft_access_tree.spec.policy import PermissionRule


class Position(BaseModel):
    x: float
    y: float


class RoleNode(BaseModel):
    type: Literal["role"] = "role"
    id: str
    subject: PermissionSubject
    environment: str
    environment_name: str
    position: Position | None = None


class FolderNode(BaseModel):
    type: Literal["folder"] = "folder"
    id: str
    path: str
    name: str
    parent_id: str | None = None
    actions: dict[str, PermissionAccess] = {}
    access: PermissionAccess = PermissionAccess.NONE
    rules: dict[str, list[PermissionRule]] = {}
    position: Position | None = None


class ShowMoreNode(BaseModel):
    type: Literal["show_more"] = "show_more"
    id: str
    parent_id: str
    remaining: int
    position: Position | None = None


GraphNode = Annotated[
    Union[RoleNode, FolderNode, ShowMoreNode], Field(discriminator="type")
]


class GraphEdge(BaseModel):
    id: str
    source: str
    target: str
    access: PermissionAccess
    hidden: bool = False


class GraphModel(BaseModel):
    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []

    @property
    def role_node(self) -> RoleNode | None:
        for node in self.nodes:
            if isinstance(node, RoleNode):
                return node
        return None

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def edge_ids(self) -> list[str]:
        return [edge.id for edge in self.edges]

    def is_empty(self) -> bool:
        return not self.nodes


@dataclass(frozen=True)
class RoleInfo:
    subject: PermissionSubject
    environment: str
    environment_name: str


def create_role_node(role: RoleInfo) -> RoleNode:
    subject = PermissionSubject(role.subject)
    return RoleNode(
        id=f"role-{subject.value}-{role.environment}",
        subject=subject,
        environment=role.environment,
        environment_name=role.environment_name,
    )


def create_folder_node(folder: Folder, access: FolderAccess | None) -> FolderNode:
    if access is None:
        return FolderNode(
            id=folder.id, path=folder.path, name=folder.name, parent_id=folder.parent_id
        )
    return FolderNode(
        id=folder.id,
        path=folder.path,
        name=folder.name,
        parent_id=folder.parent_id,
        actions=dict(access.actions),
        access=access.aggregated,
        rules={action: list(rules) for action, rules in access.rules.items()},
    )


def create_show_more_node(parent_id: str, remaining: int) -> ShowMoreNode:
    return ShowMoreNode(
        id=f"show-more-{parent_id}", parent_id=parent_id, remaining=remaining
    )


def create_base_edge(
    source: str, target: str, access: PermissionAccess, hidden: bool = False
) -> GraphEdge:
    return GraphEdge(
        id=f"e-{source}-{target}",
        source=source,
        target=target,
        access=access,
        hidden=hidden,
    )


def build_graph(
    role: RoleInfo,
    visible_folders: list[Folder],
    access_by_folder: Mapping[str, FolderAccess],
    levels: Mapping[ParentKey, LevelState],
) -> GraphModel:
    """Assemble the role node, folder nodes, show-more nodes and their edges.

    Identifiers only depend on folder and parent ids, so equal inputs give
    equal graphs. Edges whose parent is not a built node hang off the role
    node instead.
    """
    role_node = create_role_node(role)
    folder_nodes = [
        create_folder_node(folder, access_by_folder.get(folder.id))
        for folder in visible_folders
    ]
    built_ids = {node.id for node in folder_nodes}

    def _source_for(parent_id: str | None) -> str:
        if parent_id is not None and parent_id in built_ids:
            return parent_id
        return role_node.id

    edges = [
        create_base_edge(
            source=_source_for(node.parent_id), target=node.id, access=node.access
        )
        for node in folder_nodes
    ]

    show_more_nodes = []
    for parent_key, level in levels.items():
        if parent_key is ROOT_LEVEL or not level.has_more:
            continue
        show_more = create_show_more_node(parent_key, level.remaining)
        show_more_nodes.append(show_more)
        edges.append(
            create_base_edge(
                source=_source_for(parent_key),
                target=show_more.id,
                access=PermissionAccess.FULL,
                hidden=True,
            )
        )

    return GraphModel(nodes=[role_node, *folder_nodes, *show_more_nodes], edges=edges)
